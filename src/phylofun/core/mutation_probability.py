"""Per-composite mutation probability for a branch length."""

from typing import Any, Iterable, Optional

from phylofun.core.annotations import validate_composite
from phylofun.core.mutation_tables import MutationProbabilityCatalogue


def mutation_probability(
    composite: Iterable[Any],
    branch_length: float,
    catalogue: MutationProbabilityCatalogue,
    distance_column_index: Optional[int] = None,
) -> float:
    """
    Maximum mutation probability over the atomic members of a composite.

    The bucket serving ``branch_length`` is chosen with
    :func:`find_matching_row`. Within it, each atomic member contributes
    the largest probability of any atomic annotation mutating into it;
    the composite mutates at the rate of its most mutation-prone member.

    Args:
        composite: Atomic annotations making up one composite annotation
        branch_length: Non-negative branch length
        catalogue: Mutation probability matrices by distance bucket
        distance_column_index: Distance position in each bucket selector
            (defaults to the catalogue's own)

    Returns:
        Mutation probability in [0, 1]

    Raises:
        ValueError: If ``branch_length`` is negative
        EmptyAnnotationError: If ``composite`` is empty
        LookupFailure: If no bucket covers ``branch_length``
        MissingEntryError: If a member has no entry in the selected bucket
    """
    if branch_length < 0:
        raise ValueError(f"Branch length must be non-negative, got {branch_length}")
    members = validate_composite(composite)

    matrix = catalogue.matrix_for(branch_length, distance_column_index)
    return max(matrix.max_incoming(member) for member in members)
