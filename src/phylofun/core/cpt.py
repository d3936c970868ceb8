"""
Conditional probability tables over composite annotations.

A conditional probability table (CPT) holds, for one branch length, the
probability of every composite annotation at a parent node mutating into
every composite annotation at the child node. Tables for all unique branch
lengths of a tree are produced in one batch by
:func:`conditional_probability_tables`.
"""

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Sequence

import numpy as np
import pandas as pd

from phylofun.core.annotations import composite_members
from phylofun.core.errors import IndexMismatchError
from phylofun.core.mutation_probability import mutation_probability
from phylofun.core.mutation_tables import MutationProbabilityCatalogue

logger = logging.getLogger(__name__)


@dataclass
class CPTSettings:
    """Settings for batch CPT computation."""

    distance_column_index: Optional[int] = None
    """Position of the bucket distance in each catalogue selector. None uses the catalogue's own."""

    n_workers: Optional[int] = None
    """Worker processes across branch lengths. None or 1 runs serially."""


def branch_length_key(branch_length: float) -> str:
    """
    Canonical string form of a branch length.

    Shortest decimal that round-trips, trailing zeros removed.

    Examples:
        >>> branch_length_key(0.3)
        '0.3'
        >>> branch_length_key(1.0)
        '1'
    """
    return np.format_float_positional(float(branch_length), trim="-")


def conditional_probability_table(
    branch_length: float,
    composites: Sequence[Iterable[Any]],
    labels: Sequence[str],
    catalogue: MutationProbabilityCatalogue,
    distance_column_index: Optional[int] = None,
) -> pd.DataFrame:
    """
    Build the N×N CPT for one branch length.

    Entry ``(i, j)`` is the probability of mutating into composite ``j``,
    i.e. ``mutation_probability(composites[j], branch_length, ...)``. It
    does not depend on the origin composite ``i``, and the diagonal is not
    treated specially.

    Args:
        branch_length: Branch length of the tree edge
        composites: Composite annotations (rows and columns, in order)
        labels: Row/column names, parallel to ``composites``
        catalogue: Mutation probability matrices by distance bucket
        distance_column_index: Distance position in each bucket selector

    Returns:
        DataFrame indexed and columned by ``labels``

    Raises:
        IndexMismatchError: If ``labels`` and ``composites`` differ in length
    """
    composites = [composite_members(c) for c in composites]
    labels = list(labels)
    if len(labels) != len(composites):
        raise IndexMismatchError(
            f"Got {len(labels)} labels for {len(composites)} composite annotations"
        )

    n = len(composites)
    column_probs = np.array(
        [
            mutation_probability(c, branch_length, catalogue, distance_column_index)
            for c in composites
        ],
        dtype=float,
    )
    values = np.tile(column_probs, (n, 1))

    return pd.DataFrame(values, index=pd.Index(labels), columns=pd.Index(labels))


def conditional_probability_tables(
    branch_lengths: Iterable[float],
    composites: Sequence[Iterable[Any]],
    labels: Sequence[str],
    catalogue: MutationProbabilityCatalogue,
    distance_column_index: Optional[int] = None,
    n_workers: Optional[int] = None,
) -> Dict[str, pd.DataFrame]:
    """
    Build one CPT per unique branch length.

    Repeated branch lengths are computed once. Any failure aborts the whole
    batch; no partial mapping is returned.

    Args:
        branch_lengths: Branch lengths observed in a tree
        composites: Composite annotations
        labels: Row/column names, parallel to ``composites``
        catalogue: Mutation probability matrices by distance bucket
        distance_column_index: Distance position in each bucket selector
        n_workers: Number of worker processes; None or 1 runs serially

    Returns:
        ``{branch_length_key(b): table}`` in first-occurrence order
    """
    unique: Dict[str, float] = {}
    for b in branch_lengths:
        unique.setdefault(branch_length_key(b), float(b))

    composites = [composite_members(c) for c in composites]
    labels = list(labels)
    logger.info(
        f"Computing {len(unique)} conditional probability tables "
        f"over {len(composites)} composite annotations"
    )

    if n_workers is None or n_workers <= 1 or len(unique) <= 1:
        tables = {}
        for key, b in unique.items():
            logger.debug(f"Branch length {key}")
            tables[key] = conditional_probability_table(
                b, composites, labels, catalogue, distance_column_index
            )
        return tables

    computed: Dict[str, pd.DataFrame] = {}
    with ProcessPoolExecutor(max_workers=n_workers) as executor:
        future_to_key = {
            executor.submit(
                conditional_probability_table,
                b,
                composites,
                labels,
                catalogue,
                distance_column_index,
            ): key
            for key, b in unique.items()
        }
        for future in as_completed(future_to_key):
            key = future_to_key[future]
            computed[key] = future.result()
            logger.debug(f"Branch length {key} done")

    return {key: computed[key] for key in unique}


def tables_from_settings(
    branch_lengths: Iterable[float],
    composites: Sequence[Iterable[Any]],
    labels: Sequence[str],
    catalogue: MutationProbabilityCatalogue,
    settings: Optional[CPTSettings] = None,
) -> Dict[str, pd.DataFrame]:
    """Run :func:`conditional_probability_tables` with a ``CPTSettings``."""
    settings = settings or CPTSettings()
    return conditional_probability_tables(
        branch_lengths,
        composites,
        labels,
        catalogue,
        distance_column_index=settings.distance_column_index,
        n_workers=settings.n_workers,
    )
