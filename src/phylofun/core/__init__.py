"""Core CPT engine: bucket lookup, mutation probabilities and tables."""

from phylofun.core.errors import (
    PhyloFunError,
    LookupFailure,
    EmptyAnnotationError,
    MissingEntryError,
    IndexMismatchError,
    BoundsError,
)
from phylofun.core.annotations import (
    AnnotationId,
    AnnotationVocabulary,
    stringify_annotation,
    validate_composite,
    composite_members,
)
from phylofun.core.row_matching import find_matching_row
from phylofun.core.mutation_tables import (
    MutationProbabilityMatrix,
    MutationProbabilityCatalogue,
)
from phylofun.core.mutation_probability import mutation_probability
from phylofun.core.cpt import (
    CPTSettings,
    branch_length_key,
    conditional_probability_table,
    conditional_probability_tables,
    tables_from_settings,
)
from phylofun.core.table_cache import ConditionalProbabilityTableCache
from phylofun.core.protein_pairs import (
    ProteinPair,
    unique_protein_pairs,
    deduplicate_pairs,
)

__all__ = [
    "PhyloFunError",
    "LookupFailure",
    "EmptyAnnotationError",
    "MissingEntryError",
    "IndexMismatchError",
    "BoundsError",
    "AnnotationId",
    "AnnotationVocabulary",
    "stringify_annotation",
    "validate_composite",
    "composite_members",
    "find_matching_row",
    "MutationProbabilityMatrix",
    "MutationProbabilityCatalogue",
    "mutation_probability",
    "CPTSettings",
    "branch_length_key",
    "conditional_probability_table",
    "conditional_probability_tables",
    "tables_from_settings",
    "ConditionalProbabilityTableCache",
    "ProteinPair",
    "unique_protein_pairs",
    "deduplicate_pairs",
]
