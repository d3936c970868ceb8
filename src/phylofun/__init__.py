"""
PHYLOFUN: annotation mutation probabilities along phylogenetic trees

Builds conditional probability tables of composite annotation mutation
for the branch lengths of a tree.
"""

__version__ = "0.1.0"

from phylofun.core import (
    PhyloFunError,
    LookupFailure,
    EmptyAnnotationError,
    MissingEntryError,
    IndexMismatchError,
    BoundsError,
    AnnotationVocabulary,
    stringify_annotation,
    find_matching_row,
    MutationProbabilityMatrix,
    MutationProbabilityCatalogue,
    mutation_probability,
    CPTSettings,
    conditional_probability_table,
    conditional_probability_tables,
    ConditionalProbabilityTableCache,
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
    "AnnotationVocabulary",
    "stringify_annotation",
    "find_matching_row",
    "MutationProbabilityMatrix",
    "MutationProbabilityCatalogue",
    "mutation_probability",
    "CPTSettings",
    "conditional_probability_table",
    "conditional_probability_tables",
    "ConditionalProbabilityTableCache",
    "unique_protein_pairs",
    "deduplicate_pairs",
    "__version__",
]
