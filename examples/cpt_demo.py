"""
Demo: Conditional Probability Tables

Builds a two-bucket GO term catalogue and prints the CPTs for the branch
lengths of a small tree.
"""

import sys
sys.path.insert(0, 'src')

from phylofun import (
    ConditionalProbabilityTableCache,
    MutationProbabilityCatalogue,
    MutationProbabilityMatrix,
    AnnotationVocabulary,
    stringify_annotation,
    unique_protein_pairs,
)


def main():
    print("=" * 70)
    print("Conditional Probability Table Demo")
    print("=" * 70)

    vocab = AnnotationVocabulary.from_labels(["GO:0003677", "GO:0005488", "GO:0016301"])
    near = MutationProbabilityMatrix.from_entries(0.5, {
        ("GO:0003677", "GO:0003677"): 0.05,
        ("GO:0003677", "GO:0005488"): 0.30,
        ("GO:0005488", "GO:0016301"): 0.10,
        ("GO:0016301", "GO:0003677"): 0.15,
    }, vocab)
    far = MutationProbabilityMatrix.from_entries(3.0, {
        ("GO:0003677", "GO:0003677"): 0.40,
        ("GO:0003677", "GO:0005488"): 0.70,
        ("GO:0005488", "GO:0016301"): 0.55,
        ("GO:0016301", "GO:0003677"): 0.60,
    }, vocab)
    catalogue = MutationProbabilityCatalogue(matrices=[near, far])
    print(f"\n{catalogue}")

    # Candidate annotations come from the orthologs of the query protein
    pairs_table = [
        ["Q9XYZ1", "Q9XYZ1"],
        ["Q9XYZ1", "P12345"],
        ["Q9XYZ1", "O00001"],
    ]
    print("\nOrthologs of Q9XYZ1:")
    for query, partner in unique_protein_pairs(pairs_table, 0, 1, "Q9XYZ1"):
        print(f"  {query} -> {partner}")

    composites = [["GO:0003677"], ["GO:0005488", "GO:0016301"]]
    labels = [stringify_annotation(c) for c in composites]

    cache = ConditionalProbabilityTableCache(catalogue, composites, labels)
    edge_lengths = [0.12, 0.4, 0.12, 2.1, 0.4]
    for key, table in cache.tables(edge_lengths).items():
        print(f"\nBranch length {key}:")
        print(table.round(3).to_string())

    print(f"\n{cache.cache_info()}")


if __name__ == "__main__":
    main()
