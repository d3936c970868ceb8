import numpy as np
import pandas as pd
import pytest

from phylofun.core import (
    CPTSettings,
    IndexMismatchError,
    LookupFailure,
    MutationProbabilityCatalogue,
    MutationProbabilityMatrix,
    branch_length_key,
    conditional_probability_table,
    conditional_probability_tables,
    mutation_probability,
    tables_from_settings,
)

COMPOSITES = [["GO:1"], ["GO:2"], ["GO:1", "GO:2"]]
LABELS = ["GO:1", "GO:2", "GO:1,GO:2"]


def test_cpt_shape_and_labels(catalogue):
    table = conditional_probability_table(0.3, COMPOSITES, LABELS, catalogue)
    assert table.shape == (3, 3)
    assert list(table.index) == LABELS
    assert list(table.columns) == LABELS


def test_cpt_entries_depend_only_on_target_column(catalogue):
    table = conditional_probability_table(1.2, COMPOSITES, LABELS, catalogue)
    for j, composite in enumerate(COMPOSITES):
        expected = mutation_probability(composite, 1.2, catalogue)
        for i in range(len(COMPOSITES)):
            assert table.iloc[i, j] == pytest.approx(expected)


def test_cpt_two_annotation_example():
    """Column for Y takes the largest probability landing on Y."""
    m = MutationProbabilityMatrix.from_entries(
        0.5, {("X", "X"): 0.1, ("X", "Y"): 0.9, ("Y", "X"): 0.2, ("Y", "Y"): 0.3}
    )
    catalogue = MutationProbabilityCatalogue(matrices=[m])
    table = conditional_probability_table(0.3, [["X"], ["Y"]], ["compX", "compY"], catalogue)
    expected = pd.DataFrame(
        [[0.2, 0.9], [0.2, 0.9]], index=["compX", "compY"], columns=["compX", "compY"]
    )
    pd.testing.assert_frame_equal(table, expected)


def test_cpt_keeps_duplicate_labels(catalogue):
    table = conditional_probability_table(0.3, [["GO:1"], ["GO:1"]], ["a", "a"], catalogue)
    assert table.shape == (2, 2)
    assert list(table.index) == ["a", "a"]


def test_cpt_empty_annotation_list(catalogue):
    table = conditional_probability_table(0.3, [], [], catalogue)
    assert table.shape == (0, 0)


def test_cpt_label_mismatch(catalogue):
    with pytest.raises(IndexMismatchError):
        conditional_probability_table(0.3, COMPOSITES, LABELS[:2], catalogue)


def test_branch_length_key():
    assert branch_length_key(0.3) == "0.3"
    assert branch_length_key(1.0) == "1"
    assert branch_length_key(2) == "2"
    assert branch_length_key(0.125) == "0.125"


def test_cpts_one_table_per_unique_branch_length(catalogue):
    tables = conditional_probability_tables([0.3, 1.2], COMPOSITES, LABELS, catalogue)
    assert list(tables) == ["0.3", "1.2"]
    for key, b in (("0.3", 0.3), ("1.2", 1.2)):
        pd.testing.assert_frame_equal(
            tables[key], conditional_probability_table(b, COMPOSITES, LABELS, catalogue)
        )


def test_cpts_repeated_branch_lengths(catalogue):
    tables = conditional_probability_tables([0.3, 1.2, 0.3, 0.30], COMPOSITES, LABELS, catalogue)
    assert list(tables) == ["0.3", "1.2"]


def test_cpts_fail_fast(catalogue):
    with pytest.raises(LookupFailure):
        conditional_probability_tables([0.3, 5.0], COMPOSITES, LABELS, catalogue)


def test_cpts_parallel_matches_serial(catalogue):
    lengths = [0.1, 0.4, 0.9, 1.7]
    serial = conditional_probability_tables(lengths, COMPOSITES, LABELS, catalogue)
    parallel = conditional_probability_tables(
        lengths, COMPOSITES, LABELS, catalogue, n_workers=2
    )
    assert list(parallel) == list(serial)
    for key in serial:
        pd.testing.assert_frame_equal(parallel[key], serial[key])


def test_tables_from_settings_uses_distance_column(vocabulary):
    p = np.full((3, 3), 0.25)
    catalogue = MutationProbabilityCatalogue(
        matrices=[MutationProbabilityMatrix(np.array([0.0, 1.0]), p, vocabulary)],
        distance_column_index=1,
    )
    tables = tables_from_settings([0.5], [["GO:1"]], ["GO:1"], catalogue)
    assert tables["0.5"].iloc[0, 0] == pytest.approx(0.25)

    with pytest.raises(LookupFailure):
        tables_from_settings(
            [0.5], [["GO:1"]], ["GO:1"], catalogue,
            settings=CPTSettings(distance_column_index=0),
        )


def test_cpts_parallel_fail_fast(catalogue):
    with pytest.raises(LookupFailure):
        conditional_probability_tables(
            [0.3, 1.2, 5.0], COMPOSITES, LABELS, catalogue, n_workers=2
        )


def test_default_settings_use_catalogue_distance_column(vocabulary):
    p = np.full((3, 3), 0.25)
    catalogue = MutationProbabilityCatalogue(
        matrices=[MutationProbabilityMatrix(np.array([0.0, 1.0]), p, vocabulary)],
        distance_column_index=1,
    )
    tables = tables_from_settings(
        [0.5], [["GO:1"]], ["GO:1"], catalogue, settings=CPTSettings(n_workers=1)
    )
    assert tables["0.5"].iloc[0, 0] == pytest.approx(0.25)


def test_cpt_rejects_bare_string_composite(catalogue):
    with pytest.raises(TypeError):
        conditional_probability_table(0.3, ["GO:1"], ["GO:1"], catalogue)
    with pytest.raises(TypeError):
        conditional_probability_tables([0.3], ["GO:1"], ["GO:1"], catalogue)
