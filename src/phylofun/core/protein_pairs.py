"""Partner extraction from protein pair tables."""

from typing import Iterable, List, Sequence, Tuple, Union

import pandas as pd

from phylofun.core.errors import BoundsError

ProteinPair = Tuple[str, str]


def _rows(table: Union[pd.DataFrame, Sequence[Sequence[str]]]) -> Iterable[Sequence[str]]:
    if isinstance(table, pd.DataFrame):
        return table.itertuples(index=False, name=None)
    return table


def unique_protein_pairs(
    table: Union[pd.DataFrame, Sequence[Sequence[str]]],
    first_member_column_index: int,
    second_member_column_index: int,
    accession: str,
) -> List[ProteinPair]:
    """
    Pairs ``(accession, partner)`` for rows listing ``accession`` first.

    Only the first member column is matched against ``accession``; rows in
    which it appears solely in the second column are ignored. Call again
    with the column indices swapped to cover both orientations. Self pairs
    and rows with a missing partner cell are dropped; repeated partners are
    kept in row order.

    Args:
        table: Protein pair rows (list of rows or DataFrame, positional columns)
        first_member_column_index: Column matched against ``accession``
        second_member_column_index: Column holding the partner
        accession: Protein accession to look up

    Returns:
        List of ``(accession, partner)`` tuples

    Raises:
        BoundsError: If a column index is outside a row's columns
    """
    pairs = []
    for row_index, row in enumerate(_rows(table)):
        for col in (first_member_column_index, second_member_column_index):
            if col < 0 or col >= len(row):
                raise BoundsError(
                    f"Column index {col} out of range for row {row_index} "
                    f"with {len(row)} columns"
                )
        if row[first_member_column_index] != accession:
            continue
        partner = row[second_member_column_index]
        if pd.isna(partner):
            continue
        if partner != accession:
            pairs.append((accession, partner))
    return pairs


def deduplicate_pairs(pairs: Iterable[ProteinPair]) -> List[ProteinPair]:
    """Drop repeats of unordered pairs, keeping the first occurrence."""
    seen = set()
    unique = []
    for a, b in pairs:
        key = frozenset((a, b))
        if key in seen:
            continue
        seen.add(key)
        unique.append((a, b))
    return unique
