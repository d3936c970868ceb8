"""First-match row lookup used to pick distance buckets."""

from typing import Sequence, Union

import numpy as np

from phylofun.core.errors import BoundsError, LookupFailure

Table = Union[np.ndarray, Sequence[Sequence[float]]]


def find_matching_row(table: Table, value: float, column_index: int) -> int:
    """
    Find the first row whose value in ``column_index`` is >= ``value``.

    Rows are scanned in order; catalogues are small, so a linear scan is
    all that is needed.

    Args:
        table: Rows of numeric values (list of rows or 2-D array)
        value: Target value
        column_index: Column compared against ``value``

    Returns:
        0-based index of the first qualifying row

    Raises:
        BoundsError: If ``column_index`` is outside a row's columns
        LookupFailure: If no row qualifies
    """
    for row_index, row in enumerate(table):
        if column_index < 0 or column_index >= len(row):
            raise BoundsError(
                f"Column index {column_index} out of range for row {row_index} "
                f"with {len(row)} columns"
            )
        if row[column_index] >= value:
            return row_index

    raise LookupFailure(
        f"No row has a value >= {value} in column {column_index}"
    )
