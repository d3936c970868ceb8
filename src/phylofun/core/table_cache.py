"""
Memoized conditional probability tables for one annotation set.

Trees reuse a handful of branch lengths many times. The cache computes a
table the first time a branch length is requested and serves it from
memory afterwards.
"""

from functools import lru_cache
from typing import Any, Dict, Iterable, Optional, Sequence

import pandas as pd

from phylofun.core.annotations import composite_members
from phylofun.core.cpt import branch_length_key, conditional_probability_table
from phylofun.core.errors import IndexMismatchError
from phylofun.core.mutation_tables import MutationProbabilityCatalogue


class ConditionalProbabilityTableCache:
    """
    Per-branch-length CPT cache bound to a catalogue and composite list.

    Branch lengths are keyed by :func:`branch_length_key`, so ``0.3`` and
    ``0.30`` share one entry.

    Args:
        catalogue: Mutation probability matrices by distance bucket
        composites: Composite annotations
        labels: Row/column names, parallel to ``composites``
        distance_column_index: Distance position in each bucket selector
        maxsize: Maximum number of cached tables (None for unbounded)
    """

    def __init__(
        self,
        catalogue: MutationProbabilityCatalogue,
        composites: Sequence[Iterable[Any]],
        labels: Sequence[str],
        distance_column_index: Optional[int] = None,
        maxsize: Optional[int] = None,
    ):
        self.catalogue = catalogue
        self.composites = [composite_members(c) for c in composites]
        self.labels = list(labels)
        if len(self.labels) != len(self.composites):
            raise IndexMismatchError(
                f"Got {len(self.labels)} labels for {len(self.composites)} composite annotations"
            )
        self.distance_column_index = distance_column_index
        self._compute = lru_cache(maxsize=maxsize)(self._compute_table)

    def _compute_table(self, key: str) -> pd.DataFrame:
        return conditional_probability_table(
            float(key),
            self.composites,
            self.labels,
            self.catalogue,
            self.distance_column_index,
        )

    def table(self, branch_length: float) -> pd.DataFrame:
        """CPT for ``branch_length``, computed on first request."""
        return self._compute(branch_length_key(branch_length))

    def tables(self, branch_lengths: Iterable[float]) -> Dict[str, pd.DataFrame]:
        """CPTs for several branch lengths keyed by their canonical string."""
        result = {}
        for b in branch_lengths:
            key = branch_length_key(b)
            if key not in result:
                result[key] = self._compute(key)
        return result

    def cache_info(self):
        """Cache statistics (hits, misses, maxsize, currsize)."""
        return self._compute.cache_info()

    def clear(self) -> None:
        """Drop every cached table."""
        self._compute.cache_clear()

    def __repr__(self) -> str:
        info = self.cache_info()
        return (
            f"ConditionalProbabilityTableCache(annotations={len(self.composites)}, "
            f"cached={info.currsize})"
        )
