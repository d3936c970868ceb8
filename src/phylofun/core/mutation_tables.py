"""Mutation probability matrices and their distance-bucket catalogue."""

from typing import Any, Dict, List, Mapping, Optional, Tuple
from dataclasses import dataclass, field
import numpy as np
import pandas as pd

from phylofun.core.annotations import AnnotationId, AnnotationVocabulary
from phylofun.core.errors import BoundsError, MissingEntryError
from phylofun.core.row_matching import find_matching_row


@dataclass
class MutationProbabilityMatrix:
    """
    Atomic annotation mutation probabilities for one distance bucket.

    Attributes:
        selector: Bucket metadata row; the bucket distance sits at the
            catalogue's distance column index
        probabilities: K×K array, ``probabilities[a, b]`` is the probability
            of atomic annotation ``a`` mutating into ``b``. NaN marks a
            missing entry.
        vocabulary: Atomic annotations indexing rows and columns
    """

    selector: np.ndarray
    probabilities: np.ndarray
    vocabulary: AnnotationVocabulary

    def __post_init__(self):
        """Validate shape and probability range."""
        self.selector = np.atleast_1d(np.asarray(self.selector, dtype=float))
        self.probabilities = np.asarray(self.probabilities, dtype=float)

        k = len(self.vocabulary)
        if self.probabilities.shape != (k, k):
            raise ValueError(
                f"Probability matrix shape {self.probabilities.shape} does not "
                f"match vocabulary size {k}"
            )
        present = self.probabilities[~np.isnan(self.probabilities)]
        if np.any((present < 0.0) | (present > 1.0)):
            raise ValueError("Mutation probabilities must lie in [0, 1]")

    @classmethod
    def from_entries(
        cls,
        distance: float,
        entries: Mapping[Tuple[Any, Any], float],
        vocabulary: Optional[AnnotationVocabulary] = None,
    ) -> "MutationProbabilityMatrix":
        """
        Build a matrix from ``{(from, to): probability}`` entries.

        Pairs absent from ``entries`` are stored as missing (NaN).

        Args:
            distance: Bucket distance, stored as a one-column selector
            entries: Mutation probabilities keyed by atomic annotation pair
            vocabulary: Optional vocabulary; inferred from ``entries``
                (first-seen order) when omitted

        Returns:
            MutationProbabilityMatrix
        """
        if vocabulary is None:
            vocabulary = AnnotationVocabulary.from_labels(
                label for pair in entries for label in pair
            )

        k = len(vocabulary)
        probabilities = np.full((k, k), np.nan)
        for (source, target), p in entries.items():
            probabilities[vocabulary.index(source), vocabulary.index(target)] = p

        return cls(
            selector=np.array([distance], dtype=float),
            probabilities=probabilities,
            vocabulary=vocabulary,
        )

    def incoming(self, annotation_id: AnnotationId) -> np.ndarray:
        """Probabilities of every atomic annotation mutating into ``annotation_id``."""
        return self.probabilities[:, annotation_id]

    def max_incoming(self, label: Any) -> float:
        """
        Largest probability landing on atomic annotation ``label``.

        Raises:
            MissingEntryError: If ``label`` is unknown or nothing lands on it
        """
        column = self.incoming(self.vocabulary.index(label))
        present = column[~np.isnan(column)]
        if present.size == 0:
            raise MissingEntryError(
                f"No mutation probabilities recorded for atomic annotation {label!r}"
            )
        return float(present.max())

    def to_frame(self) -> pd.DataFrame:
        """Labelled view of the probabilities (rows: from, columns: to)."""
        return pd.DataFrame(
            self.probabilities,
            index=list(self.vocabulary),
            columns=list(self.vocabulary),
        )

    def __repr__(self) -> str:
        return (
            f"MutationProbabilityMatrix(selector={self.selector.tolist()}, "
            f"annotations={len(self.vocabulary)})"
        )


@dataclass
class MutationProbabilityCatalogue:
    """
    Mutation probability matrices ordered by ascending distance bucket.

    A branch length is served by the first bucket whose distance is >= the
    branch length.

    Attributes:
        matrices: One matrix per distance bucket, ascending distance
        distance_column_index: Position of the distance within each selector
        metadata: Free-form metadata
    """

    matrices: List[MutationProbabilityMatrix]
    distance_column_index: int = 0
    metadata: dict = field(default_factory=dict)

    def __post_init__(self):
        """Check buckets share a vocabulary and are sorted by distance."""
        self.matrices = list(self.matrices)
        if not self.matrices:
            raise ValueError("Catalogue must contain at least one matrix")

        vocabulary = self.matrices[0].vocabulary
        for m in self.matrices[1:]:
            if m.vocabulary != vocabulary:
                raise ValueError("All catalogue matrices must share one vocabulary")

        distances = self.distances(self.distance_column_index)
        if np.any(np.diff(distances) < 0):
            raise ValueError(
                f"Catalogue buckets must be ordered by ascending distance, got {distances.tolist()}"
            )

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        distance_col: str = "distance",
        from_col: str = "from",
        to_col: str = "to",
        probability_col: str = "probability",
    ) -> "MutationProbabilityCatalogue":
        """
        Build a catalogue from a tidy table of mutation probabilities.

        Each row holds one ``(distance, from, to, probability)`` record;
        rows sharing a distance form one bucket.

        Args:
            df: Tidy DataFrame
            distance_col: Column holding the bucket distance
            from_col: Column holding the source atomic annotation
            to_col: Column holding the target atomic annotation
            probability_col: Column holding the probability

        Returns:
            MutationProbabilityCatalogue with ``distance_column_index`` 0
        """
        missing = [c for c in (distance_col, from_col, to_col, probability_col) if c not in df.columns]
        if missing:
            raise ValueError(f"Missing catalogue columns: {missing}")

        vocabulary = AnnotationVocabulary.from_labels(
            pd.concat([df[from_col], df[to_col]]).tolist()
        )
        matrices = []
        for distance, bucket in df.groupby(distance_col, sort=True):
            entries: Dict[Tuple[Any, Any], float] = {
                (row[from_col], row[to_col]): float(row[probability_col])
                for _, row in bucket.iterrows()
            }
            matrices.append(
                MutationProbabilityMatrix.from_entries(float(distance), entries, vocabulary)
            )
        return cls(matrices=matrices, distance_column_index=0)

    @property
    def vocabulary(self) -> AnnotationVocabulary:
        return self.matrices[0].vocabulary

    def selector_table(self) -> List[np.ndarray]:
        """Selector rows, one per bucket, in catalogue order."""
        return [m.selector for m in self.matrices]

    def distances(self, distance_column_index: Optional[int] = None) -> np.ndarray:
        """Bucket distances read from each selector."""
        col = self.distance_column_index if distance_column_index is None else distance_column_index
        values = []
        for i, selector in enumerate(self.selector_table()):
            if col < 0 or col >= len(selector):
                raise BoundsError(
                    f"Distance column {col} out of range for bucket {i} "
                    f"with {len(selector)} selector columns"
                )
            values.append(selector[col])
        return np.array(values, dtype=float)

    @property
    def max_distance(self) -> float:
        """Largest branch length the catalogue covers."""
        return float(self.distances()[-1])

    def matrix_for(
        self, branch_length: float, distance_column_index: Optional[int] = None
    ) -> MutationProbabilityMatrix:
        """
        Select the bucket serving ``branch_length``.

        Raises:
            LookupFailure: If ``branch_length`` exceeds every bucket distance
        """
        col = self.distance_column_index if distance_column_index is None else distance_column_index
        row = find_matching_row(self.selector_table(), branch_length, col)
        return self.matrices[row]

    def __len__(self) -> int:
        return len(self.matrices)

    def __getitem__(self, idx: int) -> MutationProbabilityMatrix:
        return self.matrices[idx]

    def __repr__(self) -> str:
        return (
            f"MutationProbabilityCatalogue(buckets={len(self.matrices)}, "
            f"annotations={len(self.vocabulary)})"
        )
