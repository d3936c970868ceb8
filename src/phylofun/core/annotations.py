"""Atomic annotation vocabulary and composite annotation helpers."""

from typing import Any, Dict, Iterable, Iterator, List, NewType, Optional, Tuple
from dataclasses import dataclass, field

from phylofun.core.errors import EmptyAnnotationError, MissingEntryError

AnnotationId = NewType("AnnotationId", int)
"""Index of an atomic annotation within an AnnotationVocabulary."""


@dataclass
class AnnotationVocabulary:
    """
    Closed dictionary of atomic annotation labels.

    Atomic annotations arrive as strings (e.g. GO terms) or small integers.
    The vocabulary maps each label to a dense ``AnnotationId`` so that
    mutation probability matrices can be stored as plain arrays.

    Attributes:
        labels: Atomic annotation labels, in index order
        metadata: Free-form metadata (ontology name, release, ...)
    """

    labels: List[Any]
    metadata: dict = field(default_factory=dict)
    _index: Dict[Any, AnnotationId] = field(init=False, repr=False)

    def __post_init__(self):
        """Build the label index and check label consistency."""
        self.labels = list(self.labels)
        kinds = {type(label) for label in self.labels}
        if len(kinds) > 1:
            names = ", ".join(sorted(k.__name__ for k in kinds))
            raise TypeError(f"Annotation labels must share one type, got: {names}")

        self._index = {}
        for i, label in enumerate(self.labels):
            if label in self._index:
                raise ValueError(f"Duplicate annotation label: {label!r}")
            self._index[label] = AnnotationId(i)

    @classmethod
    def from_labels(
        cls, labels: Iterable[Any], metadata: Optional[dict] = None
    ) -> "AnnotationVocabulary":
        """
        Create a vocabulary from labels, keeping first occurrences.

        Args:
            labels: Atomic annotation labels (duplicates are dropped)
            metadata: Optional metadata

        Returns:
            AnnotationVocabulary
        """
        return cls(labels=list(dict.fromkeys(labels)), metadata=metadata or {})

    def index(self, label: Any) -> AnnotationId:
        """
        Look up the id of an atomic annotation.

        Raises:
            MissingEntryError: If the label is not in the vocabulary
        """
        try:
            return self._index[label]
        except KeyError:
            raise MissingEntryError(
                f"Atomic annotation {label!r} not found in vocabulary"
            ) from None

    def label(self, annotation_id: int) -> Any:
        """Label for an annotation id."""
        return self.labels[annotation_id]

    def encode(self, composite: Iterable[Any]) -> Tuple[AnnotationId, ...]:
        """Translate a composite annotation into annotation ids."""
        return tuple(self.index(label) for label in validate_composite(composite))

    def __contains__(self, label: Any) -> bool:
        return label in self._index

    def __iter__(self) -> Iterator[Any]:
        return iter(self.labels)

    def __len__(self) -> int:
        return len(self.labels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnnotationVocabulary):
            return NotImplemented
        return self.labels == other.labels

    def __repr__(self) -> str:
        return f"AnnotationVocabulary(size={len(self.labels)})"


def composite_members(composite: Iterable[Any]) -> List[Any]:
    """
    Atomic members of a composite annotation as a list.

    Raises:
        TypeError: If ``composite`` is a bare string rather than a collection
    """
    if isinstance(composite, (str, bytes)):
        raise TypeError(
            f"Composite annotation must be a collection of atomic annotations, "
            f"got the string {composite!r}; wrap it as [{composite!r}]"
        )
    return list(composite)


def validate_composite(composite: Iterable[Any]) -> List[Any]:
    """
    Materialize a composite annotation and check it is non-empty.

    Raises:
        TypeError: If ``composite`` is a bare string
        EmptyAnnotationError: If the composite has no atomic members
    """
    members = composite_members(composite)
    if not members:
        raise EmptyAnnotationError("Composite annotation has no atomic members")
    return members


def stringify_annotation(composite: Iterable[Any], sep: str = ",") -> str:
    """
    Default label for a composite annotation.

    Members are sorted so that equal sets produce equal labels.

    Examples:
        >>> stringify_annotation({"GO:2", "GO:1"})
        'GO:1,GO:2'
    """
    members = validate_composite(composite)
    return sep.join(sorted(str(m) for m in members))
