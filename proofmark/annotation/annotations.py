"""The rendered annotation set for one document."""

import bisect
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from ..core.delta import EditDelta, StepMap
from ..core.types import ResolvedAnnotation
from .resolver import map_range


class AnnotationSet:
    """
    Immutable, position-ordered collection of resolved annotations.

    Accepted results replace the set wholesale; between results the set is
    carried across each edit with ``map``, which uses the same range mapping
    as span resolution so underlines keep tracking their text.
    """

    __slots__ = ("_annotations", "_starts")

    def __init__(self, annotations: Iterable[ResolvedAnnotation] = ()) -> None:
        ordered = sorted(annotations, key=lambda a: (a.document_start, a.document_end))
        self._annotations: Tuple[ResolvedAnnotation, ...] = tuple(ordered)
        self._starts = [a.document_start for a in self._annotations]

    @classmethod
    def empty(cls) -> "AnnotationSet":
        return cls()

    def map(self, step: StepMap, document_size: int) -> "AnnotationSet":
        """Return the set as it stands after one edit step."""
        if step.is_identity or not self._annotations:
            return self
        return self.map_delta(EditDelta.empty().extend(step), document_size)

    def map_delta(self, delta: EditDelta, document_size: int) -> "AnnotationSet":
        survivors = []
        for annotation in self._annotations:
            mapped = map_range(annotation.document_start, annotation.document_end, delta, document_size)
            if mapped is not None:
                survivors.append(ResolvedAnnotation(mapped[0], mapped[1], annotation.word))
        return AnnotationSet(survivors)

    def at(self, position: int) -> Optional[ResolvedAnnotation]:
        """The annotation covering ``position``, if any."""
        # Earlier annotations may be longer, so scan left from the last start <= position.
        for index in range(bisect.bisect_right(self._starts, position) - 1, -1, -1):
            annotation = self._annotations[index]
            if annotation.contains_position(position):
                return annotation
        return None

    def in_range(self, start: int, end: int) -> List[ResolvedAnnotation]:
        return [a for a in self._annotations if a.document_start < end and a.document_end > start]

    def words(self) -> List[str]:
        return [a.word for a in self._annotations]

    def to_list(self) -> List[Dict[str, Any]]:
        return [a.to_dict() for a in self._annotations]

    def __iter__(self) -> Iterator[ResolvedAnnotation]:
        return iter(self._annotations)

    def __len__(self) -> int:
        return len(self._annotations)

    def __bool__(self) -> bool:
        return bool(self._annotations)

    def __getitem__(self, index: int) -> ResolvedAnnotation:
        return self._annotations[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnnotationSet):
            return NotImplemented
        return self._annotations == other._annotations

    def __repr__(self) -> str:
        return f"AnnotationSet({list(self._annotations)!r})"
