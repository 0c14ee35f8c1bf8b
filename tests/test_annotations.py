"""Tests for the rendered annotation set."""

from proofmark.annotation.annotations import AnnotationSet
from proofmark.core.delta import EditDelta, StepMap
from proofmark.core.types import ResolvedAnnotation


def _set(*ranges) -> AnnotationSet:
    return AnnotationSet(ResolvedAnnotation(start, end, word) for start, end, word in ranges)


class TestAnnotationSet:
    def test_sorted_by_position(self) -> None:
        annotations = _set((10, 13, "dgo"), (1, 4, "Teh"))
        assert annotations.words() == ["Teh", "dgo"]
        assert annotations[0].document_start == 1

    def test_empty(self) -> None:
        annotations = AnnotationSet.empty()
        assert not annotations
        assert len(annotations) == 0
        assert annotations.at(1) is None

    def test_at(self) -> None:
        annotations = _set((1, 4, "Teh"), (5, 9, "qick"))
        assert annotations.at(1).word == "Teh"
        assert annotations.at(3).word == "Teh"
        assert annotations.at(4) is None
        assert annotations.at(8).word == "qick"
        assert annotations.at(0) is None

    def test_in_range(self) -> None:
        annotations = _set((1, 4, "Teh"), (5, 9, "qick"), (11, 14, "fxo"))
        assert [a.word for a in annotations.in_range(3, 6)] == ["Teh", "qick"]
        assert annotations.in_range(9, 11) == []

    def test_map_shifts_and_collapses(self) -> None:
        annotations = _set((1, 4, "teh"), (5, 8, "cta"))
        mapped = annotations.map(StepMap.replace(1, 4, 0), 6)
        assert mapped == _set((2, 5, "cta"))

    def test_map_identity_returns_same_set(self) -> None:
        annotations = _set((1, 4, "Teh"))
        assert annotations.map(StepMap.identity(), 15) is annotations

    def test_map_delta_drops_out_of_bounds(self) -> None:
        annotations = _set((1, 4, "Teh"), (10, 14, "foxx"))
        mapped = annotations.map_delta(EditDelta.empty(), 12)
        assert mapped.words() == ["Teh"]

    def test_to_list(self) -> None:
        assert _set((1, 4, "Teh")).to_list() == [{"from": 1, "to": 4, "word": "Teh"}]
