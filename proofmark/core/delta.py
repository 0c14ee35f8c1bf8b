"""Edit deltas: composable position maps accumulated edit by edit.

A ``StepMap`` describes how one structural edit moves document positions. An
``EditDelta`` is an ordered sequence of step maps; mapping a position through
it applies each step in turn. Both are immutable, so a delta captured for a
pending check can be extended without affecting any other holder.

Association policy: positions are right-biased (``assoc=1``). A position at an
insertion point moves past the inserted content, and a position inside a
replaced range lands at the end of the replacement. For a pure deletion the
start and end of the removed range coincide, so every position inside it
collapses onto that single boundary.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

Range = Tuple[int, int, int]


@dataclass(frozen=True)
class StepMap:
    """
    Position map for a single edit step.

    Attributes:
        ranges: Sorted ``(start, old_size, new_size)`` triples in pre-step
            coordinates. Ranges must not overlap.

    Examples:
        >>> insert = StepMap.replace(4, 4, 1)  # one character typed at 4
        >>> insert.map(10)
        11
        >>> StepMap.replace(1, 4, 0).map(3)  # inside a deletion
        1
    """

    ranges: Tuple[Range, ...] = ()

    def __post_init__(self) -> None:
        last_end = None
        for start, old_size, new_size in self.ranges:
            if start < 0 or old_size < 0 or new_size < 0:
                raise ValueError("step map ranges must be non-negative")
            if last_end is not None and start < last_end:
                raise ValueError("step map ranges must be sorted and non-overlapping")
            last_end = start + old_size

    @classmethod
    def identity(cls) -> "StepMap":
        return cls(())

    @classmethod
    def replace(cls, start: int, end: int, new_size: int) -> "StepMap":
        """Map for replacing ``[start, end)`` with ``new_size`` positions."""
        if end < start:
            raise ValueError(f"replace range end {end} precedes start {start}")
        if end == start and new_size == 0:
            return cls.identity()
        return cls(((start, end - start, new_size),))

    @property
    def is_identity(self) -> bool:
        return not self.ranges

    def map(self, pos: int, assoc: int = 1) -> int:
        """Map a pre-step position to its post-step position."""
        diff = 0
        for start, old_size, new_size in self.ranges:
            if start > pos:
                break
            end = start + old_size
            if pos <= end:
                if not old_size:
                    side = assoc
                elif pos == start:
                    side = -1
                elif pos == end:
                    side = 1
                else:
                    side = assoc
                return start + diff + (0 if side < 0 else new_size)
            diff += new_size - old_size
        return pos + diff

    def size_delta(self) -> int:
        """Net change in document size caused by this step."""
        return sum(new_size - old_size for _, old_size, new_size in self.ranges)


class EditDelta:
    """
    Ordered composition of step maps.

    ``EditDelta.empty()`` is the identity. ``extend`` returns a new delta with
    one more step appended; the receiver is never mutated.

    Examples:
        >>> delta = EditDelta.empty().extend(StepMap.replace(0, 0, 2))
        >>> delta.map(5)
        7
    """

    __slots__ = ("_maps",)

    def __init__(self, maps: Iterable[StepMap] = ()) -> None:
        self._maps: Tuple[StepMap, ...] = tuple(m for m in maps if not m.is_identity)

    @classmethod
    def empty(cls) -> "EditDelta":
        return cls(())

    def extend(self, step: StepMap) -> "EditDelta":
        if step.is_identity:
            return self
        return EditDelta(self._maps + (step,))

    def extend_all(self, steps: Iterable[StepMap]) -> "EditDelta":
        return EditDelta(self._maps + tuple(steps))

    def compose(self, other: "EditDelta") -> "EditDelta":
        """Delta equivalent to applying ``self`` then ``other``."""
        return EditDelta(self._maps + other._maps)

    def map(self, pos: int, assoc: int = 1) -> int:
        for step in self._maps:
            pos = step.map(pos, assoc)
        return pos

    def size_delta(self) -> int:
        return sum(step.size_delta() for step in self._maps)

    @property
    def steps(self) -> Tuple[StepMap, ...]:
        return self._maps

    def __iter__(self) -> Iterator[StepMap]:
        return iter(self._maps)

    def __len__(self) -> int:
        return len(self._maps)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EditDelta):
            return NotImplemented
        return self._maps == other._maps

    def __hash__(self) -> int:
        return hash(self._maps)

    def __repr__(self) -> str:
        return f"EditDelta(steps={len(self._maps)})"
