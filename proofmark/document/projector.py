"""Plain-text projection of an editor document for the spell checker."""

import logging
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, cast

from ..core.exceptions import ProjectionError
from .model import EditorDocument, Node, NodeKind, TextNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OffsetMapEntry:
    """
    Links a run of projected text to the document positions it came from.

    Attributes:
        document_start: Document position of the first character of the run
        document_end: Document position just past the run
        text_offset: Offset of the run in the projected text
        text_length: Number of projected characters in the run

    Examples:
        >>> entry = OffsetMapEntry(document_start=1, document_end=14, text_offset=0, text_length=13)
        >>> entry.to_document_position(4)
        5
    """

    document_start: int
    document_end: int
    text_offset: int
    text_length: int

    def __post_init__(self) -> None:
        if self.text_length <= 0:
            raise ValueError("text_length must be positive")
        if self.document_end - self.document_start != self.text_length:
            raise ValueError("document range length must match text_length")
        if self.text_offset < 0 or self.document_start < 0:
            raise ValueError("offsets must be non-negative")

    @property
    def text_end(self) -> int:
        return self.text_offset + self.text_length

    def contains_offset(self, text_offset: int) -> bool:
        return self.text_offset <= text_offset < self.text_end

    def to_document_position(self, text_offset: int) -> int:
        if not self.contains_offset(text_offset):
            raise ValueError(
                f"Offset {text_offset} not in entry range [{self.text_offset}, {self.text_end})"
            )
        return self.document_start + (text_offset - self.text_offset)


@dataclass(frozen=True)
class Projection:
    """
    Flattened text of one document snapshot plus its offset map.

    Entries are in document order with strictly increasing text offsets, so
    lookups are a binary search.
    """

    text: str
    entries: Tuple[OffsetMapEntry, ...]
    document_size: int = 0
    _offsets: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_offsets", tuple(entry.text_offset for entry in self.entries))

    def locate(self, text_offset: int) -> Optional[OffsetMapEntry]:
        """Entry whose text run contains ``text_offset``, or None for separators."""
        index = bisect_right(self._offsets, text_offset) - 1
        if index < 0:
            return None
        entry = self.entries[index]
        return entry if entry.contains_offset(text_offset) else None

    def to_document_position(self, text_offset: int) -> int:
        entry = self.locate(text_offset)
        if entry is None:
            raise ProjectionError(
                f"No text run contains offset {text_offset}", text_offset=text_offset
            )
        return entry.to_document_position(text_offset)

    def to_document_range(self, text_offset: int, text_length: int) -> Tuple[int, int]:
        """Document range for a span starting at ``text_offset``.

        The end is derived from the start entry; inline atoms project to exactly
        one character so the correspondence holds across adjacent runs.
        """
        start = self.to_document_position(text_offset)
        return start, start + text_length


class TextProjector:
    """
    Flattens an ``EditorDocument`` into the string handed to the checker.

    Rules:
        * every text node contributes its text and one offset-map entry;
        * entering a block appends one line separator unless the text is empty
          or already ends with one;
        * a hard break projects to a line separator, any other inline atom to a
          single placeholder character, keeping one character per position.

    Examples:
        >>> projector = TextProjector()
        >>> projection = projector.project(EditorDocument.from_paragraphs(["Teh quick fox"]))
        >>> projection.text
        'Teh quick fox'
    """

    LINE_SEPARATOR = "\n"
    INLINE_PLACEHOLDER = " "

    def __init__(self) -> None:
        self._handlers: Dict[NodeKind, Callable[["_ProjectionBuffer", Node, int], None]] = {
            NodeKind.TEXT: self._project_text,
            NodeKind.BLOCK: self._project_block,
            NodeKind.INLINE: self._project_inline,
            NodeKind.HARD_BREAK: self._project_hard_break,
        }

    def project(self, document: EditorDocument) -> Projection:
        buffer = _ProjectionBuffer()
        for node, pos in document.descendants():
            self._handlers[node.kind](buffer, node, pos)
        projection = Projection(
            text="".join(buffer.parts),
            entries=tuple(buffer.entries),
            document_size=document.content_size,
        )
        logger.debug(
            f"Projected document of size {projection.document_size} to "
            f"{len(projection.text)} characters in {len(projection.entries)} runs"
        )
        return projection

    def project_text(self, document: EditorDocument) -> str:
        return self.project(document).text

    def get_projection_stats(self, document: EditorDocument) -> Dict[str, Any]:
        """Counts of node kinds and projected characters, for diagnostics."""
        kinds: Dict[str, int] = {}
        for node, _ in document.descendants():
            kinds[node.kind.value] = kinds.get(node.kind.value, 0) + 1
        projection = self.project(document)
        return {
            "node_kinds": kinds,
            "runs": len(projection.entries),
            "projected_chars": len(projection.text),
            "document_size": projection.document_size,
        }

    def _project_text(self, buffer: "_ProjectionBuffer", node: Node, pos: int) -> None:
        text = cast(TextNode, node)
        buffer.entries.append(
            OffsetMapEntry(
                document_start=pos,
                document_end=pos + text.node_size,
                text_offset=buffer.length,
                text_length=len(text.text),
            )
        )
        buffer.append(text.text)

    def _project_block(self, buffer: "_ProjectionBuffer", node: Node, pos: int) -> None:
        if buffer.length and not buffer.ends_with(self.LINE_SEPARATOR):
            buffer.append(self.LINE_SEPARATOR)

    def _project_inline(self, buffer: "_ProjectionBuffer", node: Node, pos: int) -> None:
        buffer.append(self.INLINE_PLACEHOLDER)

    def _project_hard_break(self, buffer: "_ProjectionBuffer", node: Node, pos: int) -> None:
        buffer.append(self.LINE_SEPARATOR)


class _ProjectionBuffer:
    """Accumulates projected text without repeated string concatenation."""

    def __init__(self) -> None:
        self.parts: List[str] = []
        self.entries: List[OffsetMapEntry] = []
        self.length = 0

    def append(self, text: str) -> None:
        if text:
            self.parts.append(text)
            self.length += len(text)

    def ends_with(self, suffix: str) -> bool:
        return bool(self.parts) and self.parts[-1].endswith(suffix)
