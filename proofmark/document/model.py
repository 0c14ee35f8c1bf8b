"""Structured document model used by the editor session.

The model is a closed set of node kinds. Positions follow the usual rich-text
convention: the document content starts at 0, a block occupies its content
size plus two positions (open and close tokens), a text node occupies one
position per character and an inline atom or hard break occupies one.

Documents are immutable. Every edit returns the new document together with the
``StepMap`` describing how positions moved, which is what the annotation
engine consumes.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from ..core.delta import StepMap
from ..core.exceptions import InvalidEditError

logger = logging.getLogger(__name__)


class NodeKind(Enum):
    """Closed set of node kinds the projector knows how to flatten."""

    BLOCK = "block"
    TEXT = "text"
    INLINE = "inline"
    HARD_BREAK = "hard_break"


@dataclass(frozen=True)
class TextNode:
    """A run of text sharing the same marks (bold, italic, link, ...)."""

    text: str
    marks: Tuple[str, ...] = ()
    kind: ClassVar[NodeKind] = NodeKind.TEXT

    @property
    def node_size(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class InlineNode:
    """An inline atom without text content, such as an image."""

    name: str = "image"
    attrs: Tuple[Tuple[str, str], ...] = ()
    kind: ClassVar[NodeKind] = NodeKind.INLINE

    @property
    def node_size(self) -> int:
        return 1


@dataclass(frozen=True)
class HardBreak:
    """An explicit line break inside a paragraph."""

    kind: ClassVar[NodeKind] = NodeKind.HARD_BREAK

    @property
    def node_size(self) -> int:
        return 1


InlineContent = Union[TextNode, InlineNode, HardBreak]


@dataclass(frozen=True)
class BlockNode:
    """
    A block-level node. A block whose children are all inline is a textblock.

    Examples:
        >>> para = BlockNode("paragraph", (TextNode("Teh quick fox"),))
        >>> para.node_size
        15
    """

    name: str
    children: Tuple["Node", ...] = field(default_factory=tuple)
    kind: ClassVar[NodeKind] = NodeKind.BLOCK

    @property
    def content_size(self) -> int:
        return sum(child.node_size for child in self.children)

    @property
    def node_size(self) -> int:
        return self.content_size + 2

    @property
    def is_textblock(self) -> bool:
        return not any(isinstance(child, BlockNode) for child in self.children)

    @property
    def text_content(self) -> str:
        return "".join(
            child.text if isinstance(child, TextNode) else
            child.text_content if isinstance(child, BlockNode) else ""
            for child in self.children
        )


Node = Union[BlockNode, TextNode, InlineNode, HardBreak]


def paragraph(*content: Union[str, InlineContent], name: str = "paragraph") -> BlockNode:
    """Build a textblock from strings and inline nodes."""
    children = [TextNode(part) if isinstance(part, str) else part for part in content]
    return BlockNode(name, tuple(_normalize_inline(children)))


def _normalize_inline(children: Iterable[Node]) -> List[Node]:
    """Drop empty text nodes and merge adjacent text nodes with equal marks."""
    result: List[Node] = []
    for child in children:
        if isinstance(child, TextNode):
            if not child.text:
                continue
            previous = result[-1] if result else None
            if isinstance(previous, TextNode) and previous.marks == child.marks:
                result[-1] = TextNode(previous.text + child.text, previous.marks)
                continue
        result.append(child)
    return result


def _splice_inline(
    children: Sequence[Node], start: int, end: int, inserted: Sequence[Node]
) -> Tuple[Node, ...]:
    """Replace local inline range ``[start, end)`` with ``inserted``."""
    before: List[Node] = []
    after: List[Node] = []
    offset = 0
    for child in children:
        child_start = offset
        child_end = offset + child.node_size
        offset = child_end
        if child_end <= start:
            before.append(child)
        elif child_start >= end:
            after.append(child)
        elif isinstance(child, TextNode):
            if child_start < start:
                before.append(TextNode(child.text[: start - child_start], child.marks))
            if child_end > end:
                after.append(TextNode(child.text[end - child_start:], child.marks))
    return tuple(_normalize_inline(before + list(inserted) + after))


class EditorDocument:
    """
    Immutable block/inline document with position-addressed edits.

    Examples:
        >>> doc = EditorDocument.from_paragraphs(["Teh quick fox"])
        >>> doc, step = doc.insert_text(1, "X")
        >>> doc.text_between(1, 5)
        'XTeh'
    """

    def __init__(self, blocks: Iterable[BlockNode] = ()) -> None:
        self._blocks: Tuple[BlockNode, ...] = tuple(blocks)
        for block in self._blocks:
            if not isinstance(block, BlockNode):
                raise InvalidEditError(
                    f"top-level nodes must be blocks, got {type(block).__name__}"
                )

    @classmethod
    def from_paragraphs(cls, paragraphs: Iterable[str]) -> "EditorDocument":
        return cls(paragraph(text) for text in paragraphs)

    @classmethod
    def from_text(cls, text: str) -> "EditorDocument":
        """One paragraph per blank-line separated chunk; single newlines become hard breaks."""
        blocks = []
        for chunk in text.replace("\r\n", "\n").split("\n\n"):
            chunk = chunk.strip("\n")
            if not chunk:
                continue
            parts: List[Union[str, InlineContent]] = []
            for index, line in enumerate(chunk.split("\n")):
                if index:
                    parts.append(HardBreak())
                parts.append(line)
            blocks.append(paragraph(*parts))
        return cls(blocks)

    @property
    def blocks(self) -> Tuple[BlockNode, ...]:
        return self._blocks

    @property
    def content_size(self) -> int:
        return sum(block.node_size for block in self._blocks)

    def descendants(self) -> Iterator[Tuple[Node, int]]:
        """Yield every node with its start position, depth-first in document order."""
        yield from self._walk(self._blocks, 0)

    def _walk(self, children: Sequence[Node], offset: int) -> Iterator[Tuple[Node, int]]:
        for child in children:
            yield child, offset
            if isinstance(child, BlockNode):
                yield from self._walk(child.children, offset + 1)
            offset += child.node_size

    def text_between(self, start: int, end: int) -> str:
        """Text of the text nodes overlapping ``[start, end)``."""
        parts = []
        for node, pos in self.descendants():
            if isinstance(node, TextNode):
                node_end = pos + node.node_size
                if node_end > start and pos < end:
                    parts.append(node.text[max(start, pos) - pos: min(end, node_end) - pos])
        return "".join(parts)

    # Edits

    def insert_text(self, pos: int, text: str) -> Tuple["EditorDocument", StepMap]:
        return self.replace_text(pos, pos, text)

    def delete(self, start: int, end: int) -> Tuple["EditorDocument", StepMap]:
        return self.replace_text(start, end, "")

    def replace_text(self, start: int, end: int, text: str) -> Tuple["EditorDocument", StepMap]:
        inserted = [TextNode(text)] if text else []
        return self._replace_inline(start, end, inserted, len(text))

    def insert_inline(self, pos: int, node: InlineContent) -> Tuple["EditorDocument", StepMap]:
        if isinstance(node, BlockNode):
            raise InvalidEditError("insert_inline expects an inline node", position=pos)
        return self._replace_inline(pos, pos, [node], node.node_size)

    def insert_block(self, index: int, block: BlockNode) -> Tuple["EditorDocument", StepMap]:
        if not 0 <= index <= len(self._blocks):
            raise InvalidEditError(f"block index {index} out of range")
        pos = sum(b.node_size for b in self._blocks[:index])
        blocks = self._blocks[:index] + (block,) + self._blocks[index:]
        return EditorDocument(blocks), StepMap.replace(pos, pos, block.node_size)

    def remove_block(self, index: int) -> Tuple["EditorDocument", StepMap]:
        if not 0 <= index < len(self._blocks):
            raise InvalidEditError(f"block index {index} out of range")
        pos = sum(b.node_size for b in self._blocks[:index])
        size = self._blocks[index].node_size
        blocks = self._blocks[:index] + self._blocks[index + 1:]
        return EditorDocument(blocks), StepMap.replace(pos, pos + size, 0)

    def _replace_inline(
        self, start: int, end: int, inserted: Sequence[Node], inserted_size: int
    ) -> Tuple["EditorDocument", StepMap]:
        if end < start:
            raise InvalidEditError(f"edit range end {end} precedes start {start}", position=start)
        path, content_start = self._locate_textblock(start, end)
        blocks = self._rebuild(
            self._blocks,
            path,
            lambda block: BlockNode(
                block.name,
                _splice_inline(block.children, start - content_start, end - content_start, inserted),
            ),
        )
        return EditorDocument(blocks), StepMap.replace(start, end, inserted_size)

    def _locate_textblock(self, start: int, end: int) -> Tuple[Tuple[int, ...], int]:
        """Index path to the textblock whose content contains ``[start, end]``."""
        path: List[int] = []
        children: Sequence[Node] = self._blocks
        offset = 0
        while True:
            found: Optional[BlockNode] = None
            for index, child in enumerate(children):
                child_end = offset + child.node_size
                if isinstance(child, BlockNode) and offset < start and end < child_end:
                    path.append(index)
                    found = child
                    break
                offset = child_end
            if found is None:
                raise InvalidEditError(
                    f"range [{start}, {end}] is not inside a single textblock",
                    position=start,
                    document_size=self.content_size,
                )
            offset += 1
            if found.is_textblock:
                return tuple(path), offset
            children = found.children

    def _rebuild(self, children: Tuple[Node, ...], path: Sequence[int], update) -> Tuple[Node, ...]:
        index = path[0]
        target = children[index]
        if len(path) == 1:
            replacement = update(target)
        else:
            replacement = BlockNode(target.name, self._rebuild(target.children, path[1:], update))
        return children[:index] + (replacement,) + children[index + 1:]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EditorDocument):
            return NotImplemented
        return self._blocks == other._blocks

    def __hash__(self) -> int:
        return hash(self._blocks)

    def __repr__(self) -> str:
        return f"EditorDocument(blocks={len(self._blocks)}, size={self.content_size})"
