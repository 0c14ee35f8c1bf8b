"""Document model and plain-text projection for Proofmark.

The projector flattens an ``EditorDocument`` into the text sent to the spell
checker and keeps an offset map so checker results can be anchored back to
document positions. ``DoclingDocumentAdapter`` loads documents produced by
docling into the editor model.
"""

from .docling_adapter import DoclingDocumentAdapter
from .loader import load_docling_document, load_editor_document
from .model import (
    BlockNode,
    EditorDocument,
    HardBreak,
    InlineNode,
    NodeKind,
    TextNode,
    paragraph,
)
from .projector import OffsetMapEntry, Projection, TextProjector

__all__ = [
    "BlockNode",
    "DoclingDocumentAdapter",
    "EditorDocument",
    "HardBreak",
    "InlineNode",
    "NodeKind",
    "OffsetMapEntry",
    "Projection",
    "TextNode",
    "TextProjector",
    "paragraph",
    "load_docling_document",
    "load_editor_document",
]
