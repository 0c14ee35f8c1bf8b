"""Build editor documents from DoclingDocument instances."""

import logging
from typing import List, Optional

from docling_core.types.doc.document import (
    CodeItem,
    DoclingDocument,
    ListItem,
    SectionHeaderItem,
    TableItem,
    TextItem,
    TitleItem,
)

from .model import BlockNode, EditorDocument, paragraph

logger = logging.getLogger(__name__)


class DoclingDocumentAdapter:
    """
    Converts a DoclingDocument into an ``EditorDocument``.

    Every text-bearing item becomes one textblock, in reading order. Table
    cells become one ``table_cell`` block each. Pictures and other items
    without text are skipped.

    Examples:
        >>> adapter = DoclingDocumentAdapter()
        >>> editor_doc = adapter.to_editor_document(docling_doc)
    """

    def to_editor_document(self, document: DoclingDocument) -> EditorDocument:
        blocks: List[BlockNode] = []
        for item, _level in document.iterate_items():
            if isinstance(item, TableItem):
                blocks.extend(self._blocks_from_table(item))
            elif isinstance(item, TextItem):
                block = self._block_from_text_item(item)
                if block is not None:
                    blocks.append(block)

        logger.info(f"Converted DoclingDocument {document.name!r} into {len(blocks)} blocks")
        return EditorDocument(blocks)

    def _block_from_text_item(self, item: TextItem) -> Optional[BlockNode]:
        if not item.text or not item.text.strip():
            return None
        return paragraph(item.text, name=self._block_name(item))

    def _block_name(self, item: TextItem) -> str:
        if isinstance(item, (TitleItem, SectionHeaderItem)):
            return "heading"
        if isinstance(item, ListItem):
            return "list_item"
        if isinstance(item, CodeItem):
            return "code_block"
        return "paragraph"

    def _blocks_from_table(self, table_item: TableItem) -> List[BlockNode]:
        blocks: List[BlockNode] = []
        table_data = table_item.data
        if table_data is None:
            return blocks
        for cell in table_data.table_cells:
            if cell.text and cell.text.strip():
                blocks.append(paragraph(cell.text, name="table_cell"))
        return blocks
