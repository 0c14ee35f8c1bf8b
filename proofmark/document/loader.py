"""Load files from disk as editor documents."""

import json
import logging
from pathlib import Path
from typing import Union

from docling_core.types.doc.document import DoclingDocument
from pydantic import ValidationError as PydanticValidationError

from .docling_adapter import DoclingDocumentAdapter
from .model import EditorDocument

logger = logging.getLogger(__name__)

PLAIN_TEXT_SUFFIXES = {".txt", ".text"}


def load_docling_document(file_path: Union[str, Path]) -> DoclingDocument:
    """Load a DoclingDocument from its JSON export.

    Raises:
        FileNotFoundError: If the file cannot be found
        ValueError: If the file is not valid DoclingDocument JSON
    """
    file_path = Path(file_path)
    try:
        with open(file_path, encoding="utf-8") as f:
            doc_dict = json.load(f)
    except FileNotFoundError as e:
        raise FileNotFoundError(f"File not found: {file_path}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_path}: {e}") from e

    try:
        return DoclingDocument.model_validate(doc_dict)
    except PydanticValidationError as e:
        raise ValueError(f"{file_path} is not a DoclingDocument: {e}") from e


def load_editor_document(file_path: Union[str, Path]) -> EditorDocument:
    """Load ``file_path`` into an ``EditorDocument``.

    Plain text is split into paragraphs on blank lines. ``.json`` files are
    read as exported DoclingDocuments. Anything else goes through docling's
    ``DocumentConverter``.
    """
    file_path = Path(file_path)
    suffix = file_path.suffix.lower()
    logger.info(f"Loading document from {file_path}")

    if suffix in PLAIN_TEXT_SUFFIXES:
        return EditorDocument.from_text(file_path.read_text(encoding="utf-8"))

    if suffix == ".json":
        docling_doc = load_docling_document(file_path)
    else:
        from docling.document_converter import DocumentConverter

        converter = DocumentConverter()
        docling_doc = converter.convert(file_path).document

    document = DoclingDocumentAdapter().to_editor_document(docling_doc)
    logger.debug(f"Loaded {len(document.blocks)} blocks from {file_path}")
    return document
