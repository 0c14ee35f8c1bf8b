"""Editor session: applies edits to a document and keeps the engine in step."""

import logging
from contextlib import contextmanager
from typing import Generator, List, Optional

from proofmark.core.delta import StepMap
from proofmark.core.types import ResolvedAnnotation
from proofmark.document.model import BlockNode, EditorDocument, InlineContent
from proofmark.engine import SpellCheckEngine

logger = logging.getLogger(__name__)


class EditorSession:
    """One open document with spell checking attached.

    Every edit goes through the session, which swaps in the new document and
    reports the step to the engine before returning. Edits made inside
    ``transaction()`` are reported together when the block exits.

    Examples:
        session = EditorSession(engine, EditorDocument.from_text("Teh quick fox"))
        session.insert_text(1, "X")
        session.tick()
        session.replace_annotation(session.annotations[0], "The")
    """

    def __init__(self, engine: SpellCheckEngine, document: Optional[EditorDocument] = None):
        self.engine = engine
        self._document = document or EditorDocument()
        self._batch: Optional[List[StepMap]] = None
        self.engine.attach(self._document)

    @property
    def document(self) -> EditorDocument:
        return self._document

    @property
    def annotations(self) -> List[ResolvedAnnotation]:
        return list(self.engine.annotations)

    def insert_text(self, pos: int, text: str) -> StepMap:
        return self._commit(*self._document.insert_text(pos, text))

    def delete(self, start: int, end: int) -> StepMap:
        return self._commit(*self._document.delete(start, end))

    def replace_text(self, start: int, end: int, text: str) -> StepMap:
        return self._commit(*self._document.replace_text(start, end, text))

    def insert_inline(self, pos: int, node: InlineContent) -> StepMap:
        return self._commit(*self._document.insert_inline(pos, node))

    def insert_block(self, index: int, block: BlockNode) -> StepMap:
        return self._commit(*self._document.insert_block(index, block))

    def remove_block(self, index: int) -> StepMap:
        return self._commit(*self._document.remove_block(index))

    def replace_annotation(self, annotation: ResolvedAnnotation, replacement: str) -> StepMap:
        """Replace the annotated word, e.g. with an accepted suggestion."""
        return self.replace_text(annotation.document_start, annotation.document_end, replacement)

    @contextmanager
    def transaction(self) -> Generator[None, None, None]:
        """Group several edits into one transaction."""
        if self._batch is not None:
            yield
            return
        self._batch = []
        try:
            yield
        finally:
            steps, self._batch = self._batch, None
            if steps:
                self.engine.on_transaction(self._document, steps)

    def add_word(self, word: str) -> bool:
        return self.engine.add_word(word)

    def tick(self, now: Optional[float] = None) -> int:
        return self.engine.tick(now)

    def close(self) -> None:
        self.engine.close()

    def _commit(self, document: EditorDocument, step: StepMap) -> StepMap:
        self._document = document
        if self._batch is not None:
            self._batch.append(step)
        else:
            self.engine.on_transaction(document, [step])
        return step
