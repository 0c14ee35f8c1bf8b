"""Tests for EditorSession."""

import pytest

from proofmark.core.exceptions import InvalidEditError
from proofmark.document.model import EditorDocument, InlineNode, paragraph
from proofmark.engine import SpellCheckEngine
from proofmark.session import EditorSession
from tests.utils.fakes import DeferredExecutor, FakeClock


@pytest.fixture
def session(engine: SpellCheckEngine, sample_document: EditorDocument) -> EditorSession:
    return EditorSession(engine, sample_document)


def _settle(session: EditorSession, executor: DeferredExecutor) -> None:
    executor.run_all()
    session.engine.process_results()


class TestEditorSession:
    """Test edits flowing from the session into the engine."""

    def test_opening_checks_document(self, session: EditorSession, executor: DeferredExecutor) -> None:
        assert executor.pending == 1
        _settle(session, executor)
        assert [a.word for a in session.annotations] == ["Teh"]

    def test_edits_update_document_and_annotations(
        self, session: EditorSession, executor: DeferredExecutor
    ) -> None:
        _settle(session, executor)
        step = session.insert_text(1, "X")
        assert not step.is_identity
        assert session.document.text_between(1, 5) == "XTeh"
        (annotation,) = session.annotations
        assert (annotation.document_start, annotation.document_end) == (2, 5)

    def test_replace_annotation_with_suggestion(
        self, session: EditorSession, executor: DeferredExecutor, clock: FakeClock
    ) -> None:
        _settle(session, executor)
        session.replace_annotation(session.annotations[0], "The")
        assert session.document.blocks[0].text_content == "The quick fox"
        session.tick(clock.advance(0.5))
        _settle(session, executor)
        assert session.annotations == []

    def test_transaction_reports_steps_together(
        self, session: EditorSession, executor: DeferredExecutor
    ) -> None:
        _settle(session, executor)
        with session.transaction():
            session.insert_text(1, "A ")
            with session.transaction():
                session.insert_text(1, "B ")
            assert not session.engine.check_scheduled
        assert session.engine.check_scheduled
        (annotation,) = session.annotations
        assert (annotation.document_start, annotation.document_end) == (5, 8)
        assert session.document.text_between(5, 8) == "Teh"

    def test_block_edits(self, session: EditorSession, executor: DeferredExecutor) -> None:
        _settle(session, executor)
        session.insert_block(0, paragraph("Hello"))
        (annotation,) = session.annotations
        assert session.document.text_between(annotation.document_start, annotation.document_end) == "Teh"
        session.remove_block(1)
        assert session.annotations == []

    def test_inline_atom_shifts_annotation(self, session: EditorSession, executor: DeferredExecutor) -> None:
        _settle(session, executor)
        session.insert_inline(1, InlineNode("image"))
        (annotation,) = session.annotations
        assert (annotation.document_start, annotation.document_end) == (2, 5)

    def test_invalid_edit_leaves_state_untouched(
        self, session: EditorSession, executor: DeferredExecutor
    ) -> None:
        _settle(session, executor)
        document = session.document
        with pytest.raises(InvalidEditError):
            session.delete(10, 2)
        assert session.document is document
        assert not session.engine.check_scheduled

    def test_add_word(self, session: EditorSession, executor: DeferredExecutor) -> None:
        _settle(session, executor)
        assert session.add_word("Teh")
        _settle(session, executor)
        assert session.annotations == []
