"""Tests for plain-text projection and the offset map."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from proofmark.core.exceptions import ProjectionError
from proofmark.document.model import BlockNode, EditorDocument, HardBreak, InlineNode, paragraph
from proofmark.document.projector import OffsetMapEntry, Projection, TextProjector


@pytest.fixture
def projector() -> TextProjector:
    return TextProjector()


class TestOffsetMapEntry:
    """Test entry validation and conversion."""

    def test_to_document_position(self) -> None:
        entry = OffsetMapEntry(document_start=14, document_end=21, text_offset=12, text_length=7)
        assert entry.to_document_position(12) == 14
        assert entry.to_document_position(18) == 20

    def test_offset_outside_entry_rejected(self) -> None:
        entry = OffsetMapEntry(1, 4, 0, 3)
        with pytest.raises(ValueError):
            entry.to_document_position(3)

    @pytest.mark.parametrize(
        "args",
        [(1, 1, 0, 0), (1, 5, 0, 3), (-1, 2, 0, 3), (1, 4, -1, 3)],
    )
    def test_invalid_entries_rejected(self, args) -> None:
        with pytest.raises(ValueError):
            OffsetMapEntry(*args)


class TestTextProjector:
    """Test projection rules."""

    def test_single_paragraph(self, projector: TextProjector, sample_document: EditorDocument) -> None:
        projection = projector.project(sample_document)
        assert projection.text == "Teh quick fox"
        assert projection.entries == (OffsetMapEntry(1, 14, 0, 13),)
        assert projection.document_size == 15

    def test_block_boundaries_add_one_separator(self, projector: TextProjector) -> None:
        doc = EditorDocument.from_paragraphs(["Hello world", "Teh cat"])
        projection = projector.project(doc)
        assert projection.text == "Hello world\nTeh cat"
        assert projection.entries == (
            OffsetMapEntry(1, 12, 0, 11),
            OffsetMapEntry(14, 21, 12, 7),
        )

    def test_empty_blocks_do_not_stack_separators(self, projector: TextProjector) -> None:
        doc = EditorDocument.from_paragraphs(["ab", "", "cd"])
        projection = projector.project(doc)
        assert projection.text == "ab\ncd"
        assert projection.entries[1] == OffsetMapEntry(7, 9, 3, 2)

    def test_hard_break_projects_to_line_separator(self, projector: TextProjector) -> None:
        doc = EditorDocument([paragraph("ab", HardBreak(), "cd")])
        projection = projector.project(doc)
        assert projection.text == "ab\ncd"
        assert projection.entries == (OffsetMapEntry(1, 3, 0, 2), OffsetMapEntry(4, 6, 3, 2))

    def test_inline_atom_projects_to_placeholder(self, projector: TextProjector) -> None:
        doc = EditorDocument([paragraph("ab", InlineNode("image"), "cd")])
        projection = projector.project(doc)
        assert projection.text == "ab cd"
        assert projection.to_document_position(3) == 4

    def test_nested_blocks(self, projector: TextProjector) -> None:
        doc = EditorDocument(
            [paragraph("intro"), BlockNode("blockquote", (paragraph("Teh"), paragraph("fox")))]
        )
        projection = projector.project(doc)
        assert projection.text == "intro\nTeh\nfox"
        assert projection.to_document_position(6) == 9
        assert doc.text_between(9, 12) == "Teh"

    def test_empty_document(self, projector: TextProjector) -> None:
        projection = projector.project(EditorDocument())
        assert projection.text == ""
        assert projection.entries == ()
        assert projection.locate(0) is None

    def test_project_text(self, projector: TextProjector, sample_document: EditorDocument) -> None:
        assert projector.project_text(sample_document) == "Teh quick fox"

    def test_projection_stats(self, projector: TextProjector, sample_document: EditorDocument) -> None:
        stats = projector.get_projection_stats(sample_document)
        assert stats["node_kinds"] == {"block": 1, "text": 1}
        assert stats["projected_chars"] == 13
        assert stats["document_size"] == 15


class TestProjectionLookup:
    """Test offset-to-position lookups."""

    def test_locate_separator_returns_none(self, projector: TextProjector) -> None:
        projection = projector.project(EditorDocument.from_paragraphs(["ab", "cd"]))
        assert projection.locate(2) is None
        assert projection.locate(3) == projection.entries[1]

    def test_to_document_position_raises_for_separator(self, projector: TextProjector) -> None:
        projection = projector.project(EditorDocument.from_paragraphs(["ab", "cd"]))
        with pytest.raises(ProjectionError):
            projection.to_document_position(2)

    def test_locate_past_end(self, projector: TextProjector, sample_document: EditorDocument) -> None:
        projection = projector.project(sample_document)
        assert projection.locate(13) is None
        assert projection.locate(-1) is None

    def test_to_document_range(self, projector: TextProjector, sample_document: EditorDocument) -> None:
        projection = projector.project(sample_document)
        assert projection.to_document_range(4, 5) == (5, 10)

    def test_equality_ignores_lookup_cache(self) -> None:
        entries = (OffsetMapEntry(1, 4, 0, 3),)
        assert Projection("abc", entries, 5) == Projection("abc", entries, 5)


paragraph_text = st.text(
    alphabet=st.characters(whitelist_categories=("Lu", "Ll", "Nd"), whitelist_characters=" '’-"),
    max_size=25,
)


class TestProjectionProperties:
    """Property-based checks of projection invariants."""

    @pytest.mark.property
    @given(paragraphs=st.lists(paragraph_text, max_size=6))
    def test_projection_is_idempotent(self, paragraphs: list[str]) -> None:
        doc = EditorDocument.from_paragraphs(paragraphs)
        projector = TextProjector()
        assert projector.project(doc) == projector.project(doc)

    @pytest.mark.property
    @given(paragraphs=st.lists(paragraph_text, max_size=6))
    def test_every_run_matches_document_text(self, paragraphs: list[str]) -> None:
        doc = EditorDocument.from_paragraphs(paragraphs)
        projection = TextProjector().project(doc)
        previous_end = 0
        for entry in projection.entries:
            assert doc.text_between(entry.document_start, entry.document_end) == (
                projection.text[entry.text_offset:entry.text_end]
            )
            assert entry.text_offset - previous_end in (0, 1)
            previous_end = entry.text_end
