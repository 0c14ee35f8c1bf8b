"""Tests for custom word persistence."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from proofmark.core.exceptions import DictionaryError
from proofmark.storage.word_store import CustomWordStore


class TestCustomWordStore:
    """Test loading and saving the custom word list."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert len(CustomWordStore(tmp_path / "words.json").load()) == 0

    def test_add_and_list(self, tmp_path: Path) -> None:
        store = CustomWordStore(tmp_path / "nested" / "words.json")
        assert store.add("Kevin")
        assert store.add("don’t")
        assert not store.add("Kevin")
        assert store.list_words() == ["Kevin", "don’t"]
        assert json.loads(store.path.read_text(encoding="utf-8")) == ["Kevin", "don’t"]

    def test_save_replaces_contents(self, tmp_path: Path) -> None:
        store = CustomWordStore(tmp_path / "words.json")
        store.save(["a", "b"])
        store.save(["c"])
        assert store.list_words() == ["c"]
        assert [p.name for p in tmp_path.iterdir()] == ["words.json"]

    @pytest.mark.parametrize("content", ["not json", '{"word": 1}', '["ok", 3]'])
    def test_malformed_file(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "words.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(DictionaryError) as exc_info:
            CustomWordStore(path).load()
        assert exc_info.value.context["store_path"] == str(path)

    def test_blank_entries_skipped(self, tmp_path: Path) -> None:
        path = tmp_path / "words.json"
        path.write_text('["Kevin", "  "]', encoding="utf-8")
        assert CustomWordStore(path).list_words() == ["Kevin"]

    def test_failed_replace_keeps_previous_file(self, tmp_path: Path) -> None:
        store = CustomWordStore(tmp_path / "words.json")
        store.save(["Kevin"])
        with patch.object(Path, "replace", side_effect=OSError("disk full")):
            with pytest.raises(DictionaryError):
                store.save(["other"])
        assert store.list_words() == ["Kevin"]
        assert [p.name for p in tmp_path.iterdir()] == ["words.json"]
