"""Tests for choosing a checker backend from the configuration."""

import pytest

from proofmark.checking.checker import WordListChecker
from proofmark.checking.factory import create_checker, resolve_backend
from proofmark.checking.hunspell import EnchantChecker, HunspellChecker
from proofmark.checking.symspell import SymSpellChecker
from proofmark.core.config import EngineConfig
from proofmark.core.dictionary import CustomWordSet


class TestResolveBackend:
    """Test the auto backend choice."""

    @pytest.mark.parametrize(
        "config,expected",
        [
            (EngineConfig(), "symspell"),
            (EngineConfig(dictionary_path="freq.txt"), "symspell"),
            (EngineConfig(dictionary_path="en_US.dic"), "hunspell"),
            (EngineConfig(affix_path="en_US.aff"), "hunspell"),
            (EngineConfig(dictionary_dir="/dicts"), "hunspell"),
            (EngineConfig(backend="enchant"), "enchant"),
            (EngineConfig(backend="wordlist", dictionary_path="en_US.dic"), "wordlist"),
        ],
    )
    def test_resolution(self, config: EngineConfig, expected: str) -> None:
        assert resolve_backend(config) == expected


class TestCreateChecker:
    """Test checker construction."""

    @pytest.mark.parametrize(
        "backend,checker_type",
        [
            ("symspell", SymSpellChecker),
            ("hunspell", HunspellChecker),
            ("enchant", EnchantChecker),
            ("wordlist", WordListChecker),
        ],
    )
    def test_backend_types(self, backend: str, checker_type: type) -> None:
        checker = create_checker(EngineConfig(backend=backend))
        assert isinstance(checker, checker_type)
        assert not checker.is_initialized

    def test_enchant_uses_configured_language(self) -> None:
        checker = create_checker(EngineConfig(backend="enchant", language="de_DE"))
        assert isinstance(checker, EnchantChecker)
        assert checker.language == "de_DE"

    def test_custom_word_set_is_shared(self) -> None:
        words = CustomWordSet(["Kevin"])
        checker = create_checker(EngineConfig(), custom_words=words)
        assert checker.custom_words is words
