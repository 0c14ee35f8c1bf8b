"""Shared fixtures for Proofmark tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from proofmark.checking.checker import WordListChecker
from proofmark.checking.service import CheckerService
from proofmark.core.config import EngineConfig
from proofmark.document.model import EditorDocument
from proofmark.engine import SpellCheckEngine
from proofmark.observability.config import set_config
from tests.utils.fakes import DeferredExecutor, FakeClock

ENGLISH_WORDS = [
    "a", "the", "quick", "brown", "fox", "jumps", "over", "lazy", "dog",
    "cat", "sat", "on", "mat", "is", "and", "hello", "world", "this",
    "sentence", "has", "no", "errors", "don't", "it's", "spell", "check",
]


@pytest.fixture
def english_words() -> list[str]:
    """Small dictionary used by the word-list checker."""
    return list(ENGLISH_WORDS)


@pytest.fixture
def checker(english_words: list[str]) -> WordListChecker:
    """Uninitialized word-list checker."""
    return WordListChecker(english_words)


@pytest.fixture
def initialized_checker(checker: WordListChecker) -> WordListChecker:
    checker.init()
    return checker


@pytest.fixture
def executor() -> DeferredExecutor:
    """Executor that runs checks only when the test says so."""
    return DeferredExecutor()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(checker: WordListChecker, executor: DeferredExecutor) -> CheckerService:
    return CheckerService(checker, executor=executor)


@pytest.fixture
def engine_config() -> EngineConfig:
    return EngineConfig(debounce_seconds=0.5, max_pending_age=30.0, max_workers=1)


@pytest.fixture
def engine(
    checker: WordListChecker,
    service: CheckerService,
    clock: FakeClock,
    engine_config: EngineConfig,
) -> Generator[SpellCheckEngine, None, None]:
    """Initialized engine driven by the deferred executor and fake clock."""
    engine = SpellCheckEngine(checker, config=engine_config, service=service, clock=clock)
    assert engine.initialize()
    yield engine
    engine.close()


@pytest.fixture
def sample_document() -> EditorDocument:
    """Single paragraph ``Teh quick fox``; its text starts at position 1."""
    return EditorDocument.from_paragraphs(["Teh quick fox"])


@pytest.fixture
def hunspell_files(tmp_path: Path) -> tuple[Path, Path]:
    """Tiny Hunspell dictionary: ``(affix_path, dictionary_path)``."""
    affix = tmp_path / "en_TEST.aff"
    affix.write_text(
        "SET UTF-8\n"
        "TRY esianrtolcdugmphbyfvkwz\n"
        "\n"
        "PFX U Y 1\n"
        "PFX U 0 un .\n"
        "\n"
        "SFX S Y 2\n"
        "SFX S 0 s [^y]\n"
        "SFX S y ies y\n"
        "\n"
        "SFX D N 1\n"
        "SFX D 0 ed .\n",
        encoding="utf-8",
    )
    dictionary = tmp_path / "en_TEST.dic"
    dictionary.write_text(
        "5\n"
        "cat/S\n"
        "fly/S\n"
        "lock/USD\n"
        "Kevin\n"
        "the\n",
        encoding="utf-8",
    )
    return affix, dictionary


@pytest.fixture(autouse=True)
def isolate_observability_config() -> Generator[None, None, None]:
    """Reset the global observability configuration between tests."""
    set_config(None)
    yield
    set_config(None)
