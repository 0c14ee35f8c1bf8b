"""Spell checker backends.

A checker accepts plain text and returns the misspelled words as
``ErrorSpan`` objects. Tokenization and custom-word exclusion live in the base
class so every backend reports spans the same way; backends only decide
whether a single word is known and how to suggest replacements.
"""

import difflib
import logging
import re
import threading
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from ..core.dictionary import CustomWordSet, normalize_apostrophes
from ..core.exceptions import CheckerInitializationError, CheckerUnavailableError
from ..core.types import ErrorSpan

logger = logging.getLogger(__name__)

WORD_PATTERN = re.compile(r"\b\w+(?:['’]\w+)?\b")


class SpellChecker(ABC):
    """
    Base class for spell checker backends.

    Subclasses implement ``_load`` (dictionary loading), ``is_known`` and
    ``suggest``. ``check`` may be called concurrently from worker threads; the
    custom word set is shared with the engine and only ever grows.
    """

    backend_name = "base"

    def __init__(self, custom_words: Optional[CustomWordSet] = None) -> None:
        self.custom_words = custom_words if custom_words is not None else CustomWordSet()
        self._initialized = False
        self._lock = threading.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def init(
        self,
        affix_path: Optional[str] = None,
        dictionary_path: Optional[str] = None,
        custom_words: Iterable[str] = (),
    ) -> None:
        """Load dictionary data and seed the custom word set.

        Raises:
            CheckerInitializationError: If the dictionary data cannot be loaded
        """
        with self._lock:
            self._initialized = False
            self._load(affix_path, dictionary_path)
            for word in custom_words:
                self.custom_words.add(word)
            self._initialized = True
        logger.info(
            f"{self.backend_name} checker initialized with {len(self.custom_words)} custom words"
        )

    def add_custom_word(self, word: str) -> bool:
        return self.custom_words.add(word)

    def check(self, text: str) -> List[ErrorSpan]:
        """Return misspelled words in ``text`` in order of appearance."""
        self._require_initialized()
        if not text:
            return []

        errors: List[ErrorSpan] = []
        for match in WORD_PATTERN.finditer(text):
            word = match.group(0)
            if word.isdigit() or self.custom_words.is_excluded(word):
                continue
            if self.is_known(word) or self.is_known(normalize_apostrophes(word)):
                continue
            errors.append(ErrorSpan(word=word, text_offset=match.start(), text_length=len(word)))
        return errors

    def get_suggestions(self, word: str) -> List[str]:
        self._require_initialized()
        return self.suggest(word)

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise CheckerUnavailableError(
                "Spell checker not initialized", backend=self.backend_name
            )

    @abstractmethod
    def _load(self, affix_path: Optional[str], dictionary_path: Optional[str]) -> None:
        """Load dictionary data."""

    @abstractmethod
    def is_known(self, word: str) -> bool:
        """Whether ``word`` is correctly spelled according to the dictionary."""

    @abstractmethod
    def suggest(self, word: str) -> List[str]:
        """Replacement candidates for ``word``, best first."""


class WordListChecker(SpellChecker):
    """
    Checker backed by an in-memory word list.

    Lowercase entries match any casing of the word; entries containing capitals
    only match exactly. When ``dictionary_path`` is given at ``init`` it is read
    as a plain word list: one word per line, ``#`` starts a comment line.

    Examples:
        >>> checker = WordListChecker(["the", "quick", "fox"])
        >>> checker.init()
        >>> [span.word for span in checker.check("Teh quick fox")]
        ['Teh']
    """

    backend_name = "wordlist"

    def __init__(
        self,
        words: Iterable[str] = (),
        custom_words: Optional[CustomWordSet] = None,
        max_suggestions: int = 5,
    ) -> None:
        super().__init__(custom_words)
        self._seed_words = list(words)
        self._words: set[str] = set()
        self.max_suggestions = max_suggestions

    def _load(self, affix_path: Optional[str], dictionary_path: Optional[str]) -> None:
        words = set(self._seed_words)
        if dictionary_path:
            words.update(self._read_word_list(dictionary_path))
        self._words = words

    def is_known(self, word: str) -> bool:
        return word in self._words or word.lower() in self._words

    def suggest(self, word: str) -> List[str]:
        return difflib.get_close_matches(word.lower(), self._words, n=self.max_suggestions)

    def _read_word_list(self, path: str) -> set[str]:
        try:
            with open(path, encoding="utf-8") as f:
                return {
                    word
                    for word in (line.strip() for line in f)
                    if word and not word.startswith("#")
                }
        except (OSError, UnicodeDecodeError) as e:
            raise CheckerInitializationError(
                f"Failed to read word list: {e}", dictionary_path=path, backend=self.backend_name
            ) from e
