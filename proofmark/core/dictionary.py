"""In-memory custom dictionary: words the user has accepted."""

import logging
from typing import Iterable, Iterator, List

from .exceptions import ValidationError

logger = logging.getLogger(__name__)

TYPOGRAPHIC_APOSTROPHE = "’"
ASCII_APOSTROPHE = "'"


def normalize_apostrophes(word: str) -> str:
    """Replace the typographic apostrophe with the ASCII one."""
    return word.replace(TYPOGRAPHIC_APOSTROPHE, ASCII_APOSTROPHE)


class CustomWordSet:
    """
    Append-only, insertion-ordered set of user-accepted words.

    Membership is case-sensitive. Apostrophes are compared in normalized form,
    so ``don’t`` and ``don't`` are the same entry for exclusion purposes.

    Examples:
        >>> words = CustomWordSet(["Kevin"])
        >>> words.is_excluded("Kevin"), words.is_excluded("kevin")
        (True, False)
    """

    def __init__(self, words: Iterable[str] = ()) -> None:
        self._words: dict[str, None] = {}
        self._normalized: set[str] = set()
        for word in words:
            self.add(word)

    def add(self, word: str) -> bool:
        """Add ``word``. Returns False when it was already present."""
        if not isinstance(word, str) or not word.strip():
            raise ValidationError(
                "custom word must be a non-empty string",
                field_name="word",
                expected_type="str",
                actual_value=word,
            )
        if word in self._words:
            return False
        self._words[word] = None
        self._normalized.add(normalize_apostrophes(word))
        logger.debug(f"Added custom word {word!r} ({len(self._words)} total)")
        return True

    def is_excluded(self, word: str) -> bool:
        """Whether ``word`` must not be reported as a misspelling."""
        return word in self._words or normalize_apostrophes(word) in self._normalized

    @property
    def words(self) -> List[str]:
        return list(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_excluded(word)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._words))

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return f"CustomWordSet({len(self._words)} words)"
