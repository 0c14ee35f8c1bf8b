"""Spell checker backends and the thread-pool service that runs them."""

from .checker import WORD_PATTERN, SpellChecker, WordListChecker
from .factory import create_checker, resolve_backend
from .hunspell import EnchantChecker, HunspellChecker
from .service import CheckerService, CheckOutcome
from .symspell import SymSpellChecker

__all__ = [
    "WORD_PATTERN",
    "SpellChecker",
    "WordListChecker",
    "SymSpellChecker",
    "HunspellChecker",
    "EnchantChecker",
    "create_checker",
    "resolve_backend",
    "CheckerService",
    "CheckOutcome",
]
