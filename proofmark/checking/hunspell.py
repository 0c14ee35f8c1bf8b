"""Hunspell dictionary backends.

``HunspellChecker`` opens an ``.aff``/``.dic`` pair from disk with spylls, a
Python port of Hunspell, so affix rules, forbidden words and the other
``.aff`` directives behave the way they do in Hunspell itself.

``EnchantChecker`` uses PyEnchant to open a dictionary already installed on
the system by language tag (``en_US``, ``de_DE``...). It needs the enchant C
library at runtime.
"""

import logging
import threading
from itertools import islice
from pathlib import Path
from typing import Any, List, Optional

from spylls.hunspell import Dictionary

from ..core.dictionary import CustomWordSet
from ..core.exceptions import CheckerInitializationError
from .checker import SpellChecker

logger = logging.getLogger(__name__)


class HunspellChecker(SpellChecker):
    """
    Spell checker for Hunspell ``.aff``/``.dic`` files.

    The two files must share a base name (``en_US.aff`` next to
    ``en_US.dic``); either path may be given and the other is derived.

    Examples:
        >>> checker = HunspellChecker()
        >>> checker.init("dicts/en_US.aff", "dicts/en_US.dic")
        >>> checker.is_known("unlocks")
        True
    """

    backend_name = "hunspell"

    def __init__(
        self,
        custom_words: Optional[CustomWordSet] = None,
        max_suggestions: int = 5,
    ) -> None:
        super().__init__(custom_words)
        self.max_suggestions = max_suggestions
        self._dictionary: Optional[Dictionary] = None

    @staticmethod
    def _base_path(affix_path: Optional[str], dictionary_path: Optional[str]) -> str:
        if not affix_path and not dictionary_path:
            raise CheckerInitializationError(
                "Hunspell backend needs a .dic or .aff file", backend=HunspellChecker.backend_name
            )

        dictionary_base = Path(dictionary_path).with_suffix("") if dictionary_path else None
        affix_base = Path(affix_path).with_suffix("") if affix_path else None
        if dictionary_base and affix_base and dictionary_base != affix_base:
            raise CheckerInitializationError(
                "Affix and dictionary files must share a base name",
                affix_path=affix_path,
                dictionary_path=dictionary_path,
                backend=HunspellChecker.backend_name,
            )
        return str(dictionary_base or affix_base)

    def _load(self, affix_path: Optional[str], dictionary_path: Optional[str]) -> None:
        base = self._base_path(affix_path, dictionary_path)
        try:
            dictionary = Dictionary.from_files(base)
        except (OSError, UnicodeError, ValueError, LookupError) as e:
            raise CheckerInitializationError(
                f"Failed to load Hunspell dictionary: {e}",
                affix_path=f"{base}.aff",
                dictionary_path=f"{base}.dic",
                backend=self.backend_name,
            ) from e

        self._dictionary = dictionary
        logger.info(f"Hunspell dictionary loaded from {base}.dic")

    def is_known(self, word: str) -> bool:
        if self._dictionary is None:
            return False
        return self._dictionary.lookup(word)

    def suggest(self, word: str) -> List[str]:
        if self._dictionary is None:
            return []
        return list(islice(self._dictionary.suggest(word), self.max_suggestions))


class EnchantChecker(SpellChecker):
    """
    Spell checker for a system dictionary opened through PyEnchant.

    Examples:
        >>> checker = EnchantChecker("en_US")
        >>> checker.init()
        >>> checker.suggest("teh")[:1]
        ['the']
    """

    backend_name = "enchant"

    def __init__(
        self,
        language: str = "en_US",
        custom_words: Optional[CustomWordSet] = None,
        max_suggestions: int = 5,
    ) -> None:
        super().__init__(custom_words)
        self.language = language
        self.max_suggestions = max_suggestions
        self._dictionary: Any = None
        # enchant dictionaries are not safe to share between threads
        self._dictionary_lock = threading.Lock()

    def _load(self, affix_path: Optional[str], dictionary_path: Optional[str]) -> None:
        if affix_path or dictionary_path:
            raise CheckerInitializationError(
                "The enchant backend opens installed dictionaries by language, not files",
                affix_path=affix_path,
                dictionary_path=dictionary_path,
                backend=self.backend_name,
            )

        try:
            import enchant
        except ImportError as e:
            raise CheckerInitializationError(
                f"PyEnchant is not usable: {e}", backend=self.backend_name
            ) from e

        try:
            dictionary = enchant.Dict(self.language)
        except enchant.errors.Error as e:
            raise CheckerInitializationError(
                f"No enchant dictionary for {self.language}: {e}", backend=self.backend_name
            ) from e

        self._dictionary = dictionary
        logger.info(f"Enchant dictionary loaded for {self.language}")

    def is_known(self, word: str) -> bool:
        if self._dictionary is None:
            return False
        with self._dictionary_lock:
            return bool(self._dictionary.check(word))

    def suggest(self, word: str) -> List[str]:
        if self._dictionary is None:
            return []
        with self._dictionary_lock:
            return list(self._dictionary.suggest(word))[: self.max_suggestions]
