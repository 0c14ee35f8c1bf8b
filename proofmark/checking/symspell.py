"""SymSpell-backed spell checker.

Uses symspellpy for dictionary lookups and edit-distance suggestions. The
dictionary is a SymSpell frequency dictionary (``term count`` per line), or
the English frequency dictionary bundled with symspellpy when no path is
given. Hunspell ``.dic`` files belong to ``HunspellChecker``.
"""

import logging
from importlib import resources
from typing import List, Optional

from symspellpy import SymSpell, Verbosity

from ..core.dictionary import CustomWordSet
from ..core.exceptions import CheckerInitializationError
from .checker import SpellChecker

logger = logging.getLogger(__name__)


class SymSpellChecker(SpellChecker):
    """
    Spell checker using symspellpy.

    Examples:
        >>> checker = SymSpellChecker()
        >>> checker.init()  # bundled English dictionary
        >>> checker.suggest("teh")[:1]
        ['the']
    """

    backend_name = "symspell"

    FREQUENCY_DICT = "frequency_dictionary_en_82_765.txt"

    def __init__(
        self,
        custom_words: Optional[CustomWordSet] = None,
        max_edit_distance: int = 2,
        prefix_length: int = 7,
        max_suggestions: int = 5,
    ) -> None:
        super().__init__(custom_words)
        self.max_edit_distance = max_edit_distance
        self.prefix_length = prefix_length
        self.max_suggestions = max_suggestions
        self._sym_spell: Optional[SymSpell] = None

    def _load(self, affix_path: Optional[str], dictionary_path: Optional[str]) -> None:
        sym_spell = SymSpell(
            max_dictionary_edit_distance=self.max_edit_distance,
            prefix_length=self.prefix_length,
        )

        if affix_path or (dictionary_path and dictionary_path.endswith(".dic")):
            raise CheckerInitializationError(
                "Hunspell dictionaries need the hunspell backend",
                affix_path=affix_path,
                dictionary_path=dictionary_path,
                backend=self.backend_name,
            )

        source = dictionary_path or str(resources.files("symspellpy") / self.FREQUENCY_DICT)
        try:
            loaded = sym_spell.load_dictionary(source, term_index=0, count_index=1)
        except (OSError, ValueError) as e:
            raise CheckerInitializationError(
                f"Failed to load frequency dictionary: {e}",
                dictionary_path=source,
                backend=self.backend_name,
            ) from e

        if not loaded or not sym_spell.words:
            raise CheckerInitializationError(
                "Dictionary could not be loaded",
                affix_path=affix_path,
                dictionary_path=source,
                backend=self.backend_name,
            )

        self._sym_spell = sym_spell
        logger.info(f"SymSpell dictionary loaded from {source} ({len(sym_spell.words)} terms)")

    def is_known(self, word: str) -> bool:
        if self._sym_spell is None:
            return False
        words = self._sym_spell.words
        return word in words or word.lower() in words

    def suggest(self, word: str) -> List[str]:
        if self._sym_spell is None:
            return []
        results = self._sym_spell.lookup(
            word,
            Verbosity.CLOSEST,
            max_edit_distance=self.max_edit_distance,
            transfer_casing=True,
        )
        suggestions = [item.term for item in results if item.term != word]
        return suggestions[: self.max_suggestions]
