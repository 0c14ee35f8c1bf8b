"""Factory choosing the spell checker backend for a configuration."""

import logging
from typing import Optional

from ..core.config import EngineConfig
from ..core.dictionary import CustomWordSet
from .checker import SpellChecker, WordListChecker
from .hunspell import EnchantChecker, HunspellChecker
from .symspell import SymSpellChecker

logger = logging.getLogger(__name__)


def resolve_backend(config: EngineConfig) -> str:
    """Return the concrete backend name for ``config``.

    ``auto`` means hunspell when Hunspell files are configured and symspell
    (with its bundled English dictionary when no file is given) otherwise.
    """
    if config.backend != "auto":
        return config.backend
    affix_path, dictionary_path = config.resolve_dictionary_paths()
    if affix_path or (dictionary_path and dictionary_path.endswith(".dic")):
        return "hunspell"
    return "symspell"


def create_checker(
    config: EngineConfig, custom_words: Optional[CustomWordSet] = None
) -> SpellChecker:
    """Create an uninitialized checker for ``config``.

    Examples:
        >>> create_checker(EngineConfig(dictionary_path="en_US.dic")).backend_name
        'hunspell'
        >>> create_checker(EngineConfig()).backend_name
        'symspell'
    """
    backend = resolve_backend(config)
    logger.debug(f"Creating {backend} checker")
    if backend == "hunspell":
        return HunspellChecker(custom_words)
    if backend == "enchant":
        return EnchantChecker(config.language, custom_words)
    if backend == "wordlist":
        return WordListChecker(custom_words=custom_words)
    return SymSpellChecker(custom_words)
