"""Builder pattern for advanced SpellCheckEngine configuration."""

import time
from dataclasses import replace
from typing import Callable, Iterable, List, Optional

from proofmark.checking.checker import SpellChecker
from proofmark.checking.service import CheckerService
from proofmark.checking.factory import create_checker
from proofmark.core.config import CHECKER_BACKENDS, EngineConfig
from proofmark.engine import SpellCheckEngine


class SpellCheckEngineBuilder:
    """Fluent builder for SpellCheckEngine.

    Examples:
        # Hunspell dictionary with a shorter debounce window
        engine = SpellCheckEngine.builder()
            .with_dictionary("en_US.dic", affix_path="en_US.aff")
            .with_debounce(0.25)
            .build()

        # Deterministic engine for tests
        engine = SpellCheckEngine.builder()
            .with_checker(WordListChecker(["the", "quick", "fox"]))
            .with_service(fake_service)
            .with_clock(fake_clock)
            .build()
    """

    def __init__(self) -> None:
        """Initialize builder with default values."""
        self._config = EngineConfig()
        self._checker: Optional[SpellChecker] = None
        self._service: Optional[CheckerService] = None
        self._custom_words: List[str] = []
        self._clock: Callable[[], float] = time.monotonic

    def with_config(self, config: EngineConfig) -> "SpellCheckEngineBuilder":
        """Replace the whole engine configuration.

        Args:
            config: EngineConfig to start from

        Returns:
            Self for method chaining
        """
        self._config = config
        return self

    def with_checker(self, checker: SpellChecker) -> "SpellCheckEngineBuilder":
        """Set the spell checker backend.

        Args:
            checker: Backend used for checks and suggestions

        Returns:
            Self for method chaining
        """
        self._checker = checker
        return self

    def with_service(self, service: CheckerService) -> "SpellCheckEngineBuilder":
        """Dispatch checks through an existing service instead of a private pool."""
        self._service = service
        return self

    def with_dictionary(
        self, dictionary_path: str, affix_path: Optional[str] = None
    ) -> "SpellCheckEngineBuilder":
        """Set explicit dictionary files.

        Args:
            dictionary_path: Hunspell ``.dic`` or SymSpell frequency dictionary
            affix_path: Optional Hunspell ``.aff`` file

        Returns:
            Self for method chaining
        """
        self._config = replace(self._config, dictionary_path=dictionary_path, affix_path=affix_path)
        return self

    def with_dictionary_dir(self, directory: str, language: Optional[str] = None) -> "SpellCheckEngineBuilder":
        """Look up ``<directory>/<language>.dic`` and ``.aff``."""
        self._config = replace(
            self._config,
            dictionary_dir=directory,
            language=language or self._config.language,
        )
        return self

    def with_debounce(self, seconds: float) -> "SpellCheckEngineBuilder":
        """Set the quiescence window after which an edit triggers a check.

        Args:
            seconds: Window length, non-negative

        Returns:
            Self for method chaining

        Raises:
            ValueError: If seconds is negative
        """
        if seconds < 0:
            raise ValueError("Debounce window must be non-negative")
        self._config = replace(self._config, debounce_seconds=seconds)
        return self

    def with_backend(self, backend: str) -> "SpellCheckEngineBuilder":
        """Choose the checker backend used when no checker is given.

        Raises:
            ValueError: If backend is not one of ``CHECKER_BACKENDS``
        """
        if backend not in CHECKER_BACKENDS:
            raise ValueError(f"Unknown backend {backend!r}, expected one of {list(CHECKER_BACKENDS)}")
        self._config = replace(self._config, backend=backend)
        return self

    def with_max_pending_age(self, seconds: float) -> "SpellCheckEngineBuilder":
        """Set how long a check may stay pending before it is evicted.

        Raises:
            ValueError: If seconds is not positive
        """
        if seconds <= 0:
            raise ValueError("Maximum pending age must be positive")
        self._config = replace(self._config, max_pending_age=seconds)
        return self

    def with_max_workers(self, workers: int) -> "SpellCheckEngineBuilder":
        """Set the checker thread pool size.

        Raises:
            ValueError: If workers is less than one
        """
        if workers < 1:
            raise ValueError("At least one worker is required")
        self._config = replace(self._config, max_workers=workers)
        return self

    def with_custom_words(self, words: Iterable[str]) -> "SpellCheckEngineBuilder":
        """Add words the checker must never report.

        Args:
            words: Words to seed the custom word set with

        Returns:
            Self for method chaining
        """
        self._custom_words.extend(words)
        return self

    def with_clock(self, clock: Callable[[], float]) -> "SpellCheckEngineBuilder":
        """Set the monotonic clock driving debounce and eviction."""
        self._clock = clock
        return self

    def build(self) -> SpellCheckEngine:
        """Build and return the configured SpellCheckEngine instance.

        The checker is not initialized; call ``initialize`` on the result.

        Returns:
            Configured SpellCheckEngine instance
        """
        checker = self._checker
        if checker is None:
            checker = (
                self._service.checker if self._service is not None else create_checker(self._config)
            )
        return SpellCheckEngine(
            checker,
            config=self._config,
            custom_words=list(self._custom_words),
            service=self._service,
            clock=self._clock,
        )

    def reset(self) -> "SpellCheckEngineBuilder":
        """Reset builder to default values.

        Returns:
            Self for method chaining
        """
        self._config = EngineConfig()
        self._checker = None
        self._service = None
        self._custom_words = []
        self._clock = time.monotonic
        return self
