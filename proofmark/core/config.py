"""Runtime configuration for the spell-check annotation engine.

Configuration comes from three places, in increasing order of precedence:
dataclass defaults, a YAML file (``EngineConfig.load_from_file``) and
environment variables (``EngineConfig.from_environment``). Invalid values are
logged and replaced by defaults so that a bad setting never stops the editor.
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional, Tuple

import yaml

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.5
DEFAULT_MAX_PENDING_AGE = 30.0
DEFAULT_MAX_WORKERS = 2
DEFAULT_LANGUAGE = "en_US"
DEFAULT_BACKEND = "auto"
CHECKER_BACKENDS = ("auto", "symspell", "hunspell", "enchant", "wordlist")


@dataclass
class EngineConfig:
    """Engine tuning and dictionary location.

    Attributes:
        debounce_seconds: Quiescence window before an edit-triggered check fires
        max_pending_age: Seconds a check may stay pending before it is evicted
        max_workers: Worker threads running checks and suggestion lookups
        backend: Checker backend, one of ``CHECKER_BACKENDS``; ``auto`` picks
            hunspell for ``.dic``/``.aff`` files and symspell otherwise
        language: Dictionary language code, used to derive dictionary file names
        dictionary_dir: Directory holding ``<language>.aff`` and ``<language>.dic``
        affix_path: Explicit affix file, overrides ``dictionary_dir``
        dictionary_path: Explicit dictionary file, overrides ``dictionary_dir``
    """

    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS
    max_pending_age: float = DEFAULT_MAX_PENDING_AGE
    max_workers: int = DEFAULT_MAX_WORKERS
    backend: str = DEFAULT_BACKEND
    language: str = DEFAULT_LANGUAGE
    dictionary_dir: Optional[str] = None
    affix_path: Optional[str] = None
    dictionary_path: Optional[str] = None

    def __post_init__(self) -> None:
        self._validate_debounce()
        self._validate_pending_age()
        self._validate_workers()
        self._validate_backend()
        if not self.language or not str(self.language).strip():
            logger.warning(f"Empty language, using {DEFAULT_LANGUAGE}")
            self.language = DEFAULT_LANGUAGE

    def _validate_debounce(self) -> None:
        if not isinstance(self.debounce_seconds, (int, float)) or self.debounce_seconds < 0:
            logger.warning(
                f"debounce_seconds must be a non-negative number, got "
                f"{self.debounce_seconds!r}, using {DEFAULT_DEBOUNCE_SECONDS}"
            )
            self.debounce_seconds = DEFAULT_DEBOUNCE_SECONDS

    def _validate_pending_age(self) -> None:
        if not isinstance(self.max_pending_age, (int, float)) or self.max_pending_age <= 0:
            logger.warning(
                f"max_pending_age must be a positive number, got "
                f"{self.max_pending_age!r}, using {DEFAULT_MAX_PENDING_AGE}"
            )
            self.max_pending_age = DEFAULT_MAX_PENDING_AGE

    def _validate_workers(self) -> None:
        if not isinstance(self.max_workers, int) or self.max_workers <= 0:
            logger.warning(
                f"max_workers must be a positive integer, got "
                f"{self.max_workers!r}, using {DEFAULT_MAX_WORKERS}"
            )
            self.max_workers = DEFAULT_MAX_WORKERS

    def _validate_backend(self) -> None:
        if self.backend not in CHECKER_BACKENDS:
            logger.warning(
                f"backend must be one of {list(CHECKER_BACKENDS)}, got "
                f"{self.backend!r}, using {DEFAULT_BACKEND}"
            )
            self.backend = DEFAULT_BACKEND

    def resolve_dictionary_paths(self) -> Tuple[Optional[str], Optional[str]]:
        """Return ``(affix_path, dictionary_path)``, deriving them from the directory if needed."""
        affix_path = self.affix_path
        dictionary_path = self.dictionary_path
        if self.dictionary_dir:
            base = Path(self.dictionary_dir)
            affix_path = affix_path or str(base / f"{self.language}.aff")
            dictionary_path = dictionary_path or str(base / f"{self.language}.dic")
        return affix_path, dictionary_path

    @classmethod
    def from_environment(cls, base: Optional["EngineConfig"] = None) -> "EngineConfig":
        """Load configuration from environment variables.

        Environment Variables:
            PROOFMARK_DEBOUNCE_SECONDS: Debounce window in seconds
            PROOFMARK_MAX_PENDING_AGE: Pending request eviction age in seconds
            PROOFMARK_MAX_WORKERS: Worker thread count
            PROOFMARK_BACKEND: Checker backend
            PROOFMARK_LANGUAGE: Dictionary language code
            PROOFMARK_DICTIONARY_DIR: Directory containing the dictionary files
        """
        base = base or cls()
        config = cls(
            debounce_seconds=cls._get_env_float("PROOFMARK_DEBOUNCE_SECONDS", base.debounce_seconds),
            max_pending_age=cls._get_env_float("PROOFMARK_MAX_PENDING_AGE", base.max_pending_age),
            max_workers=cls._get_env_int("PROOFMARK_MAX_WORKERS", base.max_workers),
            backend=os.getenv("PROOFMARK_BACKEND", base.backend).strip(),
            language=os.getenv("PROOFMARK_LANGUAGE", base.language).strip(),
            dictionary_dir=os.getenv("PROOFMARK_DICTIONARY_DIR", base.dictionary_dir),
            affix_path=base.affix_path,
            dictionary_path=base.dictionary_path,
        )
        logger.debug(f"Loaded configuration from environment: {config}")
        return config

    @classmethod
    def load_from_file(cls, config_path: Path) -> "EngineConfig":
        """Load configuration from a YAML file.

        The mapping may be at the top level or nested under a ``proofmark`` key.

        Raises:
            ConfigurationError: If the file is missing or not a mapping
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}", config_file=str(config_path)
            )

        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration file must contain a mapping", config_file=str(config_path)
            )
        if "proofmark" in data:
            data = data["proofmark"] or {}

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {sorted(unknown)}")

        return cls(**{key: value for key, value in data.items() if key in known})

    @staticmethod
    def _get_env_float(key: str, default: float) -> float:
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return float(value.strip())
        except ValueError:
            logger.warning(
                f"Environment variable {key}={value} is not a valid number, using default {default}"
            )
            return default

    @staticmethod
    def _get_env_int(key: str, default: int) -> int:
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return int(value.strip())
        except ValueError:
            logger.warning(
                f"Environment variable {key}={value} is not a valid integer, using default {default}"
            )
            return default

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
