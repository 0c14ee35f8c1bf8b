"""Tests for engine and observability configuration."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from proofmark.core.config import EngineConfig
from proofmark.core.exceptions import ConfigurationError
from proofmark.observability.config import (
    LoggingConfig,
    ObservabilityConfig,
    get_config,
    load_config,
)


class TestEngineConfig:
    """Test EngineConfig defaults, validation and loading."""

    def test_defaults(self) -> None:
        config = EngineConfig()
        assert config.debounce_seconds == 0.5
        assert config.max_pending_age == 30.0
        assert config.max_workers == 2
        assert config.language == "en_US"
        assert config.backend == "auto"

    @pytest.mark.parametrize(
        "kwargs,field,expected",
        [
            ({"debounce_seconds": -1}, "debounce_seconds", 0.5),
            ({"max_pending_age": 0}, "max_pending_age", 30.0),
            ({"max_workers": 0}, "max_workers", 2),
            ({"max_workers": "4"}, "max_workers", 2),
            ({"language": "  "}, "language", "en_US"),
            ({"backend": "aspell"}, "backend", "auto"),
        ],
    )
    def test_invalid_values_replaced_by_defaults(
        self, kwargs, field: str, expected, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="proofmark.core.config"):
            config = EngineConfig(**kwargs)
        assert getattr(config, field) == expected
        assert caplog.records

    def test_dictionary_paths_from_directory(self, tmp_path: Path) -> None:
        config = EngineConfig(dictionary_dir=str(tmp_path), language="en_GB")
        assert config.resolve_dictionary_paths() == (
            str(tmp_path / "en_GB.aff"),
            str(tmp_path / "en_GB.dic"),
        )

    def test_explicit_paths_win(self, tmp_path: Path) -> None:
        config = EngineConfig(dictionary_dir=str(tmp_path), dictionary_path="/x/custom.dic")
        affix, dictionary = config.resolve_dictionary_paths()
        assert dictionary == "/x/custom.dic"
        assert affix == str(tmp_path / "en_US.aff")

    def test_no_paths(self) -> None:
        assert EngineConfig().resolve_dictionary_paths() == (None, None)

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROOFMARK_DEBOUNCE_SECONDS", "0.25")
        monkeypatch.setenv("PROOFMARK_MAX_PENDING_AGE", "5")
        monkeypatch.setenv("PROOFMARK_MAX_WORKERS", "3")
        monkeypatch.setenv("PROOFMARK_LANGUAGE", "de_DE")
        monkeypatch.setenv("PROOFMARK_DICTIONARY_DIR", "/dicts")
        monkeypatch.setenv("PROOFMARK_BACKEND", "hunspell")
        config = EngineConfig.from_environment()
        assert config.debounce_seconds == 0.25
        assert config.max_pending_age == 5.0
        assert config.max_workers == 3
        assert config.language == "de_DE"
        assert config.dictionary_dir == "/dicts"
        assert config.backend == "hunspell"

    def test_from_environment_keeps_base_on_bad_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROOFMARK_MAX_WORKERS", "many")
        monkeypatch.delenv("PROOFMARK_DEBOUNCE_SECONDS", raising=False)
        base = EngineConfig(max_workers=4, debounce_seconds=1.0)
        config = EngineConfig.from_environment(base=base)
        assert config.max_workers == 4
        assert config.debounce_seconds == 1.0

    def test_load_from_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "proofmark.yaml"
        config_file.write_text(
            "proofmark:\n  debounce_seconds: 0.1\n  max_workers: 4\n  bogus: 1\n", encoding="utf-8"
        )
        config = EngineConfig.load_from_file(config_file)
        assert config.debounce_seconds == 0.1
        assert config.max_workers == 4

    def test_load_from_file_top_level_mapping(self, tmp_path: Path) -> None:
        config_file = tmp_path / "proofmark.yaml"
        config_file.write_text("language: fr_FR\n", encoding="utf-8")
        assert EngineConfig.load_from_file(config_file).language == "fr_FR"

    def test_load_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            EngineConfig.load_from_file(tmp_path / "missing.yaml")

    def test_load_non_mapping(self, tmp_path: Path) -> None:
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            EngineConfig.load_from_file(config_file)

    def test_to_dict(self) -> None:
        assert EngineConfig().to_dict()["max_pending_age"] == 30.0


class TestObservabilityConfig:
    """Test the pydantic logging configuration."""

    def test_defaults(self) -> None:
        config = ObservabilityConfig()
        assert config.logging.level == "WARNING"
        assert config.logging.format == "text"
        assert config.to_dict()["logging"]["output"] == "stderr"

    def test_level_is_normalized(self) -> None:
        assert LoggingConfig(level="debug").level == "DEBUG"

    @pytest.mark.parametrize("kwargs", [{"level": "LOUD"}, {"format": "xml"}, {"output": "syslog"}])
    def test_invalid_values_rejected(self, kwargs) -> None:
        with pytest.raises(PydanticValidationError):
            LoggingConfig(**kwargs)

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROOFMARK_LOG_LEVEL", "info")
        monkeypatch.setenv("PROOFMARK_LOG_FORMAT", "JSON")
        config = ObservabilityConfig.from_env()
        assert config.logging.level == "INFO"
        assert config.logging.format == "json"

    def test_from_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "observability:\n  logging:\n    level: ERROR\n    format: json\n", encoding="utf-8"
        )
        config = ObservabilityConfig.from_file(config_file)
        assert config.logging.level == "ERROR"
        assert config.logging.format == "json"

    def test_from_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            ObservabilityConfig.from_file(tmp_path / "nope.yaml")

    def test_load_config_sets_global(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("observability:\n  logging:\n    level: DEBUG\n", encoding="utf-8")
        loaded = load_config(config_file)
        assert get_config() is loaded
