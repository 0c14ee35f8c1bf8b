"""Configuration for logging."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: str = Field(default="WARNING", description="Log level")
    format: Literal["json", "text"] = Field(default="text", description="Log format (json or text)")
    enable_correlation: bool = Field(default=True, description="Attach correlation IDs to events")
    output: Literal["stdout", "stderr", "file"] = Field(
        default="stderr", description="Log output (stdout, stderr or file)"
    )
    file_path: str | None = Field(default=None, description="Log file path")

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


class ObservabilityConfig(BaseModel):
    """Main configuration for observability."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, config_path: Path | str) -> ObservabilityConfig:
        """Load configuration from a YAML file."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}

        observability_data = config_data.get("observability", {})
        return cls(**observability_data)

    @classmethod
    def from_env(cls) -> ObservabilityConfig:
        """Load configuration from environment variables."""
        logging_data: dict[str, Any] = {}
        if level := os.getenv("PROOFMARK_LOG_LEVEL"):
            logging_data["level"] = level
        if log_format := os.getenv("PROOFMARK_LOG_FORMAT"):
            logging_data["format"] = log_format.lower()
        if log_file := os.getenv("PROOFMARK_LOG_FILE"):
            logging_data["output"] = "file"
            logging_data["file_path"] = log_file
        logging_data["enable_correlation"] = (
            os.getenv("PROOFMARK_LOG_CORRELATION", "true").lower() == "true"
        )
        return cls(logging=LoggingConfig(**logging_data))

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()


# Global configuration instance
_config: ObservabilityConfig | None = None


def get_config() -> ObservabilityConfig:
    """Get the global observability configuration."""
    global _config
    if _config is None:
        _config = ObservabilityConfig.from_env()
    return _config


def set_config(config: ObservabilityConfig | None) -> None:
    """Set the global observability configuration."""
    global _config
    _config = config


def load_config(config_path: Path | str | None = None) -> ObservabilityConfig:
    """Load and set the global configuration."""
    if config_path:
        config = ObservabilityConfig.from_file(config_path)
    else:
        config = ObservabilityConfig.from_env()
    set_config(config)
    return config
