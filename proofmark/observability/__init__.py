"""Proofmark logging configuration."""

from .config import LoggingConfig, ObservabilityConfig, get_config, load_config, set_config
from .logging import configure_logging, correlation_context, correlation_id, get_logger

__all__ = [
    "LoggingConfig",
    "ObservabilityConfig",
    "get_config",
    "load_config",
    "set_config",
    "configure_logging",
    "correlation_context",
    "correlation_id",
    "get_logger",
]
