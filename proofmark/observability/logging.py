"""Structured logging with correlation IDs.

Library modules log through ``logging.getLogger(__name__)``. ``configure_logging``
installs a structlog ``ProcessorFormatter`` on the ``proofmark`` logger so those
stdlib records and structlog events share one renderer and both carry the
active correlation ID.
"""

from __future__ import annotations

import contextvars
import logging
import sys
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Generator, Optional

import structlog

from .config import LoggingConfig, get_config

PACKAGE_LOGGER = "proofmark"

# Context variable for correlation IDs
correlation_id: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)


def add_correlation_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add correlation ID to log events."""
    corr_id = correlation_id.get()
    if corr_id:
        event_dict["correlation_id"] = corr_id
    return event_dict


def add_timestamp(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add timestamp to log events."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_level(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add log level to event dict."""
    event_dict["level"] = method_name.upper()
    return event_dict


def _build_handler(config: LoggingConfig) -> logging.Handler:
    if config.output == "file":
        if not config.file_path:
            raise ValueError("file_path is required when logging output is 'file'")
        return logging.FileHandler(config.file_path, encoding="utf-8")
    stream = sys.stdout if config.output == "stdout" else sys.stderr
    return logging.StreamHandler(stream)


def _writes_to_terminal(handler: logging.Handler) -> bool:
    if isinstance(handler, logging.FileHandler) or not isinstance(handler, logging.StreamHandler):
        return False
    isatty = getattr(handler.stream, "isatty", None)
    return bool(isatty and isatty())


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """Configure structured logging.

    Calling this again replaces the handler installed by the previous call.
    """
    if config is None:
        config = get_config().logging

    shared_processors: list[Any] = [
        add_timestamp,
        add_level,
        structlog.stdlib.add_logger_name,
    ]
    if config.enable_correlation:
        shared_processors.append(add_correlation_id)

    handler = _build_handler(config)
    if config.format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=_writes_to_terminal(handler))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
            foreign_pre_chain=shared_processors,
        )
    )
    handler.set_name("proofmark-structlog")

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        if existing.get_name() == "proofmark-structlog":
            package_logger.removeHandler(existing)
            existing.close()
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, config.level, logging.WARNING))


def get_logger(name: str) -> Any:
    """Get a structlog logger instance."""
    return structlog.get_logger(name)


@contextmanager
def correlation_context(corr_id: Optional[str] = None) -> Generator[str, None, None]:
    """Context manager for correlation ID."""
    if corr_id is None:
        corr_id = str(uuid.uuid4())

    token = correlation_id.set(corr_id)
    try:
        yield corr_id
    finally:
        correlation_id.reset(token)
