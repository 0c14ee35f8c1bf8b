"""Core types, configuration and errors for Proofmark."""

from .config import EngineConfig
from .delta import EditDelta, StepMap
from .dictionary import CustomWordSet, normalize_apostrophes
from .exceptions import (
    CheckerError,
    CheckerInitializationError,
    CheckerUnavailableError,
    ConfigurationError,
    DictionaryError,
    InvalidEditError,
    ProjectionError,
    ProofmarkError,
    ValidationError,
)
from .types import ErrorSpan, ResolvedAnnotation

__all__ = [
    "EngineConfig",
    "EditDelta",
    "StepMap",
    "CustomWordSet",
    "normalize_apostrophes",
    "ErrorSpan",
    "ResolvedAnnotation",
    "ProofmarkError",
    "ValidationError",
    "InvalidEditError",
    "ConfigurationError",
    "ProjectionError",
    "CheckerError",
    "CheckerUnavailableError",
    "CheckerInitializationError",
    "DictionaryError",
]
