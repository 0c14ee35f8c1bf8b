"""Proofmark exception hierarchy.

Every error raised by the annotation subsystem derives from ``ProofmarkError``
so that editor integrations can catch one type and keep the editing session
alive. Checker failures are local to the annotation subsystem: the engine logs
them and degrades rather than propagating them into document editing.
"""

from typing import Any, Dict, List, Optional


class ProofmarkError(Exception):
    """Base exception for all Proofmark errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        context: Additional error context and metadata
        recovery_suggestions: List of suggested recovery actions
        component: Component where the error originated
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
        component: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._default_error_code()
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []
        self.component = component or self._infer_component()

    def _default_error_code(self) -> str:
        """Generate default error code based on exception class name."""
        return self.__class__.__name__.upper().replace("ERROR", "_ERROR")

    def _infer_component(self) -> str:
        """Infer component name from exception class."""
        name = self.__class__.__name__.lower()
        if "checker" in name:
            return "checker"
        elif "projection" in name:
            return "projection"
        elif "dictionary" in name:
            return "dictionary"
        elif "edit" in name:
            return "document"
        elif "configuration" in name:
            return "config"
        else:
            return "core"

    def add_context(self, key: str, value: Any) -> None:
        """Add additional context to the error."""
        self.context[key] = value

    def add_recovery_suggestion(self, suggestion: str) -> None:
        """Add a recovery suggestion to help users resolve the error."""
        if suggestion not in self.recovery_suggestions:
            self.recovery_suggestions.append(suggestion)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to structured dictionary for logging/reporting."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "component": self.component,
            "context": self.context,
            "recovery_suggestions": self.recovery_suggestions,
        }


class ValidationError(ProofmarkError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        expected_type: Optional[str] = None,
        actual_value: Optional[Any] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        if field_name:
            self.add_context("field_name", field_name)
        if expected_type:
            self.add_context("expected_type", expected_type)
        if actual_value is not None:
            self.add_context("actual_value", str(actual_value))


class InvalidEditError(ValidationError):
    """Raised when a document edit addresses positions it cannot touch."""

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        document_size: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        if position is not None:
            self.add_context("position", position)
        if document_size is not None:
            self.add_context("document_size", document_size)


class ConfigurationError(ValidationError):
    """Raised when configuration is invalid or incomplete."""

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        config_section: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        if config_file:
            self.add_context("config_file", config_file)
        if config_section:
            self.add_context("config_section", config_section)


class ProjectionError(ProofmarkError):
    """Raised when a plain-text offset cannot be mapped back to the document."""

    def __init__(
        self,
        message: str,
        text_offset: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        if text_offset is not None:
            self.add_context("text_offset", text_offset)


class CheckerError(ProofmarkError):
    """Raised when the spell checker backend fails."""

    def __init__(
        self,
        message: str,
        backend: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        if backend:
            self.add_context("backend", backend)


class CheckerUnavailableError(CheckerError):
    """Raised when a check or suggestion is requested before initialization."""


class CheckerInitializationError(CheckerError):
    """Raised when dictionary data cannot be loaded into the checker."""

    def __init__(
        self,
        message: str,
        affix_path: Optional[str] = None,
        dictionary_path: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        if affix_path:
            self.add_context("affix_path", affix_path)
        if dictionary_path:
            self.add_context("dictionary_path", dictionary_path)
        self.add_recovery_suggestion("Check that the dictionary files exist and are readable")


class DictionaryError(ProofmarkError):
    """Raised when the custom word set or its store is misused."""

    def __init__(
        self,
        message: str,
        store_path: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        if store_path:
            self.add_context("store_path", store_path)
