"""Proofmark: incremental spell-check annotations for live documents.

Proofmark runs a spell checker asynchronously against a structured document
that keeps changing while the check is in flight, and keeps the reported
misspellings anchored to the right text as the user types.
"""

__version__ = "0.1.0"

# Core API exports
from .core import (
    CheckerError,
    CheckerInitializationError,
    CheckerUnavailableError,
    ConfigurationError,
    CustomWordSet,
    DictionaryError,
    EditDelta,
    EngineConfig,
    ErrorSpan,
    InvalidEditError,
    ProjectionError,
    ProofmarkError,
    ResolvedAnnotation,
    StepMap,
    ValidationError,
)

# Document model and projection
from .document import (
    BlockNode,
    EditorDocument,
    HardBreak,
    InlineNode,
    TextNode,
    TextProjector,
    paragraph,
)

# Checkers
from .checking import (
    CheckerService,
    EnchantChecker,
    HunspellChecker,
    SpellChecker,
    SymSpellChecker,
    WordListChecker,
    create_checker,
)

# Annotation engine
from .annotation import AnnotationSet, CheckRequestManager, Debouncer, SpanResolver
from .engine import SpellCheckEngine
from .engine_builder import SpellCheckEngineBuilder
from .session import EditorSession
from .storage import CustomWordStore

__all__ = [
    "__version__",
    # Core
    "CustomWordSet",
    "EditDelta",
    "EngineConfig",
    "ErrorSpan",
    "ResolvedAnnotation",
    "StepMap",
    # Errors
    "ProofmarkError",
    "ValidationError",
    "InvalidEditError",
    "ConfigurationError",
    "ProjectionError",
    "CheckerError",
    "CheckerUnavailableError",
    "CheckerInitializationError",
    "DictionaryError",
    # Document
    "BlockNode",
    "EditorDocument",
    "HardBreak",
    "InlineNode",
    "TextNode",
    "TextProjector",
    "paragraph",
    # Checking
    "CheckerService",
    "EnchantChecker",
    "HunspellChecker",
    "SpellChecker",
    "SymSpellChecker",
    "WordListChecker",
    "create_checker",
    # Annotation engine
    "AnnotationSet",
    "CheckRequestManager",
    "Debouncer",
    "SpanResolver",
    "SpellCheckEngine",
    "SpellCheckEngineBuilder",
    "EditorSession",
    "CustomWordStore",
]
