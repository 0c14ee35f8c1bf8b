"""Check request lifecycle, span resolution and the rendered annotation set."""

from .annotations import AnnotationSet
from .debounce import Debouncer
from .lifecycle import AcceptedResult, CheckRequest, CheckRequestManager
from .resolver import ResolutionReport, SpanResolver, map_range

__all__ = [
    "AnnotationSet",
    "Debouncer",
    "AcceptedResult",
    "CheckRequest",
    "CheckRequestManager",
    "ResolutionReport",
    "SpanResolver",
    "map_range",
]
