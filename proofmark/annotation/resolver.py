"""Resolve checker spans into annotations on the current document."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from ..core.delta import EditDelta
from ..core.types import ErrorSpan, ResolvedAnnotation
from ..document.projector import Projection

logger = logging.getLogger(__name__)


def map_range(
    start: int, end: int, delta: EditDelta, document_size: int
) -> Optional[Tuple[int, int]]:
    """
    Map a document range through ``delta``.

    Returns None when the range collapsed (its text was deleted) or no longer
    fits inside ``[0, document_size]``.
    """
    mapped_start = delta.map(start)
    mapped_end = delta.map(end)
    if mapped_end <= mapped_start:
        return None
    if mapped_start < 0 or mapped_end > document_size:
        return None
    return mapped_start, mapped_end


@dataclass
class ResolutionReport:
    """Outcome of resolving one batch of spans."""

    annotations: List[ResolvedAnnotation] = field(default_factory=list)
    unmapped: List[ErrorSpan] = field(default_factory=list)
    collapsed: List[ErrorSpan] = field(default_factory=list)

    @property
    def dropped_count(self) -> int:
        return len(self.unmapped) + len(self.collapsed)


class SpanResolver:
    """
    Turns text-offset spans, valid at request time, into document ranges
    valid now.

    For each span the containing offset-map entry is found by binary search,
    the span is converted to document positions of the snapshot the check ran
    against, and both endpoints are mapped through the request's delta. Spans
    whose text was deleted, that fall outside the current document, or that
    cannot be located in the offset map are dropped.

    Examples:
        >>> resolver = SpanResolver()
        >>> annotations = resolver.resolve(spans, delta, projection, document.content_size)
    """

    def resolve(
        self,
        spans: Iterable[ErrorSpan],
        delta: EditDelta,
        projection: Projection,
        document_size: int,
    ) -> List[ResolvedAnnotation]:
        return self.resolve_with_report(spans, delta, projection, document_size).annotations

    def resolve_with_report(
        self,
        spans: Iterable[ErrorSpan],
        delta: EditDelta,
        projection: Projection,
        document_size: int,
    ) -> ResolutionReport:
        report = ResolutionReport()
        for span in spans:
            entry = projection.locate(span.text_offset)
            if entry is None:
                # Offset falls on a separator or past the text; the projection
                # and the checker disagree, so the span cannot be placed.
                logger.debug(f"No offset-map entry for {span.word!r} at {span.text_offset}")
                report.unmapped.append(span)
                continue

            original_start = entry.to_document_position(span.text_offset)
            original_end = original_start + span.text_length
            if original_end > projection.document_size:
                report.unmapped.append(span)
                continue

            mapped = map_range(original_start, original_end, delta, document_size)
            if mapped is None:
                report.collapsed.append(span)
                continue

            report.annotations.append(
                ResolvedAnnotation(document_start=mapped[0], document_end=mapped[1], word=span.word)
            )

        if report.dropped_count:
            logger.debug(
                f"Resolved {len(report.annotations)} spans, dropped {len(report.collapsed)} "
                f"collapsed and {len(report.unmapped)} unmapped"
            )
        return report
