"""Check request lifecycle: issue, accumulate edits, accept or drop results.

The correctness rule is simple and must stay that way: a result is applied if
and only if its request is still pending when the result arrives. Requests are
never cancelled; a request that is no longer in the pending map (already
resolved, evicted, or discarded) has its result silently dropped.

Every pending request carries the delta of all edits made since it was issued.
``on_edit`` must run synchronously with each document edit so that a result is
never resolved against a delta that is missing an earlier edit.
"""

import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..checking.service import CheckerService
from ..core.delta import EditDelta, StepMap
from ..core.exceptions import CheckerError
from ..core.types import ErrorSpan
from ..document.projector import Projection

logger = logging.getLogger(__name__)


@dataclass
class CheckRequest:
    """
    A check in flight.

    Attributes:
        request_id: Unique, monotonically assigned identifier
        projection: Text and offset map the check was issued against
        issued_at: Clock reading at issue time, used for eviction
        delta: Edits applied to the document since issue
    """

    request_id: int
    projection: Projection
    issued_at: float
    delta: EditDelta = field(default_factory=EditDelta.empty)


@dataclass(frozen=True)
class AcceptedResult:
    """A result whose request was still pending on arrival."""

    request: CheckRequest
    spans: Tuple[ErrorSpan, ...]

    @property
    def request_id(self) -> int:
        return self.request.request_id

    @property
    def delta(self) -> EditDelta:
        return self.request.delta


class CheckRequestManager:
    """
    Tracks pending check requests for one editor session.

    Args:
        service: Checker service the checks are dispatched to
        clock: Monotonic clock used for issue timestamps and eviction
        max_pending_age: Seconds after which a pending request is evicted
    """

    def __init__(
        self,
        service: CheckerService,
        clock: Callable[[], float] = time.monotonic,
        max_pending_age: float = 30.0,
    ) -> None:
        self._service = service
        self._clock = clock
        self.max_pending_age = max_pending_age
        self._ids = itertools.count(1)
        self._pending: Dict[int, CheckRequest] = {}

    def issue(self, projection: Projection) -> int:
        """Register a pending request and dispatch the check. Never blocks."""
        request_id = next(self._ids)
        self._pending[request_id] = CheckRequest(
            request_id=request_id,
            projection=projection,
            issued_at=self._clock(),
        )
        try:
            self._service.submit_check(request_id, projection.text)
        except RuntimeError as e:
            del self._pending[request_id]
            raise CheckerError(f"Could not dispatch check {request_id}: {e}") from e

        logger.debug(
            f"Issued check {request_id} for {len(projection.text)} characters "
            f"({len(self._pending)} pending)"
        )
        return request_id

    def on_edit(self, step: StepMap) -> None:
        """Append one edit step to every pending request's delta."""
        if step.is_identity:
            return
        for request in self._pending.values():
            request.delta = request.delta.extend(step)

    def on_edits(self, steps: Iterable[StepMap]) -> None:
        for step in steps:
            self.on_edit(step)

    def on_result(self, request_id: int, spans: Iterable[ErrorSpan]) -> Optional[AcceptedResult]:
        """Accept the result if its request is pending, consuming the request."""
        request = self._pending.pop(request_id, None)
        if request is None:
            logger.debug(f"Dropping stale result for check {request_id}")
            return None
        return AcceptedResult(request=request, spans=tuple(spans))

    def discard(self, request_id: int) -> bool:
        """Forget a request whose check failed."""
        return self._pending.pop(request_id, None) is not None

    def evict_expired(self, now: Optional[float] = None) -> List[int]:
        """Drop requests pending for longer than ``max_pending_age``."""
        now = self._clock() if now is None else now
        expired = [
            request_id
            for request_id, request in self._pending.items()
            if now - request.issued_at > self.max_pending_age
        ]
        for request_id in expired:
            del self._pending[request_id]
        if expired:
            logger.warning(f"Evicted {len(expired)} checks pending longer than {self.max_pending_age}s")
        return expired

    def clear(self) -> None:
        self._pending.clear()

    def is_pending(self, request_id: int) -> bool:
        return request_id in self._pending

    def get(self, request_id: int) -> Optional[CheckRequest]:
        return self._pending.get(request_id)

    @property
    def pending_ids(self) -> List[int]:
        return list(self._pending)

    def __len__(self) -> int:
        return len(self._pending)
