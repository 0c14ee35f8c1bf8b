"""Asynchronous access to a spell checker.

Checks and suggestion lookups run on a thread pool so the control thread never
blocks on the checker. Completed checks are queued in a thread-safe inbox and
handed back to the control thread by ``drain``; nothing in the engine is
touched from a worker thread.
"""

import logging
import queue
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from ..core.types import ErrorSpan
from .checker import SpellChecker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckOutcome:
    """Result of one check as delivered to the control thread."""

    request_id: int
    spans: Tuple[ErrorSpan, ...] = ()
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CheckerService:
    """
    Thread-pool front end for a ``SpellChecker``.

    Args:
        checker: Backend performing the actual checks
        max_workers: Size of the worker pool when no executor is supplied
        executor: Executor to run checks on; the service owns and shuts down
            only the pool it creates itself
    """

    def __init__(
        self,
        checker: SpellChecker,
        max_workers: int = 2,
        executor: Optional[Executor] = None,
    ) -> None:
        self.checker = checker
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="proofmark-check"
        )
        self._inbox: "queue.SimpleQueue[CheckOutcome]" = queue.SimpleQueue()
        logger.debug(f"CheckerService started for {checker.backend_name} backend")

    @property
    def available(self) -> bool:
        return self.checker.is_initialized

    def init(
        self,
        affix_path: Optional[str] = None,
        dictionary_path: Optional[str] = None,
        custom_words: Iterable[str] = (),
    ) -> None:
        self.checker.init(affix_path, dictionary_path, custom_words)

    def add_custom_word(self, word: str) -> bool:
        return self.checker.add_custom_word(word)

    def submit_check(self, request_id: int, text: str) -> Future:
        """Run a check off-thread; its outcome lands in the inbox when done."""
        future = self._executor.submit(self.checker.check, text)
        future.add_done_callback(lambda done: self._inbox.put(self._to_outcome(request_id, done)))
        return future

    def submit_suggest(self, word: str) -> Future:
        return self._executor.submit(self.checker.get_suggestions, word)

    def drain(self) -> List[CheckOutcome]:
        """Outcomes delivered since the last call, in completion order."""
        outcomes = []
        while True:
            try:
                outcomes.append(self._inbox.get_nowait())
            except queue.Empty:
                return outcomes

    def next_outcome(self, timeout: Optional[float] = None) -> Optional[CheckOutcome]:
        """Block until one outcome is delivered; None on timeout."""
        try:
            return self._inbox.get(timeout=timeout)
        except queue.Empty:
            return None

    def shutdown(self, wait: bool = False) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait, cancel_futures=True)

    @staticmethod
    def _to_outcome(request_id: int, future: Future) -> CheckOutcome:
        if future.cancelled():
            return CheckOutcome(request_id, error=RuntimeError("check cancelled"))
        error = future.exception()
        if error is not None:
            return CheckOutcome(request_id, error=error)
        return CheckOutcome(request_id, spans=tuple(future.result()))
