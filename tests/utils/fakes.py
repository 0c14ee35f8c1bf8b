"""Deterministic stand-ins for the checker thread pool and the clock."""

from concurrent.futures import Executor, Future
from typing import Any, Callable, List, Tuple


class DeferredExecutor(Executor):
    """Executor whose submitted calls run only when a test asks.

    Lets a test complete checks in any order, on the test thread, so races
    between edits and results can be replayed exactly.
    """

    def __init__(self) -> None:
        self._queue: List[Tuple[Future, Callable[..., Any], tuple, dict]] = []
        self._shutdown = False

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future:
        if self._shutdown:
            raise RuntimeError("cannot schedule new futures after shutdown")
        future: Future = Future()
        self._queue.append((future, fn, args, kwargs))
        return future

    @property
    def pending(self) -> int:
        return len(self._queue)

    def run(self, index: int = 0) -> Future:
        """Run the queued call at ``index`` (0 = oldest)."""
        future, fn, args, kwargs = self._queue.pop(index)
        if future.set_running_or_notify_cancel():
            try:
                result = fn(*args, **kwargs)
            except BaseException as e:
                future.set_exception(e)
            else:
                future.set_result(result)
        return future

    def run_oldest(self) -> Future:
        return self.run(0)

    def run_newest(self) -> Future:
        return self.run(-1)

    def run_all(self) -> int:
        count = 0
        while self._queue:
            self.run(0)
            count += 1
        return count

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        self._shutdown = True
        if cancel_futures:
            for future, *_ in self._queue:
                future.cancel()
            self._queue.clear()


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now
