"""Quiescence timer for edit-triggered checks."""

import time
from typing import Callable, Optional


class Debouncer:
    """
    Cancelable, restartable deadline driven by an explicit clock.

    Each ``arm`` pushes the deadline to ``now + delay``; the owner polls
    ``fire_if_due`` from its control loop. Nothing runs on another thread.

    Examples:
        >>> debouncer = Debouncer(0.5, clock=lambda: 0.0)
        >>> debouncer.arm(now=1.0)
        >>> debouncer.fire_if_due(now=1.2), debouncer.fire_if_due(now=1.5)
        (False, True)
    """

    def __init__(self, delay: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.delay = delay
        self._clock = clock
        self._deadline: Optional[float] = None

    @property
    def armed(self) -> bool:
        return self._deadline is not None

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def arm(self, now: Optional[float] = None) -> None:
        now = self._clock() if now is None else now
        self._deadline = now + self.delay

    def cancel(self) -> None:
        self._deadline = None

    def is_due(self, now: Optional[float] = None) -> bool:
        if self._deadline is None:
            return False
        now = self._clock() if now is None else now
        return now >= self._deadline

    def fire_if_due(self, now: Optional[float] = None) -> bool:
        """Disarm and return True when the deadline has passed."""
        if not self.is_due(now):
            return False
        self._deadline = None
        return True
