"""
Timer scheduling for the analysis lifecycle.

The simulated processing delay is a non-blocking, cancellable timer rather
than a worker thread. Two interchangeable schedulers are provided:

- AsyncioScheduler: real time, on the running asyncio event loop
- ManualScheduler: virtual clock advanced explicitly by the caller, for
  deterministic tests and offline simulation
"""

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Callable, Optional, Protocol


class TimerHandle(Protocol):
    """Cancellable handle to a scheduled callback (asyncio.TimerHandle satisfies it)."""

    def cancel(self) -> None: ...

    def cancelled(self) -> bool: ...


class Scheduler(ABC):
    """Schedules a callback to run once after a delay."""

    @abstractmethod
    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        """
        Schedule callback after delay_seconds.

        Returns:
            Handle whose cancel() prevents the callback from running
        """


class AsyncioScheduler(Scheduler):
    """Scheduler backed by an asyncio event loop's call_later."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_seconds, callback)


class _ManualTimer:
    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """
    Virtual-clock scheduler.

    Nothing runs until advance() moves the clock past a timer's due time.
    Timers fire in due order; timers due at the same instant fire in the order
    they were scheduled.

    Example:
        >>> scheduler = ManualScheduler()
        >>> scheduler.call_later(2.0, fire)
        >>> scheduler.advance(2.0)  # fire() runs here
    """

    def __init__(self, start: float = 0.0):
        self.now = start
        self._queue: list[tuple[float, int, _ManualTimer]] = []
        self._sequence = itertools.count()

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        if delay_seconds < 0:
            raise ValueError(f"delay_seconds must be non-negative, got {delay_seconds}")
        timer = _ManualTimer(self.now + delay_seconds, callback)
        heapq.heappush(self._queue, (timer.due, next(self._sequence), timer))
        return timer

    @property
    def pending(self) -> int:
        """Number of scheduled timers that have not fired or been cancelled."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled())

    def advance(self, seconds: float) -> int:
        """
        Move the virtual clock forward and fire every timer that becomes due.

        Callbacks scheduled by a firing callback run in the same advance if
        they fall due within the window.

        Returns:
            Number of callbacks fired
        """
        if seconds < 0:
            raise ValueError(f"Cannot advance clock by negative amount {seconds}")
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            self.now = due
            if timer.cancelled():
                continue
            timer.callback()
            fired += 1
        self.now = target
        return fired
