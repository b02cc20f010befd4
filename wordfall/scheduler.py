"""Logical clock and timers driving the game.

Nothing here sleeps or spawns threads. Time only moves when a driver calls
ManualScheduler.advance() / advance_to(): unit tests step it by hand, the
console game syncs it from time.monotonic() through ClockDriver.
"""

import heapq
import itertools
import logging
import time
from typing import Callable

from .interfaces import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class Timer(TimerHandle):
    """Timer entry owned by a ManualScheduler."""

    def __init__(self, when_ms: float, callback: Callable[[], None], interval_ms: float = None):
        self.when_ms = when_ms
        self.callback = callback
        self.interval_ms = interval_ms
        self.fire_count = 0
        self._origin_ms = when_ms
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def repeating(self) -> bool:
        return self.interval_ms is not None

    def _reschedule(self) -> None:
        # Deadlines are derived from the origin to avoid float drift
        self.when_ms = self._origin_ms + self.fire_count * self.interval_ms


class ManualScheduler(Scheduler):
    """Scheduler whose clock is advanced explicitly."""

    def __init__(self, start_ms: float = 0.0):
        self._now_ms = float(start_ms)
        self._queue = []
        self._seq = itertools.count()

    @property
    def now_ms(self) -> float:
        return self._now_ms

    @property
    def pending(self) -> int:
        """Number of live (uncancelled) timers."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Timer:
        timer = Timer(self._now_ms + max(0.0, float(delay_ms)), callback)
        self._push(timer)
        return timer

    def call_every(self, interval_ms: float, callback: Callable[[], None]) -> Timer:
        interval_ms = float(interval_ms)
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        timer = Timer(self._now_ms + interval_ms, callback, interval_ms=interval_ms)
        self._push(timer)
        return timer

    def advance(self, delta_ms: float) -> int:
        """Move the clock forward by delta_ms. Returns number of callbacks fired."""
        return self.advance_to(self._now_ms + float(delta_ms))

    def advance_to(self, target_ms: float) -> int:
        """Fire every timer due at or before target_ms, in deadline order.

        Timers sharing a deadline fire in scheduling order. Timers scheduled
        by a callback fire in the same call if they fall due before target_ms.
        """
        target_ms = float(target_ms)
        fired = 0
        while self._queue and self._queue[0][0] <= target_ms:
            when_ms, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now_ms = max(self._now_ms, when_ms)
            timer.fire_count += 1
            if timer.repeating:
                timer._reschedule()
                self._push(timer)
            else:
                timer.cancel()
            timer.callback()
            fired += 1
        self._now_ms = max(self._now_ms, target_ms)
        return fired

    def run_pending(self) -> int:
        """Fire timers already due without moving the clock."""
        return self.advance_to(self._now_ms)

    def next_deadline(self) -> float | None:
        for when_ms, _, timer in sorted(self._queue):
            if not timer.cancelled:
                return when_ms
        return None

    def _push(self, timer: Timer) -> None:
        heapq.heappush(self._queue, (timer.when_ms, next(self._seq), timer))


class ClockDriver:
    """Feeds elapsed wall-clock time into a ManualScheduler."""

    def __init__(self, scheduler: ManualScheduler, clock: Callable[[], float] = time.monotonic):
        self.scheduler = scheduler
        self._clock = clock
        self._origin = clock()
        self._base_ms = scheduler.now_ms

    def elapsed_ms(self) -> float:
        return (self._clock() - self._origin) * 1000.0

    def sync(self) -> int:
        """Catch the scheduler up with real time. Returns callbacks fired."""
        fired = self.scheduler.advance_to(self._base_ms + self.elapsed_ms())
        if fired:
            logger.debug(f"Clock sync fired {fired} timer(s) at {self.scheduler.now_ms:.0f}ms")
        return fired
