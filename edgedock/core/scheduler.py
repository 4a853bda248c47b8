"""Fixed-rate cooperative tick loop with a stop signal."""

from __future__ import annotations

import threading
import time
from typing import Callable

from edgedock.log import get_logger

log = get_logger(name="scheduler")


class TickScheduler:
    """Runs a body at a fixed cadence until stopped.

    Each iteration: check the stop signal, stamp the tick start, run the
    body, then wait out whatever is left of the tick budget. A slow body
    simply gets no wait; ticks never overlap and are never made up.

    The wait goes through the stop event, so `stop()` from another thread
    interrupts a sleeping loop immediately.
    """

    def __init__(
        self,
        interval: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.interval = interval
        self._clock = clock
        self._stop = threading.Event()
        self.tick_started: float = clock()
        self.ticks: int = 0

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def stop(self) -> None:
        self._stop.set()

    def remaining(self) -> float:
        """Seconds left in the current tick budget (never negative)."""
        elapsed = self._clock() - self.tick_started
        return max(0.0, self.interval - elapsed)

    def delay(self, seconds: float) -> None:
        """Sleep that returns early when stopped."""
        if seconds > 0:
            self._stop.wait(seconds)

    def wait_remaining(self) -> None:
        remaining = self.remaining()
        if remaining > 0:
            self._stop.wait(remaining)

    def run(self, body: Callable[[], None], max_ticks: int | None = None) -> None:
        """Call `body` once per tick until stopped (or `max_ticks` ran)."""
        log.debug("tick loop started: interval=%.4fs", self.interval)
        while not self._stop.is_set():
            if max_ticks is not None and self.ticks >= max_ticks:
                break
            self.tick_started = self._clock()
            body()
            self.ticks += 1
            self.wait_remaining()
        log.debug("tick loop finished after %d ticks", self.ticks)
