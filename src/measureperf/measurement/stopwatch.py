"""
Monotonic stopwatch.
"""

import time
from datetime import timedelta
from enum import Enum
from typing import Callable, Optional


class StopwatchState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class Stopwatch:
    """
    Accumulating elapsed-time counter on a monotonic clock.

    `start()` and `stop()` may be repeated; elapsed time accumulates across
    running intervals until `reset()`. Starting a running stopwatch or
    stopping a stopped one does nothing.

    Args:
        clock: Nanosecond monotonic clock, injectable for tests.
    """

    def __init__(self, clock: Callable[[], int] = time.perf_counter_ns):
        self._clock = clock
        self._accumulated_ns = 0
        self._started_ns: Optional[int] = None
        self._state = StopwatchState.IDLE

    @property
    def state(self) -> StopwatchState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._started_ns is not None

    def start(self) -> None:
        if self._started_ns is None:
            self._started_ns = self._clock()
            self._state = StopwatchState.RUNNING

    def stop(self) -> None:
        if self._started_ns is not None:
            self._accumulated_ns += self._clock() - self._started_ns
            self._started_ns = None
            self._state = StopwatchState.STOPPED

    def reset(self) -> None:
        """Zero the elapsed time. A running stopwatch keeps running from zero."""
        self._accumulated_ns = 0
        if self._started_ns is not None:
            self._started_ns = self._clock()
        else:
            self._state = StopwatchState.IDLE

    @property
    def elapsed_ns(self) -> int:
        if self._started_ns is None:
            return self._accumulated_ns
        return self._accumulated_ns + self._clock() - self._started_ns

    @property
    def elapsed(self) -> timedelta:
        # timedelta resolution is one microsecond; sub-microsecond time truncates.
        return timedelta(microseconds=self.elapsed_ns // 1000)
