"""
Cooperative periodic scheduler on an asyncio event loop.

Ticks run as plain loop callbacks (`loop.call_at`), so they only fire while
the caller's code is suspended in an `await`. A purely synchronous workload
therefore sees no ticks, which is what the empty-sample fallback in
PerformanceReport is for.
"""

import asyncio
import logging
from typing import Optional

from .base import PeriodicHandle, Scheduler, TickCallback

logger = logging.getLogger(__name__)


class AsyncioPeriodicHandle(PeriodicHandle):
    """
    Periodic task driven by `loop.call_at`.

    Deadlines advance at a fixed rate from the start time. If the loop was
    blocked past one or more deadlines, the missed ticks are skipped rather
    than fired back to back.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, period: float, callback: TickCallback):
        super().__init__(period, callback)
        self._loop = loop
        self._deadline = loop.time() + period
        self._timer: Optional[asyncio.TimerHandle] = loop.call_at(self._deadline, self._tick)

    def _tick(self) -> None:
        self._timer = None
        self._fire()
        if self._cancelled:
            return
        now = self._loop.time()
        self._deadline += self.period
        if self._deadline <= now:
            self._deadline = now + self.period
        self._timer = self._loop.call_at(self._deadline, self._tick)

    def cancel(self) -> None:
        super().cancel()
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


class AsyncioScheduler(Scheduler):
    """
    Scheduler bound to an asyncio event loop.

    Args:
        loop: Loop to schedule on. When omitted, the loop running in the
            calling thread at `schedule_periodic` time is used.
    """

    name = "asyncio"

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def _schedule(self, period: float, callback: TickCallback) -> PeriodicHandle:
        # get_running_loop raises RuntimeError outside a coroutine context.
        loop = self._loop or asyncio.get_running_loop()
        return AsyncioPeriodicHandle(loop, period, callback)
