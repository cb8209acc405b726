"""
Periodic scheduler backed by a background thread.

Used when no asyncio event loop is running, so that synchronous callers still
get memory samples while their code computes.
"""

import logging
import threading
import time
from typing import Optional

from .base import PeriodicHandle, Scheduler, TickCallback

logger = logging.getLogger(__name__)


class ThreadPeriodicHandle(PeriodicHandle):
    """
    Periodic task running on its own daemon thread.

    Each tick runs under `_tick_lock`, and `cancel()` takes the same lock
    before setting the cancelled flag. Once `cancel()` returns, any tick in
    progress has finished and no new tick will run the callback.

    Attributes:
        _stop_event: Wakes the worker thread early on cancel.
        _tick_lock: Reentrant so a callback may cancel its own handle.
    """

    def __init__(self, period: float, callback: TickCallback, thread_name: str):
        super().__init__(period, callback)
        self._stop_event = threading.Event()
        self._tick_lock = threading.RLock()
        self._thread: Optional[threading.Thread] = threading.Thread(
            target=self._run, name=thread_name, daemon=True
        )
        self._thread.start()

    def _run(self) -> None:
        deadline = time.monotonic() + self.period
        while not self._stop_event.wait(max(0.0, deadline - time.monotonic())):
            with self._tick_lock:
                if self._cancelled:
                    break
                self._fire()
            now = time.monotonic()
            deadline += self.period
            if deadline <= now:
                deadline = now + self.period
        logger.debug(f"Sampler thread {threading.current_thread().name} exiting")

    def cancel(self, timeout: float = 1.0) -> None:
        """
        Stop the periodic task and wait briefly for the worker to exit.

        Args:
            timeout: Seconds to wait for the worker thread to finish. The
                no-more-ticks guarantee holds even if the wait times out.
        """
        with self._tick_lock:
            super().cancel()
            self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                logger.warning(f"Sampler thread {thread.name} did not exit within {timeout}s")
            else:
                self._thread = None


class ThreadScheduler(Scheduler):
    """
    Scheduler that starts one daemon thread per periodic task.

    Args:
        thread_name_prefix: Prefix for worker thread names.
    """

    name = "thread"

    def __init__(self, thread_name_prefix: str = "MeasureSampler"):
        self.thread_name_prefix = thread_name_prefix
        self._counter = 0
        self._lock = threading.Lock()

    def _schedule(self, period: float, callback: TickCallback) -> PeriodicHandle:
        with self._lock:
            self._counter += 1
            thread_name = f"{self.thread_name_prefix}-{self._counter}"
        return ThreadPeriodicHandle(period, callback, thread_name)
