"""
Defines the periodic scheduling interface used by measurement sessions.

This module provides:
- PeriodicHandle: the cancellable handle returned for one periodic task. It
  runs the callback, counts ticks, and records the first callback failure.
- Scheduler: an abstract base class (ABC) for anything that can run a
  callback every `period` seconds (asyncio loop, background thread, or a
  manually driven test double).
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..validation import handle_measurement_error, validate_positive_float

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class PeriodicHandle:
    """
    Handle to an active periodic task.

    Subclasses decide *when* `_fire()` is called; this class decides what a
    tick does. A callback that raises cancels the handle and the exception
    is kept in `error` for the owner to surface later.

    Attributes:
        period: Seconds between ticks.
        tick_count: Number of ticks that ran the callback.
        error: The exception raised by the callback, if any.
    """

    def __init__(self, period: float, callback: TickCallback):
        self.period = period
        self.tick_count = 0
        self.error: Optional[BaseException] = None
        self._callback = callback
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop the periodic task. No tick starts after this returns."""
        self._cancelled = True

    def _fire(self) -> None:
        if self._cancelled:
            return
        try:
            self._callback()
        except Exception as e:
            self.error = e
            self.cancel()
            handle_measurement_error(
                error=e,
                context="periodic sampling tick",
                reraise=False,
                logger=logger,
            )
            return
        self.tick_count += 1


class Scheduler(ABC):
    """
    Abstract base class for periodic schedulers.

    A scheduler may be shared by many sessions; each call to
    `schedule_periodic` returns an independent handle.
    """

    name = "abstract"

    def schedule_periodic(self, period: float, callback: TickCallback) -> PeriodicHandle:
        """
        Run `callback` every `period` seconds until the handle is cancelled.

        Args:
            period: Seconds between ticks, > 0.
            callback: Fast, non-blocking function to run on each tick.

        Returns:
            A PeriodicHandle controlling the task.

        Raises:
            ValidationError: If `period` is not a positive number.
        """
        period = validate_positive_float(
            period, min_value=0.0, field_name="period", exclusive_min=True
        )
        handle = self._schedule(period, callback)
        logger.debug(f"{self.__class__.__name__} scheduled periodic task every {period}s")
        return handle

    @abstractmethod
    def _schedule(self, period: float, callback: TickCallback) -> PeriodicHandle:
        """Create and start the implementation-specific handle."""
        pass
