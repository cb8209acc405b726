"""
Periodic scheduling for memory sampling.

Sessions receive a Scheduler instead of reaching for a global timer, so tests
can substitute ManualScheduler and fire ticks deterministically.
"""

from .asyncio_scheduler import AsyncioPeriodicHandle, AsyncioScheduler
from .base import PeriodicHandle, Scheduler, TickCallback
from .factory import resolve_scheduler
from .manual import ManualScheduler
from .thread_scheduler import ThreadPeriodicHandle, ThreadScheduler

__all__ = [
    "AsyncioPeriodicHandle",
    "AsyncioScheduler",
    "ManualScheduler",
    "PeriodicHandle",
    "Scheduler",
    "ThreadPeriodicHandle",
    "ThreadScheduler",
    "TickCallback",
    "resolve_scheduler",
]
