"""
Manually driven scheduler for deterministic tests.

Nothing fires on its own: each call to `tick()` runs every active handle's
callback once, synchronously, in the caller's thread.
"""

from typing import List

from .base import PeriodicHandle, Scheduler, TickCallback


class ManualScheduler(Scheduler):
    """
    Test double that fires periodic callbacks only when told to.

    Attributes:
        handles: Every handle created, including cancelled ones.
    """

    name = "manual"

    def __init__(self):
        self.handles: List[PeriodicHandle] = []

    def _schedule(self, period: float, callback: TickCallback) -> PeriodicHandle:
        handle = PeriodicHandle(period, callback)
        self.handles.append(handle)
        return handle

    @property
    def active_handles(self) -> List[PeriodicHandle]:
        return [h for h in self.handles if not h.cancelled]

    def tick(self, count: int = 1) -> None:
        """Fire every active handle `count` times."""
        for _ in range(count):
            for handle in self.active_handles:
                handle._fire()
