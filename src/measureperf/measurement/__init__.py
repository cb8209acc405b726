"""
Measurement sessions and their clock.
"""

from .measure import MeasurePerformance, ReportConverter, Workload, measured
from .stopwatch import Stopwatch, StopwatchState

__all__ = [
    "MeasurePerformance",
    "ReportConverter",
    "Stopwatch",
    "StopwatchState",
    "Workload",
    "measured",
]
