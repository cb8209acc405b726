"""
Data models for the measureperf package.

Configuration Models:
- Sampling period, scheduler selection and logging level

Result Models:
- PerformanceReport, the immutable summary of one measurement cycle
- The default serialized report shape and the decimal megabyte conversion
"""

from .config import DEFAULT_SAMPLING_PERIOD_SECONDS, MeasureConfig
from .report import (
    BYTES_PER_MEGABYTE,
    PerformanceReport,
    bytes_to_megabytes,
    default_report_converter,
)

__all__ = [
    # Configuration
    "DEFAULT_SAMPLING_PERIOD_SECONDS",
    "MeasureConfig",
    # Results
    "BYTES_PER_MEGABYTE",
    "PerformanceReport",
    "bytes_to_megabytes",
    "default_report_converter",
]
