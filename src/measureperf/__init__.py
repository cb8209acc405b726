"""
measureperf: elapsed time and memory usage of a block of code.

This package measures how long a unit of work takes and samples the process's
resident memory while it runs, then summarizes the result in an immutable
PerformanceReport (max, min and average memory, before/after snapshots).

The package is organized into specialized modules:
- measurement: MeasurePerformance sessions and the monotonic stopwatch
- models: PerformanceReport and configuration data structures
- scheduling: Periodic samplers (asyncio, background thread, manual)
- collectors: The psutil-backed resident memory reader
- config: TOML configuration loading and validation
- validation: Exceptions, error handling and value validators
- reporting: Text summaries and polars DataFrame export
- cli: The `measureperf` command

Usage:
    Synchronous code:
        from measureperf import MeasurePerformance
        measure = MeasurePerformance()
        measure.start()
        do_work()
        measure.stop()
        report = measure.get_report()

    Asynchronous code:
        report = await MeasurePerformance().run(fetch_everything)
        print(report.max_memory_bytes, report.elapsed)
"""

from .collectors import current_memory_bytes
from .config import clear_config_cache, get_config, set_config_path
from .measurement import MeasurePerformance, Stopwatch, measured
from .models import (
    MeasureConfig,
    PerformanceReport,
    bytes_to_megabytes,
    default_report_converter,
)
from .scheduling import (
    AsyncioScheduler,
    ManualScheduler,
    PeriodicHandle,
    Scheduler,
    ThreadScheduler,
    resolve_scheduler,
)
from .validation import (
    ErrorSeverity,
    MeasurementError,
    MeasurementErrorKind,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    # Measurement
    "MeasurePerformance",
    "Stopwatch",
    "measured",
    # Models
    "MeasureConfig",
    "PerformanceReport",
    "bytes_to_megabytes",
    "default_report_converter",
    # Scheduling
    "AsyncioScheduler",
    "ManualScheduler",
    "PeriodicHandle",
    "Scheduler",
    "ThreadScheduler",
    "resolve_scheduler",
    # Memory reader
    "current_memory_bytes",
    # Configuration
    "get_config",
    "set_config_path",
    "clear_config_cache",
    # Errors
    "ErrorSeverity",
    "MeasurementError",
    "MeasurementErrorKind",
    "ValidationError",
]
