"""
Measurement session: elapsed time and resident memory of a block of code.

MeasurePerformance owns a monotonic stopwatch, a periodic memory sampler and
the before/after memory snapshots. The lifecycle is:

    start() -> workload runs (sync or awaited) -> stop() -> get_report()

run() and run_sync() compose those steps and guarantee that stop() runs even
when the workload raises. The session can be started and stopped any number
of times; each get_report() returns an independent, immutable snapshot.

A session has a single owner. Calling start/stop/reset concurrently from
several threads or tasks on the same instance is not supported.
"""

import functools
import inspect
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from ..collectors import MemoryReader, current_memory_bytes
from ..models.config import DEFAULT_SAMPLING_PERIOD_SECONDS, MeasureConfig
from ..models.report import PerformanceReport
from ..scheduling import PeriodicHandle, Scheduler, resolve_scheduler
from ..validation import (
    MeasurementError,
    handle_measurement_error,
    validate_enum_choice,
    validate_positive_float,
)
from .stopwatch import Stopwatch

logger = logging.getLogger(__name__)

ReportConverter = Callable[[PerformanceReport], Dict[str, Any]]
Workload = Callable[[], Union[Awaitable[Any], Any]]


class MeasurePerformance:
    """
    Measures execution time and memory usage of a block of code.

    Memory is read once at start, once at stop, and every `sampling_period`
    seconds in between by a periodic task.

    Args:
        sampling_period: Seconds between memory samples, > 0.
        report_converter: Optional function that replaces the default
            `PerformanceReport.to_dict()` output of every report issued.
        scheduler: A Scheduler instance, or one of "auto", "asyncio",
            "thread". Names are resolved on each start(); "auto" uses the
            running asyncio loop if there is one and a thread otherwise.
        memory_reader: Zero-argument callable returning resident memory in
            bytes. Defaults to the psutil RSS reader.

    Raises:
        ValidationError: If `sampling_period` or the scheduler name is invalid.
    """

    def __init__(
        self,
        sampling_period: float = DEFAULT_SAMPLING_PERIOD_SECONDS,
        report_converter: Optional[ReportConverter] = None,
        scheduler: Union[Scheduler, str, None] = None,
        memory_reader: Optional[MemoryReader] = None,
    ):
        self.sampling_period = validate_positive_float(
            sampling_period,
            min_value=0.0,
            field_name="sampling_period",
            exclusive_min=True,
        )
        self.report_converter = report_converter
        self.memory_reader: MemoryReader = memory_reader or current_memory_bytes

        if isinstance(scheduler, Scheduler):
            self._scheduler: Optional[Scheduler] = scheduler
            self._scheduler_name = scheduler.name
        else:
            self._scheduler = None
            self._scheduler_name = validate_enum_choice(
                scheduler or "auto",
                choices=["auto", "asyncio", "thread"],
                field_name="scheduler",
            )

        self._stopwatch = Stopwatch()
        self._samples: List[int] = []
        self._sampler_handle: Optional[PeriodicHandle] = None
        self._memory_before_start_bytes = 0
        self._memory_after_stop_bytes = 0
        now = datetime.now()
        self._started_at = now
        self._stopped_at = now

    @classmethod
    def from_config(cls, config: Optional[MeasureConfig] = None, **kwargs) -> "MeasurePerformance":
        """
        Create a session from configuration, loading it if not given.

        Keyword arguments override the configured values.
        """
        if config is None:
            from ..config import get_config
            config = get_config()
        kwargs.setdefault("sampling_period", config.sampling_period_seconds)
        kwargs.setdefault("scheduler", config.scheduler)
        return cls(**kwargs)

    @property
    def is_running(self) -> bool:
        """True while a periodic sampler is active."""
        return self._sampler_handle is not None

    @property
    def scheduler_name(self) -> str:
        return self._scheduler_name

    @property
    def sample_count(self) -> int:
        return len(self._samples)

    def _read_memory_bytes(self) -> int:
        try:
            usage = self.memory_reader()
        except Exception as e:
            raise MeasurementError.invalid_memory_reading(None) from e
        if not isinstance(usage, int) or usage < 0:
            raise MeasurementError.invalid_memory_reading(usage)
        return usage

    def _collect_memory_usage(self) -> None:
        # Runs on every tick: must not block or await.
        self._samples.append(self._read_memory_bytes())

    def start(self) -> None:
        """
        Start measuring.

        Clears the previous measurement, records the start time and the
        initial memory usage, and schedules periodic sampling.

        Raises:
            MeasurementError: ALREADY_RUNNING if the session is already
                started; INVALID_MEMORY_READING if the initial reading fails.
        """
        if self._sampler_handle is not None:
            raise MeasurementError.already_running()

        self.reset()
        scheduler = self._scheduler or resolve_scheduler(self._scheduler_name)

        self._started_at = datetime.now()
        self._stopwatch.start()
        try:
            self._memory_before_start_bytes = self._read_memory_bytes()
            self._sampler_handle = scheduler.schedule_periodic(
                self.sampling_period, self._collect_memory_usage
            )
        except Exception:
            self._stopwatch.stop()
            raise
        logger.debug(
            f"Measurement started with {scheduler.name} scheduler, "
            f"sampling every {self.sampling_period}s"
        )

    def stop(self) -> None:
        """
        Stop measuring.

        Cancels periodic sampling, stops the clock, and records the final
        memory usage and stop time. Safe to call when not running.

        Raises:
            MeasurementError: INVALID_MEMORY_READING if the final reading
                fails or a periodic sample failed while running.
        """
        handle, self._sampler_handle = self._sampler_handle, None
        if handle is not None:
            handle.cancel()
        self._stopwatch.stop()
        try:
            self._memory_after_stop_bytes = self._read_memory_bytes()
        finally:
            self._stopped_at = datetime.now()

        if handle is not None:
            logger.debug(
                f"Measurement stopped after {self._stopwatch.elapsed} "
                f"with {len(self._samples)} samples"
            )
            if handle.error is not None:
                raise handle.error

    def reset(self) -> None:
        """
        Stop any ongoing measurement and clear all collected data.

        The data is cleared even if stopping raises.
        """
        try:
            self.stop()
        finally:
            self._stopwatch.reset()
            self._samples.clear()
            self._memory_before_start_bytes = 0
            self._memory_after_stop_bytes = 0
            now = datetime.now()
            self._started_at = now
            self._stopped_at = now

    def dispose(self) -> None:
        """Release the periodic sampler and clear all data."""
        self.reset()

    def get_report(self) -> PerformanceReport:
        """
        Return an immutable report of the current measurement.

        When no periodic sample was taken (the measured code was shorter than
        one sampling period, or never yielded to the event loop), the samples
        fall back to the start and stop readings.
        """
        if self._samples:
            samples = tuple(self._samples)
        elif self._memory_before_start_bytes != 0 or self._memory_after_stop_bytes != 0:
            samples = (self._memory_before_start_bytes, self._memory_after_stop_bytes)
        else:
            samples = ()

        return PerformanceReport(
            measurement_started_at=self._started_at,
            measurement_stopped_at=self._stopped_at,
            elapsed=self._stopwatch.elapsed,
            memory_before_start_bytes=self._memory_before_start_bytes,
            memory_after_stop_bytes=self._memory_after_stop_bytes,
            memory_samples_bytes=samples,
            converter=self.report_converter,
        )

    def _stop_after_failure(self, error: BaseException) -> None:
        """Stop while `error` is propagating; a stop failure is logged and noted."""
        try:
            self.stop()
        except MeasurementError as stop_error:
            handle_measurement_error(
                error=stop_error,
                context="stop after workload failure",
                reraise=False,
                logger=logger,
            )
            error.add_note(f"Measurement stop also failed: {stop_error}")

    async def run(self, workload: Workload) -> PerformanceReport:
        """
        Measure `workload` and return the report.

        The workload is called with no arguments; if it returns an awaitable,
        that is awaited. stop() runs on every exit path, and a workload
        exception is re-raised after it.
        """
        self.start()
        try:
            result = workload()
            if inspect.isawaitable(result):
                await result
        except BaseException as e:
            self._stop_after_failure(e)
            raise
        self.stop()
        return self.get_report()

    def run_sync(self, workload: Callable[[], Any]) -> PerformanceReport:
        """
        Measure a synchronous `workload` and return the report.

        Raises:
            TypeError: If the workload returns an awaitable; use run() instead.
        """
        self.start()
        try:
            result = workload()
            if inspect.isawaitable(result):
                if inspect.iscoroutine(result):
                    result.close()
                raise TypeError("run_sync() got an awaitable workload; use 'await run()' instead")
        except BaseException as e:
            self._stop_after_failure(e)
            raise
        self.stop()
        return self.get_report()

    def __enter__(self) -> "MeasurePerformance":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_val is not None:
            self._stop_after_failure(exc_val)
        else:
            self.stop()

    async def __aenter__(self) -> "MeasurePerformance":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)


def measured(
    on_report: Callable[[PerformanceReport], Any],
    **measure_kwargs,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator that measures every call of a function.

    Each call runs in a fresh MeasurePerformance built from `measure_kwargs`;
    `on_report` receives the report and the function's return value is
    passed through. Works for both plain and `async def` functions.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                measure = MeasurePerformance(**measure_kwargs)
                async with measure:
                    result = await func(*args, **kwargs)
                on_report(measure.get_report())
                return result

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            measure = MeasurePerformance(**measure_kwargs)
            with measure:
                result = func(*args, **kwargs)
            on_report(measure.get_report())
            return result

        return wrapper

    return decorator
