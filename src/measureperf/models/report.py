"""
Performance report data model.

A PerformanceReport is an immutable snapshot of one measurement cycle: when it
started and stopped, how long it took, the resident memory before and after,
and every memory sample taken in between. Summary statistics (max, min and
average) are derived on demand from the samples.

Reports are plain values. They hold no reference to the session that produced
them, so restarting or resetting the session never alters a report that was
already handed out.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

# Decimal megabytes, not MiB.
BYTES_PER_MEGABYTE = 1_000_000


def bytes_to_megabytes(size: float) -> float:
    """Convert a size in bytes to decimal megabytes (1 MB = 1,000,000 bytes)."""
    return size / BYTES_PER_MEGABYTE


def _elapsed_microseconds(elapsed: timedelta) -> int:
    return (elapsed.days * 86_400 + elapsed.seconds) * 1_000_000 + elapsed.microseconds


@dataclass(frozen=True)
class PerformanceReport:
    """
    Timing and memory usage of a measured block of code.

    Attributes:
        measurement_started_at: Wall-clock time the measurement started.
        measurement_stopped_at: Wall-clock time the measurement stopped.
        elapsed: Monotonic duration between start and stop.
        memory_before_start_bytes: Resident memory captured at start.
        memory_after_stop_bytes: Resident memory captured at stop.
        memory_samples_bytes: Periodic resident memory samples, oldest first.
        converter: Optional function that fully replaces the mapping
            produced by ``to_dict``.
    """

    measurement_started_at: datetime
    measurement_stopped_at: datetime
    elapsed: timedelta
    memory_before_start_bytes: int
    memory_after_stop_bytes: int
    memory_samples_bytes: Tuple[int, ...] = ()
    converter: Optional[Callable[["PerformanceReport"], Dict[str, Any]]] = field(
        default=None, compare=False, repr=False
    )

    def __post_init__(self):
        # Freeze whatever sequence the caller passed in.
        object.__setattr__(self, "memory_samples_bytes", tuple(self.memory_samples_bytes))

    bytes_to_megabytes = staticmethod(bytes_to_megabytes)

    @property
    def max_memory_bytes(self) -> int:
        """Largest sample, or 0 when there are no samples."""
        if not self.memory_samples_bytes:
            return 0
        return max(self.memory_samples_bytes)

    @property
    def min_memory_bytes(self) -> int:
        """Smallest sample, or 0 when there are no samples."""
        if not self.memory_samples_bytes:
            return 0
        return min(self.memory_samples_bytes)

    @property
    def average_memory_bytes(self) -> int:
        """Mean of the samples rounded half up, or 0 when there are no samples."""
        count = len(self.memory_samples_bytes)
        if count == 0:
            return 0
        total = sum(self.memory_samples_bytes)
        # Integer arithmetic keeps large byte counts exact.
        return (2 * total + count) // (2 * count)

    @property
    def elapsed_microseconds(self) -> int:
        return _elapsed_microseconds(self.elapsed)

    def to_dict(self) -> Dict[str, Any]:
        """
        Export the report as a JSON-compatible mapping.

        When the report was created with a converter, the converter's output
        is returned instead of the default shape.
        """
        if self.converter is not None:
            return self.converter(self)
        return default_report_converter(self)

    def to_json(self, **kwargs) -> str:
        """Serialize ``to_dict()`` with ``json.dumps``."""
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PerformanceReport":
        """
        Rebuild a report from the default ``to_dict()`` shape.

        Raises:
            KeyError: If a field is missing
            ValueError: If a timestamp is not ISO-8601
        """
        return cls(
            measurement_started_at=datetime.fromisoformat(data["started_at"]),
            measurement_stopped_at=datetime.fromisoformat(data["stopped_at"]),
            elapsed=timedelta(microseconds=int(data["elapsed"])),
            memory_before_start_bytes=int(data["memory_before_start_bytes"]),
            memory_after_stop_bytes=int(data["memory_after_stop_bytes"]),
            memory_samples_bytes=tuple(int(s) for s in data["memory_samples_bytes"]),
        )

    def with_samples(self, samples: Sequence[int]) -> "PerformanceReport":
        """Return a copy of this report with a different sample sequence."""
        return PerformanceReport(
            measurement_started_at=self.measurement_started_at,
            measurement_stopped_at=self.measurement_stopped_at,
            elapsed=self.elapsed,
            memory_before_start_bytes=self.memory_before_start_bytes,
            memory_after_stop_bytes=self.memory_after_stop_bytes,
            memory_samples_bytes=tuple(samples),
            converter=self.converter,
        )

    def __str__(self) -> str:
        return (
            f"PerformanceReport(measurement_started_at: {self.measurement_started_at.isoformat()}, "
            f"measurement_stopped_at: {self.measurement_stopped_at.isoformat()}, "
            f"elapsed: {self.elapsed}, "
            f"memory_before_start_bytes: {self.memory_before_start_bytes}, "
            f"memory_after_stop_bytes: {self.memory_after_stop_bytes}, "
            f"max_memory_bytes: {self.max_memory_bytes}, "
            f"min_memory_bytes: {self.min_memory_bytes}, "
            f"average_memory_bytes: {self.average_memory_bytes}, "
            f"memory_samples_bytes: {list(self.memory_samples_bytes)})"
        )


def default_report_converter(report: PerformanceReport) -> Dict[str, Any]:
    """
    Produce the default serialized shape of a report.

    Timestamps are ISO-8601 strings and ``elapsed`` is whole microseconds, so
    ``PerformanceReport.from_dict`` recovers both exactly.
    """
    return {
        "started_at": report.measurement_started_at.isoformat(),
        "stopped_at": report.measurement_stopped_at.isoformat(),
        "elapsed": report.elapsed_microseconds,
        "memory_before_start_bytes": report.memory_before_start_bytes,
        "memory_after_stop_bytes": report.memory_after_stop_bytes,
        "memory_samples_bytes": list(report.memory_samples_bytes),
    }
