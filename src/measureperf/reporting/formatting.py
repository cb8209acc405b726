"""
Human-readable report summaries.
"""

from ..models.report import PerformanceReport, bytes_to_megabytes


def format_megabytes(size_bytes: float) -> str:
    return f"{bytes_to_megabytes(size_bytes):.2f} MB"


def format_report_summary(report: PerformanceReport) -> str:
    """
    Multi-line summary of a report with memory in decimal megabytes.

    The last line is the spread between the largest and smallest sample,
    which approximates how much memory the measured code allocated.
    """
    spread = report.max_memory_bytes - report.min_memory_bytes
    lines = [
        f"Started:        {report.measurement_started_at.isoformat()}",
        f"Stopped:        {report.measurement_stopped_at.isoformat()}",
        f"Elapsed:        {report.elapsed.total_seconds():.6f} s",
        f"Memory before:  {format_megabytes(report.memory_before_start_bytes)}",
        f"Memory after:   {format_megabytes(report.memory_after_stop_bytes)}",
        f"Samples:        {len(report.memory_samples_bytes)}",
        f"Max memory:     {format_megabytes(report.max_memory_bytes)}",
        f"Min memory:     {format_megabytes(report.min_memory_bytes)}",
        f"Average memory: {format_megabytes(report.average_memory_bytes)}",
        f"Spread:         {format_megabytes(spread)}",
    ]
    return "\n".join(lines)
