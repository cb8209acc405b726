"""
Polars DataFrame views of performance reports.

These helpers turn reports into tables for side-by-side comparison of
several measured implementations, or for plotting a single memory profile.
"""

import logging
from typing import List, Optional, Sequence

import polars as pl

from ..models.report import PerformanceReport, bytes_to_megabytes

logger = logging.getLogger(__name__)

SAMPLE_SCHEMA = {
    "sample_index": pl.Int64,
    "memory_bytes": pl.Int64,
    "memory_mb": pl.Float64,
}

SUMMARY_SCHEMA = {
    "label": pl.Utf8,
    "started_at": pl.Datetime("us"),
    "stopped_at": pl.Datetime("us"),
    "elapsed_us": pl.Int64,
    "memory_before_start_bytes": pl.Int64,
    "memory_after_stop_bytes": pl.Int64,
    "sample_count": pl.Int64,
    "max_memory_bytes": pl.Int64,
    "min_memory_bytes": pl.Int64,
    "average_memory_bytes": pl.Int64,
    "max_memory_mb": pl.Float64,
}


def report_to_frame(report: PerformanceReport) -> pl.DataFrame:
    """
    One row per memory sample, in sampling order.

    Returns:
        DataFrame with columns `sample_index`, `memory_bytes`, `memory_mb`.
        Empty (with that schema) when the report has no samples.
    """
    samples = list(report.memory_samples_bytes)
    return pl.DataFrame(
        {
            "sample_index": list(range(len(samples))),
            "memory_bytes": samples,
            "memory_mb": [bytes_to_megabytes(s) for s in samples],
        },
        schema=SAMPLE_SCHEMA,
    )


def reports_to_frame(
    reports: Sequence[PerformanceReport],
    labels: Optional[Sequence[str]] = None,
) -> pl.DataFrame:
    """
    One summary row per report.

    Args:
        reports: Reports to summarize.
        labels: Optional name for each report; defaults to "run-<n>".

    Raises:
        ValueError: If `labels` and `reports` differ in length.
    """
    if labels is None:
        labels = [f"run-{i}" for i in range(len(reports))]
    elif len(labels) != len(reports):
        raise ValueError(
            f"Got {len(labels)} labels for {len(reports)} reports"
        )

    rows: List[dict] = []
    for label, report in zip(labels, reports):
        rows.append({
            "label": label,
            "started_at": report.measurement_started_at,
            "stopped_at": report.measurement_stopped_at,
            "elapsed_us": report.elapsed_microseconds,
            "memory_before_start_bytes": report.memory_before_start_bytes,
            "memory_after_stop_bytes": report.memory_after_stop_bytes,
            "sample_count": len(report.memory_samples_bytes),
            "max_memory_bytes": report.max_memory_bytes,
            "min_memory_bytes": report.min_memory_bytes,
            "average_memory_bytes": report.average_memory_bytes,
            "max_memory_mb": bytes_to_megabytes(report.max_memory_bytes),
        })

    logger.debug(f"Summarizing {len(rows)} reports into a DataFrame")
    return pl.DataFrame(rows, schema=SUMMARY_SCHEMA)
