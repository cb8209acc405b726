"""
Unit tests for report DataFrames and text summaries.
"""

from datetime import datetime, timedelta

import pytest

from measureperf.models import PerformanceReport
from measureperf.reporting import (
    format_megabytes,
    format_report_summary,
    report_to_frame,
    reports_to_frame,
)
from measureperf.reporting.frames import SAMPLE_SCHEMA, SUMMARY_SCHEMA


@pytest.fixture
def empty_report():
    return PerformanceReport(
        measurement_started_at=datetime(2024, 1, 1),
        measurement_stopped_at=datetime(2024, 1, 1),
        elapsed=timedelta(0),
        memory_before_start_bytes=0,
        memory_after_stop_bytes=0,
    )


@pytest.mark.unit
class TestReportToFrame:
    """Test cases for the per-sample frame."""

    def test_one_row_per_sample(self, sample_report):
        df = report_to_frame(sample_report)

        assert dict(df.schema) == SAMPLE_SCHEMA
        assert df.height == 3
        assert df["sample_index"].to_list() == [0, 1, 2]
        assert df["memory_bytes"].to_list() == [1000, 1500, 2000]
        assert df["memory_mb"].to_list() == [0.001, 0.0015, 0.002]

    def test_empty_report(self, empty_report):
        df = report_to_frame(empty_report)

        assert df.height == 0
        assert df.columns == list(SAMPLE_SCHEMA)


@pytest.mark.unit
class TestReportsToFrame:
    """Test cases for the summary frame."""

    def test_default_labels(self, sample_report, empty_report):
        df = reports_to_frame([sample_report, empty_report])

        assert dict(df.schema) == SUMMARY_SCHEMA
        assert df["label"].to_list() == ["run-0", "run-1"]
        assert df["sample_count"].to_list() == [3, 0]

    def test_summary_values(self, sample_report):
        row = reports_to_frame([sample_report], labels=["baseline"]).row(0, named=True)

        assert row["label"] == "baseline"
        assert row["started_at"] == datetime(2024, 1, 1, 12, 0)
        assert row["elapsed_us"] == 1_000_000
        assert row["max_memory_bytes"] == 2000
        assert row["min_memory_bytes"] == 1000
        assert row["average_memory_bytes"] == 1500
        assert row["max_memory_mb"] == 0.002

    def test_label_count_mismatch(self, sample_report):
        with pytest.raises(ValueError):
            reports_to_frame([sample_report], labels=["a", "b"])

    def test_no_reports(self):
        df = reports_to_frame([])

        assert df.height == 0
        assert df.columns == list(SUMMARY_SCHEMA)


@pytest.mark.unit
class TestFormatting:
    """Test cases for text summaries."""

    def test_format_megabytes(self):
        assert format_megabytes(1_500_000) == "1.50 MB"
        assert format_megabytes(0) == "0.00 MB"

    def test_summary_lines(self, sample_report):
        text = format_report_summary(sample_report)
        lines = text.splitlines()

        assert lines[0].endswith("2024-01-01T12:00:00")
        assert "Elapsed:        1.000000 s" in lines
        assert "Samples:        3" in lines
        assert lines[-1] == "Spread:         0.00 MB"

    def test_summary_spread(self):
        report = PerformanceReport(
            measurement_started_at=datetime(2024, 1, 1),
            measurement_stopped_at=datetime(2024, 1, 1, 0, 0, 1),
            elapsed=timedelta(seconds=1),
            memory_before_start_bytes=10_000_000,
            memory_after_stop_bytes=12_000_000,
            memory_samples_bytes=[10_000_000, 35_000_000, 12_000_000],
        )

        assert format_report_summary(report).splitlines()[-1] == "Spread:         25.00 MB"
