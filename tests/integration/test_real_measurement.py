"""
Integration tests measuring real workloads with the psutil memory reader.

Timing assertions use lower bounds only so they hold on loaded machines.
"""

import asyncio
import json
import time
from datetime import datetime, timedelta

import pytest

from measureperf import MeasurePerformance, PerformanceReport, measured


@pytest.mark.integration
@pytest.mark.slow
class TestRealMeasurement:
    """End-to-end sessions on the current process."""

    @pytest.mark.asyncio
    async def test_async_workload_is_sampled(self):
        measure = MeasurePerformance(sampling_period=0.01)

        report = await measure.run(lambda: asyncio.sleep(0.1))

        assert report.elapsed >= timedelta(milliseconds=100)
        assert len(report.memory_samples_bytes) >= 2
        assert report.memory_before_start_bytes > 0
        assert report.memory_after_stop_bytes > 0
        assert report.min_memory_bytes <= report.average_memory_bytes <= report.max_memory_bytes
        assert measure.scheduler_name == "auto"

    def test_empty_workload_falls_back_to_snapshots(self):
        measure = MeasurePerformance(sampling_period=1.0)

        measure.start()
        measure.stop()
        report = measure.get_report()

        assert len(report.memory_samples_bytes) >= 2
        assert report.memory_before_start_bytes > 0
        assert report.memory_after_stop_bytes > 0
        assert report.measurement_started_at <= report.measurement_stopped_at

    def test_thread_scheduler_samples_blocking_work(self):
        measure = MeasurePerformance(sampling_period=0.01, scheduler="thread")

        report = measure.run_sync(lambda: time.sleep(0.1))

        assert report.elapsed >= timedelta(milliseconds=100)
        assert len(report.memory_samples_bytes) >= 2
        assert not measure.is_running

    def test_allocation_raises_peak(self):
        holder = []

        def allocate():
            # Touch every page so the allocation is resident.
            holder.append(bytearray(b"\x01" * 50_000_000))
            time.sleep(0.05)

        measure = MeasurePerformance(sampling_period=0.005, scheduler="thread")
        report = measure.run_sync(allocate)

        assert report.max_memory_bytes - report.memory_before_start_bytes >= 40_000_000

    def test_json_parses_real_timestamps(self):
        with MeasurePerformance(sampling_period=0.01) as measure:
            time.sleep(0.02)
        report = measure.get_report()
        data = json.loads(report.to_json())

        started = datetime.fromisoformat(data["started_at"])
        stopped = datetime.fromisoformat(data["stopped_at"])
        assert started == report.measurement_started_at
        assert started <= stopped
        assert data["elapsed"] >= 20_000
        assert PerformanceReport.from_dict(data) == report

    def test_sessions_are_independent(self):
        first = MeasurePerformance(sampling_period=0.01, scheduler="thread")
        second = MeasurePerformance(sampling_period=0.01, scheduler="thread")

        first.start()
        second.start()
        time.sleep(0.03)
        first.stop()
        time.sleep(0.03)
        second.stop()

        assert first.get_report().elapsed < second.get_report().elapsed

    @pytest.mark.asyncio
    async def test_measured_decorator_async(self):
        reports = []

        @measured(reports.append, sampling_period=0.01)
        async def work():
            await asyncio.sleep(0.05)
            return "done"

        assert await work() == "done"
        assert len(reports) == 1
        assert len(reports[0].memory_samples_bytes) >= 2
