"""
Pytest configuration and shared fixtures for the measureperf test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules in the measureperf project.
"""

import shutil
import sys
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable, List
from unittest.mock import Mock, patch

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


class FakeMemoryReader:
    """
    Scripted memory reader.

    Returns the given readings in order and then keeps returning the last
    one. Every call is recorded in `calls`.
    """

    def __init__(self, readings: Iterable[int]):
        self.readings: List[int] = list(readings)
        self.calls = 0

    def __call__(self) -> int:
        index = min(self.calls, len(self.readings) - 1)
        self.calls += 1
        return self.readings[index]


@pytest.fixture
def fake_reader():
    """Factory for scripted memory readers."""
    return FakeMemoryReader


@pytest.fixture
def manual_scheduler():
    """A scheduler whose ticks fire only on demand."""
    from measureperf.scheduling import ManualScheduler

    return ManualScheduler()


@pytest.fixture
def sample_report():
    """A report with three known samples."""
    from measureperf.models import PerformanceReport

    return PerformanceReport(
        measurement_started_at=datetime(2024, 1, 1, 12, 0),
        measurement_stopped_at=datetime(2024, 1, 1, 12, 0, 1),
        elapsed=timedelta(seconds=1),
        memory_before_start_bytes=1000,
        memory_after_stop_bytes=2000,
        memory_samples_bytes=[1000, 1500, 2000],
    )


# ============================================================================
# Mock Fixtures
# ============================================================================


@pytest.fixture
def mock_psutil():
    """Mock psutil.Process for testing without system dependencies."""
    import measureperf.collectors.rss_psutil as rss_psutil

    with patch("measureperf.collectors.rss_psutil.psutil.Process") as mock_process_class:
        mock_process = Mock()
        mock_process.pid = 12345
        mock_process.memory_info.return_value = Mock(rss=1024 * 1024, vms=2048 * 1024)
        mock_process_class.return_value = mock_process

        # Drop any real handle cached by earlier tests.
        rss_psutil._process = None
        yield {
            "Process": mock_process_class,
            "process_instance": mock_process,
        }
        rss_psutil._process = None


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_config_data():
    """Sample configuration data for testing."""
    return {
        "measure": {
            "sampling_period_seconds": 0.05,
            "scheduler": "thread",
        },
        "logging": {
            "level": "DEBUG",
        },
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Write sample_config_data to a temporary config.toml."""
    import toml

    path = temp_dir / "config.toml"
    with open(path, "w") as f:
        toml.dump(sample_config_data, f)
    return path


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    yield

    from measureperf.config import reset_config_path

    reset_config_path()
