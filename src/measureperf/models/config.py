"""
Configuration data models.

This module contains the configuration structure loaded from `config.toml`.
"""

import logging
from dataclasses import dataclass

# Sample memory every 10ms unless configured otherwise.
DEFAULT_SAMPLING_PERIOD_SECONDS = 0.01


@dataclass
class MeasureConfig:
    """
    Settings for measurement sessions, loaded from the `[measure]` and
    `[logging]` sections of `config.toml`.
    """

    # [measure] - seconds between periodic memory samples.
    sampling_period_seconds: float = DEFAULT_SAMPLING_PERIOD_SECONDS
    # [measure] - "auto", "asyncio" or "thread".
    scheduler: str = "auto"
    # [logging] - numeric logging level for the CLI.
    log_level: int = logging.INFO
