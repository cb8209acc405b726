"""
Configuration validation utilities.
"""

import logging
from typing import Any, Dict

from ..models.config import DEFAULT_SAMPLING_PERIOD_SECONDS, MeasureConfig
from ..validation import (
    ValidationError,
    validate_enum_choice,
    validate_log_level,
    validate_positive_float,
)

logger = logging.getLogger(__name__)

SCHEDULER_CHOICES = ["auto", "asyncio", "thread"]


def validate_measure_config(config_data: Dict[str, Any]) -> MeasureConfig:
    """
    Validate and create a MeasureConfig from raw configuration data.

    Args:
        config_data: Raw configuration from TOML, with optional `measure`
            and `logging` tables

    Returns:
        Validated MeasureConfig instance

    Raises:
        ValidationError: If validation fails
    """
    measure_settings = config_data.get("measure", {})
    logging_settings = config_data.get("logging", {})

    if not isinstance(measure_settings, dict):
        raise ValidationError("[measure] must be a table", field_name="measure")
    if not isinstance(logging_settings, dict):
        raise ValidationError("[logging] must be a table", field_name="logging")

    sampling_period_seconds = validate_positive_float(
        measure_settings.get("sampling_period_seconds", DEFAULT_SAMPLING_PERIOD_SECONDS),
        min_value=0.0,
        max_value=3600.0,
        field_name="measure.sampling_period_seconds",
        exclusive_min=True,
    )

    scheduler = validate_enum_choice(
        measure_settings.get("scheduler", "auto"),
        choices=SCHEDULER_CHOICES,
        field_name="measure.scheduler",
    )

    log_level = validate_log_level(
        logging_settings.get("level", "INFO"),
        field_name="logging.level",
    )

    config = MeasureConfig(
        sampling_period_seconds=sampling_period_seconds,
        scheduler=scheduler,
        log_level=log_level,
    )
    logger.debug(f"Validated measure configuration: {config}")
    return config
