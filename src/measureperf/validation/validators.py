"""
Value validation functions.

Used by the configuration layer and by MeasurePerformance's constructor to
reject bad values before a session is created.
"""

import logging
from typing import Any, List, Optional

from .exceptions import ValidationError

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value",
    exclusive_min: bool = False
) -> float:
    """
    Validate that a value is a number within a range.

    Args:
        value: Value to validate
        min_value: Minimum allowed value
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated
        exclusive_min: Whether ``min_value`` itself is rejected

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    # bool is an int subclass, but True is never a meaningful period.
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )

    if float_value != float_value:
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if exclusive_min and float_value <= min_value:
        raise ValidationError(
            f"{field_name} must be > {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_enum_choice(
    value: Any,
    choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Args:
        value: Value to validate
        choices: List of allowed choices
        field_name: Name of the field being validated
        case_sensitive: Whether the comparison should be case-sensitive

    Returns:
        The matching choice, spelled as in ``choices``

    Raises:
        ValidationError: If value is not in choices
    """
    str_value = str(value)

    if case_sensitive:
        if str_value not in choices:
            raise ValidationError(
                f"{field_name} must be one of {choices}, got {value}",
                field_name=field_name,
                value=value
            )
        return str_value

    for choice in choices:
        if choice.lower() == str_value.lower():
            return choice
    raise ValidationError(
        f"{field_name} must be one of {choices} (case insensitive), got {value}",
        field_name=field_name,
        value=value
    )


def validate_log_level(value: Any, field_name: str = "log_level") -> int:
    """
    Validate a logging level name and return its numeric value.

    Raises:
        ValidationError: If the name is not a standard logging level
    """
    level_name = validate_enum_choice(
        value, choices=_LOG_LEVELS, field_name=field_name, case_sensitive=False
    )
    return logging.getLevelName(level_name)
