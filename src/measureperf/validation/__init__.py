"""
Validation and error handling for the measureperf package.

This module provides the exception types raised by measurement sessions and
configuration loading, plus input validators with consistent error reporting.
"""

from .exceptions import (
    ErrorSeverity,
    MeasurementError,
    MeasurementErrorKind,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_measurement_error,
)
from .validators import (
    validate_enum_choice,
    validate_log_level,
    validate_positive_float,
)

__all__ = [
    # Exceptions
    "ErrorSeverity",
    "MeasurementError",
    "MeasurementErrorKind",
    "ValidationError",
    # Error handling
    "handle_error",
    "handle_cli_error",
    "handle_config_error",
    "handle_measurement_error",
    # Validators
    "validate_enum_choice",
    "validate_log_level",
    "validate_positive_float",
]
