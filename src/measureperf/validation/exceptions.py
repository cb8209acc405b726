"""
Exception types and error handling helpers.

This module holds the two exception types used across the package and the
logging helpers that report errors consistently before re-raising them.
"""

import logging
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ValidationError(Exception):
    """
    Exception raised when a configuration or constructor value is invalid.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class MeasurementErrorKind(Enum):
    """The ways a measurement session can fail."""

    # start() was called while a sampler handle is active.
    ALREADY_RUNNING = "already_running"
    # The memory reader failed or returned a negative byte count.
    INVALID_MEMORY_READING = "invalid_memory_reading"


class MeasurementError(RuntimeError):
    """
    Exception raised by a measurement session.

    A single exception type is used for every failure; callers distinguish
    failures through ``kind`` rather than through subclasses.

    Attributes:
        kind: Which failure occurred.
        severity: How the failure should be logged.
        value: The offending value, if any (e.g. the negative memory reading).
    """

    def __init__(self, message: str, kind: MeasurementErrorKind,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.kind = kind
        self.value = value
        self.severity = severity

    @classmethod
    def already_running(cls) -> "MeasurementError":
        return cls(
            "Measurement already started",
            kind=MeasurementErrorKind.ALREADY_RUNNING,
        )

    @classmethod
    def invalid_memory_reading(cls, value: Any) -> "MeasurementError":
        return cls(
            f"Invalid memory usage reading: {value!r} bytes",
            kind=MeasurementErrorKind.INVALID_MEMORY_READING,
            value=value,
            severity=ErrorSeverity.CRITICAL,
        )


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_measurement_error(error: Exception, context: str, **kwargs) -> None:
    """Handle errors raised while a measurement session is sampling."""
    kwargs.setdefault("severity", getattr(error, "severity", ErrorSeverity.ERROR))
    handle_error(error, f"measurement {context}", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Handle CLI-related errors by logging them and exiting."""
    exit_code = kwargs.pop('exit_code', 1)
    include_traceback = kwargs.pop('include_traceback', False)
    severity = kwargs.pop(
        'severity', ErrorSeverity.CRITICAL if include_traceback else ErrorSeverity.ERROR
    )

    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    import sys
    sys.exit(exit_code)
