"""
Configuration management and singleton pattern.

This module provides the main configuration loading and management interface,
implementing a singleton pattern to ensure configuration is loaded only once.
"""

import logging
from pathlib import Path
from typing import Optional

from ..models.config import MeasureConfig
from ..validation import handle_config_error, ErrorSeverity
from .loader import load_main_config
from .validators import validate_measure_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[MeasureConfig] = None

# Default location of the configuration file, relative to the repository root.
_DEFAULT_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"
_CONFIG_FILE_PATH = _DEFAULT_CONFIG_FILE_PATH
_CONFIG_PATH_EXPLICIT = False


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path.

    Unlike the default location, an explicitly set file must exist when the
    configuration is next loaded.

    Args:
        config_path: Path to the config.toml file
    """
    global _CONFIG_FILE_PATH, _CONFIG_PATH_EXPLICIT, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path)
    _CONFIG_PATH_EXPLICIT = True
    # Clear cached config to force reload with new path
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def reset_config_path() -> None:
    """Return to the default configuration location and clear the cache."""
    global _CONFIG_FILE_PATH, _CONFIG_PATH_EXPLICIT, _CONFIG
    _CONFIG_FILE_PATH = _DEFAULT_CONFIG_FILE_PATH
    _CONFIG_PATH_EXPLICIT = False
    _CONFIG = None


def clear_config_cache() -> None:
    """
    Clear the cached configuration, forcing a reload on next access.
    """
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def _load_config(config_path: Path, required: bool) -> MeasureConfig:
    """
    Load and validate the configuration file.

    Args:
        config_path: Path to the config.toml file
        required: Whether a missing file is an error

    Returns:
        Validated MeasureConfig instance

    Raises:
        FileNotFoundError: If a required configuration file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    if not required and not config_path.exists():
        logger.debug(f"No configuration file at {config_path}, using defaults")
        return MeasureConfig()

    try:
        config_data = load_main_config(config_path)
        config = validate_measure_config(config_data)
        logger.info(
            f"Successfully loaded configuration: sampling period "
            f"{config.sampling_period_seconds}s, scheduler '{config.scheduler}'"
        )
        return config
    except FileNotFoundError as e:
        handle_config_error(
            error=e,
            context="loading configuration file",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise
    except Exception as e:
        handle_config_error(
            error=e,
            context="processing configuration",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def get_config() -> MeasureConfig:
    """
    Get the global configuration, loading it if necessary.

    The first call loads and validates the configuration file; subsequent
    calls return the cached instance.

    Returns:
        The singleton MeasureConfig instance

    Raises:
        FileNotFoundError: If an explicitly set configuration file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(_CONFIG_FILE_PATH, required=_CONFIG_PATH_EXPLICIT)
    return _CONFIG


def is_config_loaded() -> bool:
    """
    Check if configuration has been loaded and cached.
    """
    return _CONFIG is not None


def get_config_info() -> dict:
    """
    Get information about the current configuration state.

    Returns:
        Dictionary with configuration metadata
    """
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(_CONFIG_FILE_PATH),
        "config_path_explicit": _CONFIG_PATH_EXPLICIT,
        "sampling_period_seconds": _CONFIG.sampling_period_seconds if _CONFIG else None,
        "scheduler": _CONFIG.scheduler if _CONFIG else None,
    }
