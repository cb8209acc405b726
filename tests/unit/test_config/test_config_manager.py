"""
Unit tests for configuration loading and the configuration singleton.
"""

import tomllib
from pathlib import Path

import pytest

import measureperf.config.manager as manager
from measureperf.config import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    load_toml_file,
    reset_config_path,
    set_config_path,
)
from measureperf.models.config import MeasureConfig
from measureperf.validation import ValidationError


@pytest.mark.unit
class TestLoadTomlFile:
    """Test cases for low-level TOML loading."""

    def test_load_existing_file(self, config_file, sample_config_data):
        assert load_toml_file(config_file) == sample_config_data

    def test_load_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            load_toml_file(temp_dir / "missing.toml")

    def test_load_malformed_file(self, temp_dir):
        path = temp_dir / "bad.toml"
        path.write_text("[measure\nsampling_period_seconds = ")

        with pytest.raises(tomllib.TOMLDecodeError):
            load_toml_file(path)


@pytest.mark.unit
class TestConfigManager:
    """Test cases for get_config and path management."""

    def test_explicit_path_is_loaded(self, config_file):
        set_config_path(config_file)
        config = get_config()

        assert config.sampling_period_seconds == 0.05
        assert config.scheduler == "thread"

    def test_config_is_cached(self, config_file):
        set_config_path(config_file)
        first = get_config()

        assert is_config_loaded()
        assert get_config() is first

    def test_clear_cache_forces_reload(self, config_file):
        set_config_path(config_file)
        first = get_config()
        clear_config_cache()

        assert not is_config_loaded()
        assert get_config() is not first

    def test_missing_explicit_file_raises(self, temp_dir):
        set_config_path(temp_dir / "absent.toml")

        with pytest.raises(FileNotFoundError):
            get_config()

    def test_missing_default_file_uses_defaults(self, temp_dir, monkeypatch):
        reset_config_path()
        monkeypatch.setattr(manager, "_CONFIG_FILE_PATH", temp_dir / "absent.toml")

        assert get_config() == MeasureConfig()

    def test_invalid_values_raise(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text('[measure]\nscheduler = "cron"\n')
        set_config_path(path)

        with pytest.raises(ValidationError):
            get_config()

    def test_reset_config_path(self, config_file):
        set_config_path(config_file)
        get_config()
        reset_config_path()

        info = get_config_info()
        assert info["config_loaded"] is False
        assert info["config_path_explicit"] is False
        assert Path(info["config_path"]) == manager._DEFAULT_CONFIG_FILE_PATH

    def test_get_config_info_after_load(self, config_file):
        set_config_path(config_file)
        get_config()
        info = get_config_info()

        assert info["config_loaded"] is True
        assert info["config_path"] == str(config_file)
        assert info["sampling_period_seconds"] == 0.05
        assert info["scheduler"] == "thread"

    def test_repository_default_config_is_valid(self):
        """The shipped conf/config.toml validates."""
        reset_config_path()
        config = get_config()

        assert config.sampling_period_seconds > 0
        assert config.scheduler in ("auto", "asyncio", "thread")
