"""Unit tests for config.py: defaults, env overrides and validation."""

import logging

import pytest

from config import (
    Settings,
    get_settings,
    reset_settings,
    validate_required_settings,
    configure_logging,
)
from shared.utils.exceptions import ConfigurationError


class TestSettingsDefaults:
    def test_defaults_match_fixed_constants(self, settings):
        assert settings.sim_min_latency_ms == 300
        assert settings.sim_max_latency_ms == 1500
        assert settings.sim_upstream_failure_rate == pytest.approx(0.10)
        assert settings.sim_auth_failure_rate == pytest.approx(0.10)
        assert settings.sim_chaos_enabled is True
        assert settings.sim_random_seed is None
        assert settings.lesson_fixtures_path is None

    def test_auth_threshold_is_cumulative(self, settings):
        assert settings.auth_failure_threshold == pytest.approx(0.20)

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SIM_MAX_LATENCY_MS", "2000")
        monkeypatch.setenv("SIM_CHAOS_ENABLED", "false")
        settings = Settings(_env_file=None)
        assert settings.sim_max_latency_ms == 2000
        assert settings.sim_chaos_enabled is False


class TestSettingsSingleton:
    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_reset_settings(self):
        first = get_settings()
        reset_settings()
        assert get_settings() is not first


class TestValidateRequiredSettings:
    def test_defaults_are_valid(self, settings):
        assert validate_required_settings(settings) is True

    def test_negative_min_latency(self):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_required_settings(Settings(_env_file=None, sim_min_latency_ms=-1))
        assert exc_info.value.config_key == "sim_min_latency_ms"

    def test_max_below_min(self):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_required_settings(
                Settings(_env_file=None, sim_min_latency_ms=500, sim_max_latency_ms=400)
            )
        assert exc_info.value.config_key == "sim_max_latency_ms"

    def test_rate_out_of_range(self):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_required_settings(Settings(_env_file=None, sim_upstream_failure_rate=1.5))
        assert exc_info.value.config_key == "sim_upstream_failure_rate"

    def test_combined_rate_above_one(self):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_required_settings(
                Settings(_env_file=None, sim_upstream_failure_rate=0.6, sim_auth_failure_rate=0.6)
            )
        assert "combined" in exc_info.value.reason


class TestConfigureLogging:
    def test_applies_level(self):
        configure_logging(Settings(_env_file=None, log_level="warning"))
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level(self):
        with pytest.raises(ConfigurationError):
            configure_logging(Settings(_env_file=None, log_level="LOUD"))
