"""
Configuration management for the Huhugerman lesson API simulator.

Centralizes all configuration using Pydantic settings with environment variable support.
Defaults reproduce the fixed simulation constants, so an empty environment
behaves exactly like the hard-coded prototype.
"""

import logging
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

from shared.utils.constants import (
    MIN_LATENCY_MS,
    MAX_LATENCY_MS,
    UPSTREAM_FAILURE_RATE,
    AUTH_FAILURE_RATE,
)
from shared.utils.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Latency simulation
    sim_min_latency_ms: int = Field(
        default=MIN_LATENCY_MS,
        description="Lower bound (inclusive) of simulated latency in milliseconds"
    )
    sim_max_latency_ms: int = Field(
        default=MAX_LATENCY_MS,
        description="Upper bound (exclusive) of simulated latency in milliseconds"
    )

    # Chaos injection
    sim_upstream_failure_rate: float = Field(
        default=UPSTREAM_FAILURE_RATE,
        description="Share of calls failing with a 500 upstream error"
    )
    sim_auth_failure_rate: float = Field(
        default=AUTH_FAILURE_RATE,
        description="Share of calls failing with a 401 auth error"
    )
    sim_chaos_enabled: bool = Field(
        default=True,
        description="Disable to make every call proceed to the lesson lookup"
    )
    sim_random_seed: Optional[int] = Field(
        default=None,
        description="Seed for the default random source (None = nondeterministic)"
    )

    # Fixtures
    lesson_fixtures_path: Optional[str] = Field(
        default=None,
        description="Path to a lessons JSON file (None = bundled A1 catalog)"
    )

    # Application Settings
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def auth_failure_threshold(self) -> float:
        """Upper cutpoint of the auth failure band on the single chaos draw."""
        return self.sim_upstream_failure_rate + self.sim_auth_failure_rate


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get or create the global settings instance.

    Returns:
        Settings: Application settings
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings():
    """Reset the global settings instance (useful for testing)."""
    global _settings
    _settings = None


def validate_required_settings(settings: Optional[Settings] = None):
    """
    Validate that the simulation settings are internally consistent.

    Raises ConfigurationError if latency bounds or failure rates are unusable.
    """
    settings = settings or get_settings()

    if settings.sim_min_latency_ms < 0:
        raise ConfigurationError("sim_min_latency_ms", "must not be negative")

    if settings.sim_max_latency_ms < settings.sim_min_latency_ms:
        raise ConfigurationError(
            "sim_max_latency_ms",
            f"must be >= sim_min_latency_ms ({settings.sim_min_latency_ms})"
        )

    for key in ("sim_upstream_failure_rate", "sim_auth_failure_rate"):
        rate = getattr(settings, key)
        if not 0.0 <= rate <= 1.0:
            raise ConfigurationError(key, f"must be within [0, 1], got {rate}")

    if settings.auth_failure_threshold > 1.0:
        raise ConfigurationError(
            "sim_auth_failure_rate",
            "combined failure rate must not exceed 1"
        )

    return True


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Apply the configured log level to the root logger."""
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        raise ConfigurationError("log_level", f"unknown level '{settings.log_level}'")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logging.getLogger().setLevel(level)
