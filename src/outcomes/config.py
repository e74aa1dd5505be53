"""Environment-based configuration using pydantic-settings.

Example:
    >>> from outcomes.config import get_settings
    >>> get_settings().trace.capture_traceback
    True

    # Or with environment variables:
    # OUTCOMES_TRACE_CAPTURE_TRACEBACK=false
    # OUTCOMES_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class TraceSettings(BaseSettings):
    """Diagnostic trace capture for Failure values."""

    model_config = SettingsConfigDict(
        env_prefix="OUTCOMES_TRACE_",
        extra="ignore",
    )

    capture_traceback: bool = Field(default=True, description="Record formatted traceback in catching()")
    max_contexts: PositiveInt = Field(default=32, description="Context frames kept per trace")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OUTCOMES_LOG_",
        extra="ignore",
    )

    level: LogLevel = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class OutcomesSettings(BaseSettings):
    """Root settings, loaded from OUTCOMES_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="OUTCOMES_",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    trace: TraceSettings = Field(default_factory=TraceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> OutcomesSettings:
    """Get the global settings instance (cached)."""
    return OutcomesSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() rereads the environment."""
    get_settings.cache_clear()


__all__ = [
    "LoggingSettings",
    "OutcomesSettings",
    "TraceSettings",
    "clear_settings_cache",
    "get_settings",
]
