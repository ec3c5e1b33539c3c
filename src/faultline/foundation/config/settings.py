"""Environment-based configuration using pydantic-settings.

Example:
    >>> from faultline.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.bridge.propagate_fatal
    True
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # FAULTLINE_LOG_LEVEL=DEBUG
    # FAULTLINE_EVAL_TRACE_STEPS=true
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FAULTLINE_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class BridgeSettings(BaseSettings):
    """Catch boundary of the exception bridge (attempt_call)."""

    model_config = SettingsConfigDict(
        env_prefix="FAULTLINE_BRIDGE_",
        extra="ignore",
    )

    propagate_fatal: bool = Field(
        default=True,
        description="Let MemoryError and RecursionError propagate instead of converting them to failures",
    )


class EvaluationSettings(BaseSettings):
    """Evaluator and threading combinator behavior."""

    model_config = SettingsConfigDict(
        env_prefix="FAULTLINE_EVAL_",
        extra="ignore",
    )

    trace_steps: bool = Field(default=False, description="Log every evaluated binding at debug level")
    warn_deprecated: bool = Field(default=True, description="Emit DeprecationWarning from attempt_thread*")


class FaultlineSettings(BaseSettings):
    """Root settings for faultline.

    Loads configuration from environment variables with FAULTLINE_ prefix.

    Example environment variables:
        FAULTLINE_LOG_LEVEL=DEBUG
        FAULTLINE_LOG_FORMAT=json
        FAULTLINE_BRIDGE_PROPAGATE_FATAL=false
        FAULTLINE_EVAL_WARN_DEPRECATED=false
    """

    model_config = SettingsConfigDict(
        env_prefix="FAULTLINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    bridge: BridgeSettings = Field(default_factory=BridgeSettings)
    evaluation: EvaluationSettings = Field(default_factory=EvaluationSettings)

    @computed_field
    @property
    def effective_log_level(self) -> str:
        """DEBUG when debug mode is on, otherwise the configured level."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> FaultlineSettings:
    """Get the global settings instance (cached)."""
    return FaultlineSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
