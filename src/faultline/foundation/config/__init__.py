"""Configuration management using pydantic-settings."""

from .settings import (
    BridgeSettings,
    EvaluationSettings,
    FaultlineSettings,
    LoggingSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "BridgeSettings",
    "EvaluationSettings",
    "FaultlineSettings",
    "LoggingSettings",
    "clear_settings_cache",
    "get_settings",
]
