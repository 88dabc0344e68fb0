"""Configuration management using pydantic-settings."""

from .settings import (
    LoggingSettings,
    RegistrySettings,
    SigcaseSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "LoggingSettings",
    "RegistrySettings",
    "SigcaseSettings",
    "clear_settings_cache",
    "get_settings",
]
