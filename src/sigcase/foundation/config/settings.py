"""Environment-based configuration using pydantic-settings.

Example:
    >>> from sigcase.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.registry.shards
    16
    >>> settings.logging.level
    'INFO'
    
    # Or with environment variables:
    # SIGCASE_REGISTRY_SHARDS=64
    # SIGCASE_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""
    
    model_config = SettingsConfigDict(
        env_prefix="SIGCASE_LOG_",
        extra="ignore",
    )
    
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = None
    
    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class RegistrySettings(BaseSettings):
    """Signature registry configuration."""
    
    model_config = SettingsConfigDict(
        env_prefix="SIGCASE_REGISTRY_",
        extra="ignore",
    )
    
    shards: Annotated[int, Field(ge=1, le=1024, description="Number of lock shards")] = 16


class SigcaseSettings(BaseSettings):
    """Root settings for sigcase.
    
    Loads configuration from environment variables with SIGCASE_ prefix.
    Supports nested configuration and .env files.
    
    Example environment variables:
        SIGCASE_DEBUG=true
        SIGCASE_LOG_FORMAT=json
        SIGCASE_REGISTRY_SHARDS=32
    """
    
    model_config = SettingsConfigDict(
        env_prefix="SIGCASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )
    
    debug: bool = Field(default=False, description="Enable debug mode")
    
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    registry: RegistrySettings = Field(default_factory=RegistrySettings)
    
    @computed_field
    @property
    def effective_log_level(self) -> str:
        """DEBUG when debug mode is on, otherwise the configured level."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> SigcaseSettings:
    """Get the global settings instance (cached)."""
    return SigcaseSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
