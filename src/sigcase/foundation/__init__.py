"""Foundation - Core building blocks for sigcase.

Contains: error handling and configuration.
"""

from __future__ import annotations

__all__ = [
    # Errors
    "ErrorCode", "SignatureError", "SignatureException",
    "Result", "Ok", "Err", "sequence",
    # Config
    "SigcaseSettings", "get_settings", "clear_settings_cache", "LoggingSettings", "RegistrySettings",
]


def __getattr__(name: str):
    """Lazy imports to avoid circular dependencies."""
    if name in ("ErrorCode", "SignatureError", "SignatureException",
                "Result", "Ok", "Err", "sequence"):
        from . import errors
        return getattr(errors, name)
    
    if name in ("SigcaseSettings", "get_settings", "clear_settings_cache", "LoggingSettings", "RegistrySettings"):
        from . import config
        return getattr(config, name)
    
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
