"""Configuration module for neo-caches."""

from .settings import CacheSettings, get_cache_settings
from .logging_config import LogFormat, LogLevel, LoggingConfig, setup_logging

__all__ = [
    "CacheSettings",
    "get_cache_settings",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "setup_logging",
]
