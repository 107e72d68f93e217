"""
Configuration management for the provider.

Provides type-safe configuration loading and validation with support
for multiple configuration sources and priority-based merging.
"""

from .loader import ConfigError, ConfigLoader, load_config
from .models import LoggingConfig, LogLevel, ProviderConfig, TimeoutsConfig

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "LogLevel",
    "LoggingConfig",
    "ProviderConfig",
    "TimeoutsConfig",
    "load_config",
]
