"""
Configuration management for content_sync.

This module provides configuration models and loading from configuration
files and environment variables.
"""

from .loader import ConfigLoader, load_config
from .models import (
    DataSourceConfig,
    GlobalConfig,
    LoggingConfig,
    LogLevel,
    SyncConfig,
)

__all__ = [
    "ConfigLoader",
    "DataSourceConfig",
    "GlobalConfig",
    "LoggingConfig",
    "LogLevel",
    "SyncConfig",
    "load_config",
]
