"""
Configuration models for content_sync.

This module defines all configuration data models with validation and defaults.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Default logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    file_path: Optional[Path] = Field(default=None, description="Log file path")
    max_file_size: int = Field(
        default=10 * 1024 * 1024, description="Max log file size in bytes"
    )
    backup_count: int = Field(default=5, description="Number of backup log files")
    enable_console: bool = Field(default=True, description="Enable console logging")
    enable_file: bool = Field(default=False, description="Enable file logging")
    enable_structured: bool = Field(
        default=False, description="Enable structured JSON logging"
    )

    # Component-specific log levels
    component_levels: Dict[str, LogLevel] = Field(
        default_factory=dict, description="Per-component log levels"
    )


class SyncConfig(BaseModel):
    """Cache, paging and search timing for the synchronization layer."""

    cache_ttl_seconds: float = Field(
        default=300.0, gt=0, description="How long a fetched collection stays valid"
    )
    default_limit: int = Field(default=20, ge=1, description="Rows per fetch")
    carousel_limit: int = Field(
        default=10, ge=1, description="Rows per fetch for hero carousel slides"
    )
    debounce_delay: float = Field(
        default=0.3, gt=0, description="Quiet period before a search runs, in seconds"
    )


class DataSourceConfig(BaseModel):
    """Connection settings for the remote record store."""

    url: Optional[str] = Field(default=None, description="Base URL of the project")
    api_key: Optional[SecretStr] = Field(default=None, description="Anon/service key")
    rest_path: str = Field(default="/rest/v1", description="REST endpoint prefix")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    schema_name: Optional[str] = Field(
        default=None, description="Database schema (Accept-Profile header)"
    )

    @field_validator("url")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        return v.rstrip("/") if v else v

    @field_validator("rest_path")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        v = v.rstrip("/")
        return v if v.startswith("/") else f"/{v}"


class GlobalConfig(BaseModel):
    """Global configuration container."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)
    data_source: DataSourceConfig = Field(default_factory=DataSourceConfig)

    model_config = ConfigDict(validate_assignment=True, extra="forbid")
