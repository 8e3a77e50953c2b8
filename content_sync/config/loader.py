"""
Configuration loader for content_sync.

This module handles loading configuration from configuration files and
environment variables.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import ConfigurationError
from .models import GlobalConfig


class ConfigLoader:
    """Configuration loader with support for multiple sources."""

    def __init__(self) -> None:
        """Initialize configuration loader."""
        self.config_paths = [
            Path("content_sync.yaml"),
            Path("content_sync.yml"),
            Path("content_sync.json"),
            Path("config/content_sync.yaml"),
            Path("config/content_sync.yml"),
            Path("config/content_sync.json"),
            Path.home() / ".content_sync" / "config.yaml",
            Path.home() / ".content_sync" / "config.yml",
            Path.home() / ".content_sync" / "config.json",
        ]

        # Environment variable prefix
        self.env_prefix = "CONTENT_SYNC_"

    def load_config(
        self, config_file: Optional[Union[str, Path]] = None
    ) -> GlobalConfig:
        """
        Load configuration from all available sources.

        Environment variables override values read from the file.

        Args:
            config_file: Specific config file to load

        Returns:
            GlobalConfig instance with merged configuration

        Raises:
            ConfigurationError: If a file cannot be parsed or a value is invalid
        """
        config_data: Dict[str, Any] = {}

        file_config = self._load_from_file(config_file)
        if file_config:
            config_data.update(file_config)

        env_config = self._load_from_environment()
        if env_config:
            config_data = self._deep_merge(config_data, env_config)

        return self.load_from_dict(config_data)

    def load_from_dict(self, config_data: Dict[str, Any]) -> GlobalConfig:
        """Build a validated GlobalConfig from a dictionary."""
        try:
            return GlobalConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def _load_from_file(
        self, config_file: Optional[Union[str, Path]] = None
    ) -> Optional[Dict[str, Any]]:
        """Load configuration from file."""
        if config_file:
            config_path = Path(config_file)
            if not config_path.exists():
                raise ConfigurationError(f"Config file not found: {config_path}")
            return self._parse_config_file(config_path)

        for config_path in self.config_paths:
            if config_path.exists():
                return self._parse_config_file(config_path)

        return None

    def _parse_config_file(self, config_path: Path) -> Dict[str, Any]:
        """Parse configuration file based on extension."""
        suffix = config_path.suffix.lower()
        if suffix not in (".yaml", ".yml", ".json"):
            raise ConfigurationError(
                f"Unsupported config file format: {config_path.suffix}"
            )
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if suffix == ".json":
                    return json.load(f) or {}
                return yaml.safe_load(f) or {}
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to parse config file {config_path}: {e}"
            ) from e

    def _load_from_environment(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        env_mappings = {
            # Logging
            f"{self.env_prefix}LOG_LEVEL": ("logging", "level"),
            f"{self.env_prefix}LOG_FILE": ("logging", "file_path"),
            f"{self.env_prefix}LOG_FORMAT": ("logging", "format"),
            f"{self.env_prefix}LOG_STRUCTURED": ("logging", "enable_structured"),
            # Sync
            f"{self.env_prefix}CACHE_TTL": ("sync", "cache_ttl_seconds"),
            f"{self.env_prefix}DEFAULT_LIMIT": ("sync", "default_limit"),
            f"{self.env_prefix}DEBOUNCE_DELAY": ("sync", "debounce_delay"),
            # Data source
            f"{self.env_prefix}SUPABASE_URL": ("data_source", "url"),
            f"{self.env_prefix}SUPABASE_KEY": ("data_source", "api_key"),
            f"{self.env_prefix}TIMEOUT": ("data_source", "timeout"),
        }
        # Keys and URLs must stay strings even if they look numeric
        raw_strings = {
            f"{self.env_prefix}SUPABASE_URL",
            f"{self.env_prefix}SUPABASE_KEY",
            f"{self.env_prefix}LOG_FORMAT",
        }

        for env_var, config_path in env_mappings.items():
            value = os.getenv(env_var)
            if value is None:
                continue
            converted = value if env_var in raw_strings else self._convert_env_value(value)

            current = config
            for key in config_path[:-1]:
                current = current.setdefault(key, {})
            current[config_path[-1]] = converted

        return config

    def _convert_env_value(self, value: str) -> Any:
        """Convert environment variable string to appropriate type."""
        lower = value.lower()
        if lower in ("true", "yes", "on"):
            return True
        if lower in ("false", "no", "off"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        return value

    def _deep_merge(
        self, base: Dict[str, Any], override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def load_config(config_file: Optional[Union[str, Path]] = None) -> GlobalConfig:
    """Convenience wrapper around ConfigLoader.load_config."""
    return ConfigLoader().load_config(config_file)
