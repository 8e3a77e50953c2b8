"""
Tests for configuration models and the config loader.
"""

import json
import os

import pytest
import yaml

from content_sync.config import (
    ConfigLoader,
    DataSourceConfig,
    GlobalConfig,
    LogLevel,
    SyncConfig,
    load_config,
)
from content_sync.exceptions import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any CONTENT_SYNC_ variables from the environment."""
    for name in list(os.environ):
        if name.startswith("CONTENT_SYNC_"):
            monkeypatch.delenv(name)
    return monkeypatch


class TestConfigModels:
    """Test defaults and validation."""

    def test_sync_defaults(self):
        config = SyncConfig()

        assert config.cache_ttl_seconds == 300
        assert config.default_limit == 20
        assert config.carousel_limit == 10
        assert config.debounce_delay == 0.3

    def test_invalid_sync_values(self):
        with pytest.raises(ValueError):
            SyncConfig(cache_ttl_seconds=0)
        with pytest.raises(ValueError):
            SyncConfig(default_limit=0)

    def test_data_source_normalisation(self):
        config = DataSourceConfig(url="https://x.supabase.co/", rest_path="rest/v1/")

        assert config.url == "https://x.supabase.co"
        assert config.rest_path == "/rest/v1"

    def test_api_key_is_secret(self):
        config = DataSourceConfig(api_key="super-secret-key")

        assert "super-secret-key" not in repr(config)
        assert config.api_key.get_secret_value() == "super-secret-key"

    def test_global_config_forbids_unknown_sections(self):
        with pytest.raises(ValueError):
            GlobalConfig(cache={"ttl": 5})


class TestConfigLoaderFiles:
    """Test loading from files."""

    def test_yaml_file(self, tmp_path, clean_env):
        path = tmp_path / "content_sync.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "logging": {"level": "DEBUG"},
                    "sync": {"cache_ttl_seconds": 120, "default_limit": 30},
                    "data_source": {"url": "https://x.supabase.co", "api_key": "k"},
                }
            )
        )

        config = ConfigLoader().load_config(path)

        assert config.logging.level == LogLevel.DEBUG
        assert config.sync.cache_ttl_seconds == 120
        assert config.sync.default_limit == 30
        assert config.data_source.url == "https://x.supabase.co"

    def test_json_file(self, tmp_path, clean_env):
        path = tmp_path / "content_sync.json"
        path.write_text(json.dumps({"sync": {"debounce_delay": 0.5}}))

        config = load_config(str(path))

        assert config.sync.debounce_delay == 0.5
        assert config.sync.default_limit == 20

    def test_empty_yaml_file(self, tmp_path, clean_env):
        path = tmp_path / "content_sync.yml"
        path.write_text("")

        assert ConfigLoader().load_config(path) == GlobalConfig()

    def test_missing_file(self, tmp_path, clean_env):
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigLoader().load_config(tmp_path / "missing.yaml")

    def test_unsupported_format(self, tmp_path, clean_env):
        path = tmp_path / "content_sync.toml"
        path.write_text("[sync]\n")

        with pytest.raises(ConfigurationError, match="Unsupported"):
            ConfigLoader().load_config(path)

    def test_malformed_file(self, tmp_path, clean_env):
        path = tmp_path / "content_sync.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError, match="Failed to parse"):
            ConfigLoader().load_config(path)

    def test_invalid_values(self, tmp_path, clean_env):
        path = tmp_path / "content_sync.yaml"
        path.write_text(yaml.safe_dump({"sync": {"cache_ttl_seconds": -1}}))

        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            ConfigLoader().load_config(path)

    def test_search_paths(self, tmp_path, clean_env):
        (tmp_path / "content_sync.yaml").write_text(
            yaml.safe_dump({"sync": {"default_limit": 7}})
        )
        clean_env.chdir(tmp_path)

        assert ConfigLoader().load_config().sync.default_limit == 7


class TestConfigLoaderEnvironment:
    """Test environment variable overrides."""

    def test_environment_values(self, clean_env):
        clean_env.setenv("CONTENT_SYNC_CACHE_TTL", "60")
        clean_env.setenv("CONTENT_SYNC_DEBOUNCE_DELAY", "0.1")
        clean_env.setenv("CONTENT_SYNC_LOG_STRUCTURED", "true")
        clean_env.setenv("CONTENT_SYNC_SUPABASE_URL", "https://env.supabase.co")
        clean_env.setenv("CONTENT_SYNC_SUPABASE_KEY", "12345678")

        config = ConfigLoader().load_from_dict(ConfigLoader()._load_from_environment())

        assert config.sync.cache_ttl_seconds == 60
        assert config.sync.debounce_delay == 0.1
        assert config.logging.enable_structured is True
        assert config.data_source.url == "https://env.supabase.co"
        assert config.data_source.api_key.get_secret_value() == "12345678"

    def test_environment_overrides_file(self, tmp_path, clean_env):
        path = tmp_path / "content_sync.yaml"
        path.write_text(
            yaml.safe_dump({"sync": {"cache_ttl_seconds": 120, "default_limit": 30}})
        )
        clean_env.setenv("CONTENT_SYNC_DEFAULT_LIMIT", "15")

        config = ConfigLoader().load_config(path)

        assert config.sync.default_limit == 15
        assert config.sync.cache_ttl_seconds == 120

    def test_invalid_environment_value(self, clean_env):
        clean_env.setenv("CONTENT_SYNC_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError):
            ConfigLoader().load_from_dict(ConfigLoader()._load_from_environment())
