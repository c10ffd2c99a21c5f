"""
Unit Tests for Configuration Settings

Tests the settings loading, validation, and default values.
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from callcache.core.config.settings import Settings, get_settings, reload_settings


@pytest.mark.unit
class TestSettingsInitialization:
    """Test Settings class initialization and validation."""

    def test_settings_has_required_attribute_groups(self):
        settings = Settings()

        assert hasattr(settings, "cache")
        assert hasattr(settings, "redis")
        assert hasattr(settings, "plugins")
        assert hasattr(settings, "logging")

    def test_cache_settings_have_valid_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.cache.CACHE_STORE_ADAPTER == "memory"
        assert settings.cache.CACHE_BY_DEFAULT is True
        assert settings.cache.CACHE_DEFAULT_TTL is None
        assert settings.cache.CACHE_MEMORY_MAX_ITEMS is None

    def test_plugin_settings_default_to_not_shared(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.plugins.PLUGINS_SHARED_BY_DEFAULT is False

    def test_redis_settings_have_valid_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.redis.REDIS_HOST == "localhost"
        assert settings.redis.REDIS_PORT == 6379
        assert settings.redis.REDIS_DB == 0
        assert settings.redis.REDIS_KEY_PREFIX == "callcache"


@pytest.mark.unit
class TestSettingsLoading:
    """Test settings loading from environment variables."""

    def test_settings_load_from_env_vars(self):
        env_vars = {
            "CACHE_STORE_ADAPTER": "redis",
            "CACHE_BY_DEFAULT": "false",
            "CACHE_DEFAULT_TTL": "300",
            "REDIS_HOST": "cache.example.com",
            "REDIS_PORT": "6380",
            "PLUGINS_SHARED_BY_DEFAULT": "true",
            "LOG_FORMAT": "console",
        }

        with patch.dict(os.environ, env_vars):
            settings = Settings()

        assert settings.cache.CACHE_STORE_ADAPTER == "redis"
        assert settings.cache.CACHE_BY_DEFAULT is False
        assert settings.cache.CACHE_DEFAULT_TTL == 300
        assert settings.redis.REDIS_HOST == "cache.example.com"
        assert settings.redis.REDIS_PORT == 6380
        assert settings.plugins.PLUGINS_SHARED_BY_DEFAULT is True
        assert settings.logging.LOG_FORMAT == "console"

    def test_log_level_is_normalized(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
            settings = Settings()

        assert settings.logging.LOG_LEVEL == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "verbose"}):
            with pytest.raises(ValidationError):
                Settings()

    @pytest.mark.parametrize("field", ["CACHE_DEFAULT_TTL", "CACHE_MEMORY_MAX_ITEMS"])
    def test_non_positive_limits_rejected(self, field):
        with patch.dict(os.environ, {field: "0"}):
            with pytest.raises(ValidationError):
                Settings()


@pytest.mark.unit
class TestSettingsSingleton:
    """Test the global settings accessor."""

    def test_get_settings_returns_same_instance(self):
        assert get_settings() is get_settings()

    def test_reload_settings_replaces_instance(self):
        first = get_settings()
        with patch.dict(os.environ, {"CACHE_STORE_ADAPTER": "redis"}):
            reloaded = reload_settings()

        assert reloaded is not first
        assert get_settings() is reloaded
        assert reloaded.cache.CACHE_STORE_ADAPTER == "redis"
