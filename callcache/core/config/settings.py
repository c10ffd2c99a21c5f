"""
callcache Settings

Environment configuration for store selection, caching polarity, plugin
sharing and logging. Values come from the process environment or a .env
file and are validated once, when the settings object is first built.
Tests rebuild it with reload_settings().

Author: System Architect
Date: 2026-10-17
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from callcache.core.config.constants import DEFAULT_STORE_ADAPTER, REDIS_KEY_PREFIX


class RedisSettings(BaseSettings):
    """
    Redis configuration for the RedisStore adapter.
    """

    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_SOCKET_TIMEOUT: int = Field(default=5, description="Socket timeout in seconds")
    REDIS_KEY_PREFIX: str = Field(default=REDIS_KEY_PREFIX, description="Prefix for every stored key")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class CacheSettings(BaseSettings):
    """
    Call-cache configuration.

    CACHE_BY_DEFAULT sets the polarity of the method allow/deny lists.
    """

    CACHE_STORE_ADAPTER: str = Field(
        default=DEFAULT_STORE_ADAPTER, description="Store adapter name resolved through the registry"
    )
    CACHE_BY_DEFAULT: bool = Field(default=True, description="Cache every method unless excluded")
    CACHE_DEFAULT_TTL: int | None = Field(default=None, description="Store TTL in seconds (None = no expiry)")
    CACHE_MEMORY_MAX_ITEMS: int | None = Field(default=None, description="MemoryStore capacity (None = unbounded)")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class PluginSettings(BaseSettings):
    """Plugin registry configuration."""

    PLUGINS_SHARED_BY_DEFAULT: bool = Field(
        default=False, description="Reuse resolved storage plugin instances"
    )

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class LoggingSettings(BaseSettings):
    """Renderer and level for structlog output."""

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class Settings(BaseSettings):
    """
    Flat view of every setting; the grouped properties slice it per concern.

    Usage:
        from callcache.core.config.settings import get_settings

        settings = get_settings()
        adapter = settings.cache.CACHE_STORE_ADAPTER
        redis_host = settings.redis.REDIS_HOST
    """

    # Redis settings
    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_SOCKET_TIMEOUT: int = Field(default=5, description="Socket timeout in seconds")
    REDIS_KEY_PREFIX: str = Field(default=REDIS_KEY_PREFIX, description="Prefix for every stored key")

    # Cache settings
    CACHE_STORE_ADAPTER: str = Field(
        default=DEFAULT_STORE_ADAPTER, description="Store adapter name resolved through the registry"
    )
    CACHE_BY_DEFAULT: bool = Field(default=True, description="Cache every method unless excluded")
    CACHE_DEFAULT_TTL: int | None = Field(default=None, description="Store TTL in seconds (None = no expiry)")
    CACHE_MEMORY_MAX_ITEMS: int | None = Field(default=None, description="MemoryStore capacity (None = unbounded)")

    # Plugin settings
    PLUGINS_SHARED_BY_DEFAULT: bool = Field(
        default=False, description="Reuse resolved storage plugin instances"
    )

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @field_validator("CACHE_DEFAULT_TTL", "CACHE_MEMORY_MAX_ITEMS")
    @classmethod
    def validate_positive(cls, v):
        """Reject zero and negative limits; None disables the limit."""
        if v is not None and v <= 0:
            raise ValueError("must be a positive integer or unset")
        return v

    # Nested configuration views
    @property
    def redis(self) -> 'RedisSettings':
        """Get Redis settings."""
        return RedisSettings(
            REDIS_HOST=self.REDIS_HOST,
            REDIS_PORT=self.REDIS_PORT,
            REDIS_DB=self.REDIS_DB,
            REDIS_PASSWORD=self.REDIS_PASSWORD,
            REDIS_SOCKET_TIMEOUT=self.REDIS_SOCKET_TIMEOUT,
            REDIS_KEY_PREFIX=self.REDIS_KEY_PREFIX,
        )

    @property
    def cache(self) -> 'CacheSettings':
        """Get cache settings."""
        return CacheSettings(
            CACHE_STORE_ADAPTER=self.CACHE_STORE_ADAPTER,
            CACHE_BY_DEFAULT=self.CACHE_BY_DEFAULT,
            CACHE_DEFAULT_TTL=self.CACHE_DEFAULT_TTL,
            CACHE_MEMORY_MAX_ITEMS=self.CACHE_MEMORY_MAX_ITEMS,
        )

    @property
    def plugins(self) -> 'PluginSettings':
        """Get plugin registry settings."""
        return PluginSettings(PLUGINS_SHARED_BY_DEFAULT=self.PLUGINS_SHARED_BY_DEFAULT)

    @property
    def logging(self) -> 'LoggingSettings':
        """Get logging settings."""
        return LoggingSettings(LOG_LEVEL=self.LOG_LEVEL, LOG_FORMAT=self.LOG_FORMAT)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )


# Global settings instance (singleton pattern)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).

    Returns:
        Settings: Global settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """
    Rebuild settings from the current environment.

    Returns:
        Settings: New settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
