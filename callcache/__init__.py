"""
callcache

Backend-agnostic call-result caching for classes and modules, with a
name-based registry for store adapters and storage plugins.
"""

from callcache.caching import ClassCache, ClassCacheOptions, generate_key, should_cache
from callcache.core.exceptions import (
    CallCacheError,
    ConfigurationError,
    ResolutionError,
    StoreError,
)
from callcache.core.interfaces import StoragePlugin, Store
from callcache.infrastructure.cache import MemoryStore, RedisStore
from callcache.plugins import (
    PluginRegistry,
    StoragePluginRegistry,
    StoreAdapterRegistry,
    get_storage_plugin_registry,
    get_store_registry,
)

__version__ = "1.0.0"

__all__ = [
    "ClassCache",
    "ClassCacheOptions",
    "generate_key",
    "should_cache",
    "CallCacheError",
    "ConfigurationError",
    "ResolutionError",
    "StoreError",
    "Store",
    "StoragePlugin",
    "MemoryStore",
    "RedisStore",
    "PluginRegistry",
    "StoragePluginRegistry",
    "StoreAdapterRegistry",
    "get_storage_plugin_registry",
    "get_store_registry",
]
