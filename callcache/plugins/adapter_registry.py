"""
Store Adapter Registry

Resolves store adapter names (e.g. CACHE_STORE_ADAPTER) to Store instances.
Adapters are shared by default so every cache configured with the same
adapter name reads and writes the same store.

Author: System Architect
Date: 2026-10-17
"""

from callcache.core.config.settings import get_settings
from callcache.core.interfaces import Store
from callcache.infrastructure.cache import MemoryStore, RedisStore
from callcache.plugins.registry import PluginRegistry


def memory_store_factory(**options) -> MemoryStore:
    """Build a MemoryStore, defaulting TTL and capacity from settings."""
    settings = get_settings()
    options.setdefault("ttl", settings.cache.CACHE_DEFAULT_TTL)
    options.setdefault("max_items", settings.cache.CACHE_MEMORY_MAX_ITEMS)
    return MemoryStore(**options)


def redis_store_factory(**options) -> RedisStore:
    """Build a RedisStore from REDIS_* settings."""
    return RedisStore.from_settings(**options)


class StoreAdapterRegistry(PluginRegistry):
    """Registry of the bundled store adapters."""

    aliases = {
        "in_memory": "memory",
        "inmemory": "memory",
        "inMemory": "memory",
        "InMemory": "memory",
        "Memory": "memory",
        "memory_store": "memory",
        "memorystore": "memory",
        "memoryStore": "memory",
        "MemoryStore": "memory",
        "Redis": "redis",
        "redis_store": "redis",
        "redisstore": "redis",
        "redisStore": "redis",
        "RedisStore": "redis",
    }

    factories = {
        "memory": memory_store_factory,
        "redis": redis_store_factory,
    }

    shared_by_default = True
    instance_of = Store
    plugin_kind = "store adapter"


# Global registry (singleton pattern)
_store_registry: StoreAdapterRegistry | None = None


def get_store_registry() -> StoreAdapterRegistry:
    """Get the global store adapter registry."""
    global _store_registry

    if _store_registry is None:
        _store_registry = StoreAdapterRegistry()

    return _store_registry


def reset_store_registry() -> None:
    """Drop the global registry and its shared stores (useful for testing)."""
    global _store_registry
    _store_registry = None
