"""
Plugin Module

Name-based resolution of store adapters and storage plugins.

Usage:
    from callcache.plugins import get_storage_plugin_registry

    plugin = get_storage_plugin_registry().resolve("OptimizeByFactor")
"""

from .adapter_registry import StoreAdapterRegistry, get_store_registry, reset_store_registry
from .registry import PluginRegistry
from .storage_plugins import (
    ClearExpiredByFactor,
    ExceptionHandler,
    OptimizeByFactor,
    Serializer,
)
from .storage_registry import (
    StoragePluginRegistry,
    get_storage_plugin_registry,
    reset_storage_plugin_registry,
)

__all__ = [
    "PluginRegistry",
    "StoragePluginRegistry",
    "StoreAdapterRegistry",
    "get_storage_plugin_registry",
    "get_store_registry",
    "reset_storage_plugin_registry",
    "reset_store_registry",
    "ClearExpiredByFactor",
    "ExceptionHandler",
    "OptimizeByFactor",
    "Serializer",
]
