"""
Storage Plugin Registry

Registry of storage plugins. Every resolved instance must implement
StoragePlugin. Plugins are not shared by default: each resolve returns a
fresh plugin, so options set on one store never leak into another.

Author: System Architect
Date: 2026-10-17
"""

from callcache.core.config.settings import get_settings
from callcache.core.interfaces import StoragePlugin
from callcache.plugins.registry import PluginRegistry
from callcache.plugins.storage_plugins import (
    ClearExpiredByFactor,
    ExceptionHandler,
    OptimizeByFactor,
    Serializer,
)


class StoragePluginRegistry(PluginRegistry):
    """Plugin registry preloaded with the bundled storage plugins."""

    aliases = {
        "clearexpiredbyfactor": "clear_expired_by_factor",
        "clearExpiredByFactor": "clear_expired_by_factor",
        "ClearExpiredByFactor": "clear_expired_by_factor",
        "exceptionhandler": "exception_handler",
        "exceptionHandler": "exception_handler",
        "ExceptionHandler": "exception_handler",
        "optimizebyfactor": "optimize_by_factor",
        "optimizeByFactor": "optimize_by_factor",
        "OptimizeByFactor": "optimize_by_factor",
        "Serializer": "serializer",
    }

    factories = {
        "clear_expired_by_factor": ClearExpiredByFactor,
        "exception_handler": ExceptionHandler,
        "optimize_by_factor": OptimizeByFactor,
        "serializer": Serializer,
    }

    shared_by_default = False
    instance_of = StoragePlugin
    plugin_kind = "storage plugin"


# Global registry (singleton pattern)
_storage_plugin_registry: StoragePluginRegistry | None = None


def get_storage_plugin_registry() -> StoragePluginRegistry:
    """
    Get the global storage plugin registry.

    Sharing follows PLUGINS_SHARED_BY_DEFAULT.
    """
    global _storage_plugin_registry

    if _storage_plugin_registry is None:
        _storage_plugin_registry = StoragePluginRegistry(
            shared_by_default=get_settings().plugins.PLUGINS_SHARED_BY_DEFAULT
        )

    return _storage_plugin_registry


def reset_storage_plugin_registry() -> None:
    """Drop the global registry (useful for testing)."""
    global _storage_plugin_registry
    _storage_plugin_registry = None
