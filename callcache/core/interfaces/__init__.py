"""
Core Interfaces

Protocol-based abstractions shared by the caching, plugin and
infrastructure layers.

Usage:
    from callcache.core.interfaces import Store, StoragePlugin

    def build(store: Store) -> ClassCache:
        ...
"""

from .plugin import StoragePlugin
from .store import Store

__all__ = [
    "Store",
    "StoragePlugin",
]
