"""
Store Implementations

Provides the evented store base plus in-memory and Redis stores.
"""

from .base_store import BaseStore, StoreEvent
from .memory_store import MemoryStore
from .redis_store import RedisStore

__all__ = [
    "BaseStore",
    "StoreEvent",
    "MemoryStore",
    "RedisStore",
]
