"""
Cache-Related Exceptions

All exceptions raised while producing keys or talking to a Store.

Author: System Architect
Date: 2026-10-17
"""

from callcache.core.exceptions.base import CallCacheError


class CacheError(CallCacheError):
    """Base exception for cache-related errors."""
    pass


class StoreError(CacheError):
    """
    Raised when a Store operation fails.

    A clean miss is never a StoreError; stores report it as ``(None, False)``.
    A StoreError during a cacheable call fails that call.
    """
    pass


class StoreConnectionError(StoreError):
    """
    Raised when the Store backend cannot be reached.

    Common causes:
    - Redis server is down
    - Network connectivity issues
    - Incorrect host/port configuration
    - Authentication failure
    """
    pass


class ArgumentSerializationError(CacheError):
    """
    Raised when call arguments cannot be serialized canonically.

    Keys must depend on argument values only, so objects without a
    value-based encoding are rejected instead of being hashed by identity.
    """
    pass
