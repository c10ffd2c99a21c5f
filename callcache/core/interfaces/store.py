"""
Store Protocol

This module defines the abstract key/value store the call cache persists
results into.

Architectural Decision: Protocol-based abstraction
- Enables multiple store implementations (in-memory, Redis, ...)
- Facilitates testing with mock implementations
- Runtime checking lets the adapter registry verify resolved instances

Author: System Architect
Date: 2026-10-17
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Store(Protocol):
    """
    Protocol defining the interface for store implementations.

    Values are opaque payloads; no shape is imposed on them. A miss is a
    normal result, reported as ``(None, False)``. Any backend failure must
    surface as StoreError rather than as a miss.

    Implementations:
    - MemoryStore: process-local dict store
    - RedisStore: shared Redis-backed store

    Usage:
        def lookup(store: Store, key: str) -> Any:
            value, found = store.get(key)
            return value if found else None
    """

    def has(self, key: str) -> bool:
        """
        Check whether a key exists.

        Raises:
            StoreError: If the backend fails
        """
        ...

    def get(self, key: str) -> tuple[Any, bool]:
        """
        Get a value.

        Returns:
            (value, found): value is None when found is False

        Raises:
            StoreError: If the backend fails
        """
        ...

    def set(self, key: str, value: Any) -> None:
        """
        Store a value.

        Raises:
            StoreError: If the backend fails
        """
        ...

    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            bool: True if the key existed
        """
        ...

    def clear(self) -> None:
        """Remove every key owned by this store."""
        ...
