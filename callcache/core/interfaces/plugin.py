"""
Storage Plugin Protocol

Capability contract every instance handed out by the storage plugin
registry must satisfy.

Author: System Architect
Date: 2026-10-17
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StoragePlugin(Protocol):
    """
    A behaviour add-on that hooks into a store's events.

    ``attach`` registers the plugin's listeners on the store, ``detach``
    removes exactly those listeners again.
    """

    options: Any

    def attach(self, store: Any, priority: int = 1) -> None:
        """Register listeners on the store."""
        ...

    def detach(self, store: Any) -> None:
        """Remove the listeners registered by attach."""
        ...
