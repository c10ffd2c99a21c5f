"""
Core Module

Foundational components: configuration, logging, exceptions and interfaces.
"""

from .exceptions import (
    ArgumentSerializationError,
    CacheError,
    CallCacheError,
    ConfigurationError,
    PluginError,
    ResolutionError,
    StoreConnectionError,
    StoreError,
)
from .interfaces import StoragePlugin, Store
from .logging import (
    clear_correlation_id,
    get_correlation_id,
    get_logger,
    log_stage,
    set_correlation_id,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    "log_stage",
    "CallCacheError",
    "ConfigurationError",
    "CacheError",
    "StoreError",
    "StoreConnectionError",
    "ArgumentSerializationError",
    "PluginError",
    "ResolutionError",
    "Store",
    "StoragePlugin",
]
