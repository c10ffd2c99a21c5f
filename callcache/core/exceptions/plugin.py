"""
Plugin-Related Exceptions

Author: System Architect
Date: 2026-10-17
"""

from callcache.core.exceptions.base import CallCacheError


class PluginError(CallCacheError):
    """Base exception for plugin registry errors."""
    pass


class ResolutionError(PluginError):
    """
    Raised when a plugin name maps to neither an alias nor a factory.

    Common causes:
    - Typo in a configured plugin name
    - Spelling variant missing from the alias table
    - Plugin not registered before resolution
    """
    pass
