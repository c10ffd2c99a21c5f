"""
Exception Module

Structured exception hierarchy for callcache, organized by theme.

Module Structure:
-----------------
- **base.py**: CallCacheError base class + ConfigurationError
- **cache.py**: Key generation and Store exceptions
- **plugin.py**: Plugin registry exceptions

Errors raised by the wrapped target itself are never translated and so
have no class here.

Usage:
------
```python
from callcache.core.exceptions import StoreError, ResolutionError
from callcache.core.exceptions.cache import StoreConnectionError
```
"""

from callcache.core.exceptions.base import CallCacheError, ConfigurationError
from callcache.core.exceptions.cache import (
    ArgumentSerializationError,
    CacheError,
    StoreConnectionError,
    StoreError,
)
from callcache.core.exceptions.plugin import PluginError, ResolutionError

__all__ = [
    # Base
    "CallCacheError",
    "ConfigurationError",
    # Cache
    "CacheError",
    "StoreError",
    "StoreConnectionError",
    "ArgumentSerializationError",
    # Plugin
    "PluginError",
    "ResolutionError",
]
