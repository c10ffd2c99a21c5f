"""
Configuration Module

Components:
-----------
- **settings.py**: Pydantic-based configuration with environment variable loading
- **constants.py**: Stage identifiers, key separators and adapter defaults

Usage:
------
```python
from callcache.core.config import get_settings
from callcache.core.config.constants import Stage

settings = get_settings()
adapter = settings.cache.CACHE_STORE_ADAPTER
```

Environment Variables:
---------------------
```bash
CACHE_STORE_ADAPTER=redis
CACHE_BY_DEFAULT=false
REDIS_HOST=localhost
LOG_FORMAT=console
```
"""

from callcache.core.config.constants import Stage
from callcache.core.config.settings import Settings, get_settings, reload_settings

__all__ = [
    "Settings",
    "Stage",
    "get_settings",
    "reload_settings",
]
