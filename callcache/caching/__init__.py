"""
Caching Module

Call-result caching for classes and modules.

Usage:
    from callcache.caching import ClassCache
    from callcache.infrastructure.cache import MemoryStore

    cache = ClassCache(
        target_type=ReportService,
        store=MemoryStore(),
        non_cache_methods=["refresh"],
    )
    total = cache.call("monthly_total", [2026, 9])
"""

from .class_cache import ClassCache
from .key_generator import generate_arguments_key, generate_key, serialize_arguments
from .observer import CallObserver
from .options import ClassCacheOptions
from .policy import should_cache

__all__ = [
    "ClassCache",
    "ClassCacheOptions",
    "CallObserver",
    "generate_key",
    "generate_arguments_key",
    "serialize_arguments",
    "should_cache",
]
