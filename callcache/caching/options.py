"""
Class Cache Options

Configuration of a ClassCache, validated with pydantic.

Method names in both lists are lower-cased on assignment because the
interceptor matches them against lower-cased method identities.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from callcache.core.config.settings import get_settings


class ClassCacheOptions(BaseModel):
    """
    Attributes:
        target_type: Class or module whose callables are cached
        store: Store instance, or an adapter name resolved through the registry
        cache_by_default: Polarity of the method lists
        cache_methods: Methods cached when cache_by_default is False
        non_cache_methods: Methods never cached when cache_by_default is True
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")

    target_type: Any = None
    store: Any = None
    cache_by_default: bool = True
    cache_methods: frozenset[str] = frozenset()
    non_cache_methods: frozenset[str] = frozenset()

    @field_validator("cache_methods", "non_cache_methods", mode="before")
    @classmethod
    def normalize_methods(cls, v: str | Iterable[str] | None) -> frozenset[str]:
        """Lower-case and de-duplicate method names."""
        if v is None:
            return frozenset()
        if isinstance(v, str):
            v = [v]
        return frozenset(name.lower() for name in v)

    @classmethod
    def from_settings(cls, target_type: Any, **overrides) -> "ClassCacheOptions":
        """
        Build options with CACHE_STORE_ADAPTER and CACHE_BY_DEFAULT as defaults.
        """
        settings = get_settings()
        values = {
            "target_type": target_type,
            "store": settings.cache.CACHE_STORE_ADAPTER,
            "cache_by_default": settings.cache.CACHE_BY_DEFAULT,
        }
        values.update(overrides)
        return cls(**values)
