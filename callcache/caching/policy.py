"""
Cache Policy

Decides whether a call to a method should go through the store.
"""

from typing import Protocol


class PolicyOptions(Protocol):
    cache_by_default: bool
    cache_methods: frozenset[str]
    non_cache_methods: frozenset[str]


def should_cache(method_name: str, options: PolicyOptions) -> bool:
    """
    Apply the allow/deny lists for the configured polarity.

    - cache_by_default=True:  cache unless the method is in non_cache_methods
    - cache_by_default=False: cache only if the method is in cache_methods

    The list that does not match the polarity is ignored. Matching is exact;
    callers lower-case the method name first.
    """
    if options.cache_by_default:
        return method_name not in options.non_cache_methods
    return method_name in options.cache_methods
