"""
Unit Tests for the Cache Policy

Tests allow/deny list evaluation under both polarities.
"""

import pytest

from callcache.caching.options import ClassCacheOptions
from callcache.caching.policy import should_cache


@pytest.mark.unit
class TestCacheByDefault:
    """cache_by_default=True: everything but the deny list is cached."""

    def test_denied_method_not_cached(self):
        options = ClassCacheOptions(cache_by_default=True, non_cache_methods={"x"})
        assert should_cache("x", options) is False

    def test_other_method_cached(self):
        options = ClassCacheOptions(cache_by_default=True, non_cache_methods={"x"})
        assert should_cache("y", options) is True

    def test_allow_list_ignored(self):
        """The allow list has no effect under this polarity."""
        options = ClassCacheOptions(
            cache_by_default=True, cache_methods={"x"}, non_cache_methods={"x"}
        )
        assert should_cache("x", options) is False


@pytest.mark.unit
class TestCacheOnlyListed:
    """cache_by_default=False: only the allow list is cached."""

    def test_allowed_method_cached(self):
        options = ClassCacheOptions(cache_by_default=False, cache_methods={"x"})
        assert should_cache("x", options) is True

    def test_other_method_not_cached(self):
        options = ClassCacheOptions(cache_by_default=False, cache_methods={"x"})
        assert should_cache("y", options) is False

    def test_deny_list_ignored(self):
        """A name in the deny list stays cacheable if it is also allowed."""
        options = ClassCacheOptions(
            cache_by_default=False, cache_methods={"x"}, non_cache_methods={"x"}
        )
        assert should_cache("x", options) is True

    def test_empty_allow_list_caches_nothing(self):
        options = ClassCacheOptions(cache_by_default=False)
        assert should_cache("anything", options) is False


@pytest.mark.unit
class TestMethodListNormalization:
    """Method lists are stored lower-cased, matching is exact."""

    def test_lists_are_lowercased(self):
        options = ClassCacheOptions(cache_methods=["GetData", "getdata"], non_cache_methods="Refresh")

        assert options.cache_methods == frozenset({"getdata"})
        assert options.non_cache_methods == frozenset({"refresh"})

    def test_matching_is_exact(self):
        options = ClassCacheOptions(cache_by_default=False, cache_methods={"GetData"})

        assert should_cache("getdata", options) is True
        assert should_cache("GetData", options) is False
