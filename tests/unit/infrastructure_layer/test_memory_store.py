"""
Unit Tests for MemoryStore

Tests basic operations, TTL expiry, capacity eviction and housekeeping.
"""

from unittest.mock import patch

import pytest

from callcache.core.interfaces import Store
from callcache.infrastructure.cache import MemoryStore
from tests.test_fixtures import StoreTestFactory

MONOTONIC = "callcache.infrastructure.cache.memory_store.time.monotonic"


@pytest.mark.unit
class TestMemoryStoreBasicOperations:
    """Test get/set/has/delete/clear."""

    def test_implements_store(self, memory_store):
        assert isinstance(memory_store, Store)

    def test_set_and_get(self, memory_store):
        memory_store.set("key", {"rows": 3})

        assert memory_store.get("key") == ({"rows": 3}, True)

    def test_get_missing_key(self, memory_store):
        assert memory_store.get("missing") == (None, False)

    def test_none_is_a_stored_value(self, memory_store):
        memory_store.set("key", None)

        assert memory_store.get("key") == (None, True)
        assert memory_store.has("key") is True

    def test_overwrite(self, memory_store):
        memory_store.set("key", 1)
        memory_store.set("key", 2)

        assert memory_store.get("key") == (2, True)
        assert memory_store.get_size() == 1

    def test_delete(self, memory_store):
        memory_store.set("key", 1)

        assert memory_store.delete("key") is True
        assert memory_store.delete("key") is False
        assert memory_store.has("key") is False

    def test_clear(self):
        store = StoreTestFactory.memory_store_with_data({"a": 1, "b": 2})

        store.clear()

        assert store.get_size() == 0
        assert store.keys() == []

    def test_empty_store_is_truthy(self, memory_store):
        assert memory_store


@pytest.mark.unit
class TestMemoryStoreExpiry:
    """Test TTL handling."""

    def test_entry_expires(self):
        store = MemoryStore(ttl=10)
        with patch(MONOTONIC, return_value=100.0):
            store.set("key", 1)

        with patch(MONOTONIC, return_value=105.0):
            assert store.get("key") == (1, True)

        with patch(MONOTONIC, return_value=110.0):
            assert store.get("key") == (None, False)
            assert store.has("key") is False

    def test_no_ttl_never_expires(self, memory_store):
        with patch(MONOTONIC, return_value=0.0):
            memory_store.set("key", 1)

        with patch(MONOTONIC, return_value=10.0**9):
            assert memory_store.get("key") == (1, True)

    def test_clear_expired(self):
        store = MemoryStore(ttl=10)
        with patch(MONOTONIC, return_value=100.0):
            store.set("old", 1)
        with patch(MONOTONIC, return_value=105.0):
            store.set("new", 2)

        with patch(MONOTONIC, return_value=112.0):
            removed = store.clear_expired()

        assert removed == 1
        assert store.keys() == ["new"]


@pytest.mark.unit
class TestMemoryStoreCapacity:
    """Test max_items eviction."""

    def test_oldest_entry_evicted(self):
        store = MemoryStore(max_items=2)
        store.set("a", 1)
        store.set("b", 2)
        store.set("c", 3)

        assert store.keys() == ["b", "c"]

    def test_read_refreshes_entry(self):
        store = MemoryStore(max_items=2)
        store.set("a", 1)
        store.set("b", 2)
        store.get("a")
        store.set("c", 3)

        assert store.keys() == ["a", "c"]

    def test_optimize_preserves_order_and_values(self):
        store = StoreTestFactory.memory_store_with_data({"a": 1, "b": 2}, max_items=5)

        store.optimize()

        assert store.keys() == ["a", "b"]
        assert store.get("b") == (2, True)
