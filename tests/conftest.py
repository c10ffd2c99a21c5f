"""
Pytest Configuration and Shared Test Fixtures

This module provides pytest configuration and reusable fixtures for all tests.
All fixtures defined here are automatically available to all test files.
"""

import os
import sys
from unittest.mock import MagicMock

import pytest

# Add project root to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


# ============================================================================
# Sample Targets
# ============================================================================


class ReportService:
    """Class whose static methods are cached in tests. Counts real calls."""

    calls: list[tuple[str, tuple]] = []
    region = "eu-west"

    @staticmethod
    def monthly_total(year, month):
        ReportService.calls.append(("monthly_total", (year, month)))
        return {"year": year, "month": month, "total": year * 100 + month}

    @staticmethod
    def refresh():
        ReportService.calls.append(("refresh", ()))
        return len(ReportService.calls)

    @staticmethod
    def Summary(label="all"):
        ReportService.calls.append(("Summary", (label,)))
        return f"summary:{label}"

    @classmethod
    def failing(cls, reason):
        cls.calls.append(("failing", (reason,)))
        raise RuntimeError(reason)


@pytest.fixture
def report_service():
    """ReportService with its call log and static attributes reset."""
    ReportService.calls = []
    ReportService.region = "eu-west"
    yield ReportService
    ReportService.calls = []
    ReportService.region = "eu-west"
    for name in ("added_flag",):
        if name in ReportService.__dict__:
            delattr(ReportService, name)


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def memory_store():
    """Fresh, unbounded MemoryStore without TTL."""
    from callcache.infrastructure.cache import MemoryStore

    return MemoryStore()


@pytest.fixture
def mock_store():
    """
    Mock Store for isolated testing.

    Reports a miss on every get.
    """
    from callcache.core.interfaces import Store

    store = MagicMock(spec=Store)
    store.get = MagicMock(return_value=(None, False))
    store.set = MagicMock(return_value=None)
    store.has = MagicMock(return_value=False)
    return store


@pytest.fixture
def mock_redis_client():
    """Mock redis.Redis client."""
    import redis

    client = MagicMock(spec=redis.Redis)
    client.get.return_value = None
    client.exists.return_value = 0
    client.delete.return_value = 0
    client.scan_iter.return_value = iter([])
    client.ping.return_value = True
    return client


# ============================================================================
# Global State Isolation
# ============================================================================


@pytest.fixture(autouse=True)
def reset_registries():
    """Drop global registries and settings so tests never share instances."""
    from callcache.core.config.settings import reload_settings
    from callcache.plugins import reset_storage_plugin_registry, reset_store_registry

    reload_settings()
    reset_store_registry()
    reset_storage_plugin_registry()
    yield
    reset_store_registry()
    reset_storage_plugin_registry()
