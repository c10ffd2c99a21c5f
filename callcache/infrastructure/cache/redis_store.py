"""
Redis Store

Store implementation backed by a synchronous redis-py client, for caches
shared across processes and hosts.

Architectural Decision: thin adapter, no retries
- Every redis error is converted to StoreError / StoreConnectionError
- Expiry is delegated to Redis (SET ... EX)
- Values are pickled so a hit returns the same type the call produced
  (datetimes, tuples, sets, dataclasses and models included); values that
  cannot be pickled fail the write with StoreError
- Only point this store at a Redis that holds trusted data: unpickling
  runs code chosen by whoever wrote the value

Author: System Architect
Date: 2026-10-17
"""

import pickle
from typing import Any

import redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError

from callcache.core.config.constants import LOG_KEY_LENGTH
from callcache.core.config.settings import get_settings
from callcache.core.exceptions import StoreConnectionError, StoreError
from callcache.core.logging.logger import get_logger
from callcache.infrastructure.cache.base_store import BaseStore

logger = get_logger(__name__)

# Keys deleted per DEL round-trip in clear()
_CLEAR_BATCH_SIZE = 500


class RedisStore(BaseStore):
    """
    Redis-backed store.

    All keys are namespaced as ``<prefix>:<key>`` so ``clear()`` only removes
    entries written by this store.

    Usage:
        store = RedisStore.from_settings()
        store.set("key", [1, 2, 3])
        value, found = store.get("key")
    """

    adapter_name = "redis"

    def __init__(
        self,
        client: redis.Redis | None = None,
        *,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        password: str | None = None,
        socket_timeout: int = 5,
        prefix: str = "callcache",
        ttl: int | None = None,
    ):
        """
        Args:
            client: Pre-built redis client (host/port/db/password ignored when given)
            prefix: Namespace prepended to every key
            ttl: Expiry in seconds for written keys (None = no expiry)
        """
        super().__init__()
        self._client = client or redis.Redis(
            host=host,
            port=port,
            db=db,
            password=password,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        self._prefix = prefix
        self._ttl = ttl

        logger.info("Redis store initialized", host=host, port=port, db=db, prefix=prefix)

    @classmethod
    def from_settings(cls, **overrides) -> "RedisStore":
        """Build a store from REDIS_* and CACHE_DEFAULT_TTL settings."""
        settings = get_settings()
        options = {
            "host": settings.redis.REDIS_HOST,
            "port": settings.redis.REDIS_PORT,
            "db": settings.redis.REDIS_DB,
            "password": settings.redis.REDIS_PASSWORD,
            "socket_timeout": settings.redis.REDIS_SOCKET_TIMEOUT,
            "prefix": settings.redis.REDIS_KEY_PREFIX,
            "ttl": settings.cache.CACHE_DEFAULT_TTL,
        }
        options.update(overrides)
        return cls(**options)

    def _namespaced(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    def _wrap(self, exc: RedisError, operation: str, key: str | None = None) -> StoreError:
        details = {"operation": operation, "adapter": self.adapter_name}
        if key is not None:
            details["key"] = key[:LOG_KEY_LENGTH]
        if isinstance(exc, (ConnectionError, TimeoutError)):
            error_cls = StoreConnectionError
        else:
            error_cls = StoreError
        logger.error(f"Redis {operation} failed", error=str(exc), **details)
        return error_cls.from_exception(exc, message=f"Redis {operation.upper()} failed: {exc}", **details)

    def _has(self, key: str) -> bool:
        try:
            return self._client.exists(self._namespaced(key)) > 0
        except RedisError as e:
            raise self._wrap(e, "exists", key) from e

    def _get(self, key: str) -> tuple[Any, bool]:
        try:
            raw = self._client.get(self._namespaced(key))
        except RedisError as e:
            raise self._wrap(e, "get", key) from e

        if raw is None:
            return None, False
        try:
            return pickle.loads(raw), True
        except (pickle.UnpicklingError, EOFError, ValueError, TypeError, AttributeError, ImportError) as e:
            raise StoreError(
                f"Invalid cached data for key '{key}'",
                details={"key": key[:LOG_KEY_LENGTH], "adapter": self.adapter_name},
            ) from e

    def _set(self, key: str, value: Any) -> None:
        try:
            payload = pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise StoreError(
                f"Value for key '{key}' cannot be encoded: {e}",
                details={"key": key[:LOG_KEY_LENGTH], "value_type": type(value).__name__},
            ) from e

        try:
            self._client.set(self._namespaced(key), payload, ex=self._ttl)
        except RedisError as e:
            raise self._wrap(e, "set", key) from e

    def _delete(self, key: str) -> bool:
        try:
            return self._client.delete(self._namespaced(key)) > 0
        except RedisError as e:
            raise self._wrap(e, "delete", key) from e

    def _clear(self) -> None:
        try:
            batch = []
            for redis_key in self._client.scan_iter(match=f"{self._prefix}:*"):
                batch.append(redis_key)
                if len(batch) >= _CLEAR_BATCH_SIZE:
                    self._client.delete(*batch)
                    batch = []
            if batch:
                self._client.delete(*batch)
        except RedisError as e:
            raise self._wrap(e, "clear") from e

    def ping(self) -> bool:
        """Check whether Redis answers. Never raises."""
        try:
            return bool(self._client.ping())
        except RedisError:
            return False

    def health_check(self) -> dict[str, Any]:
        """
        Perform health check.

        Returns:
            Dict with health status
        """
        healthy = self.ping()
        return {
            "status": "healthy" if healthy else "unhealthy",
            "adapter": self.adapter_name,
            "prefix": self._prefix,
        }
