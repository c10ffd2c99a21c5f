"""
Call Observer

Tracks cache decisions and logs them.

Why Separate Observer?
- ClassCache stays focused on the decision logic
- Easy to test cache logic without logging
- Centralizes all observability concerns

Metrics Tracked:
- hits, misses, bypassed (non-cacheable) calls, store writes
- target invocations and store errors
- hit rate over cacheable calls

Counters are guarded by a lock; one ClassCache may serve many threads.
"""

import threading
from datetime import datetime, timezone
from typing import Any

from callcache.core.config.constants import LOG_KEY_LENGTH, Stage
from callcache.core.exceptions import CallCacheError
from callcache.core.logging.logger import get_logger, log_stage

logger = get_logger(__name__)


class CallObserver:
    def __init__(self, logger_instance=None):
        self._logger = logger_instance or logger
        self._lock = threading.Lock()

        self._hits = 0
        self._misses = 0
        self._bypassed = 0
        self._writes = 0
        self._invocations = 0
        self._store_errors = 0

    def record_bypass(self, identity: str) -> None:
        with self._lock:
            self._bypassed += 1
        log_stage(self._logger, Stage.POLICY_CHECK, "Call not cacheable", level="debug", callable=identity)

    def record_key(self, identity: str, key: str) -> None:
        log_stage(
            self._logger, Stage.KEY_GENERATION, "Cache key generated", level="debug",
            callable=identity, cache_key=key[:LOG_KEY_LENGTH],
        )

    def record_hit(self, identity: str, key: str) -> None:
        with self._lock:
            self._hits += 1
        log_stage(
            self._logger, Stage.STORE_LOOKUP, "Cache hit", level="debug",
            callable=identity, cache_key=key[:LOG_KEY_LENGTH],
        )

    def record_miss(self, identity: str, key: str) -> None:
        with self._lock:
            self._misses += 1
        log_stage(
            self._logger, Stage.STORE_LOOKUP, "Cache miss", level="debug",
            callable=identity, cache_key=key[:LOG_KEY_LENGTH],
        )

    def record_invocation(self, identity: str, cached: bool) -> None:
        with self._lock:
            self._invocations += 1
        log_stage(
            self._logger, Stage.TARGET_INVOCATION, "Invoking target", level="debug",
            callable=identity, cached=cached,
        )

    def record_write(self, identity: str, key: str) -> None:
        with self._lock:
            self._writes += 1
        log_stage(
            self._logger, Stage.STORE_WRITE, "Cache set", level="debug",
            callable=identity, cache_key=key[:LOG_KEY_LENGTH],
        )

    def record_store_error(self, stage: Stage, error: Exception) -> None:
        with self._lock:
            self._store_errors += 1
        error_info = error.to_dict() if isinstance(error, CallCacheError) else {"message": str(error)}
        log_stage(self._logger, stage, "Store failure", level="error", **error_info)

    def get_stats(self) -> dict[str, Any]:
        """
        Returns:
            Dict with counters and hit rate over cacheable calls
        """
        with self._lock:
            hits, misses, bypassed = self._hits, self._misses, self._bypassed
            writes, invocations, store_errors = self._writes, self._invocations, self._store_errors

        cacheable = hits + misses
        return {
            "hits": hits,
            "misses": misses,
            "bypassed": bypassed,
            "writes": writes,
            "invocations": invocations,
            "store_errors": store_errors,
            "total_calls": cacheable + bypassed,
            "hit_rate": round(hits / cacheable, 3) if cacheable > 0 else 0.0,
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }
