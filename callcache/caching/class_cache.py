"""
Class Cache

Caches the results of calls made on a class or module.

Call path:
    1. Lower-case the method name, identity = "<target>::<method>"
    2. Policy check (cache_by_default + method lists)
    3. Not cacheable -> call the target directly, store untouched
    4. Cacheable -> key -> store.get
         hit  -> return stored value, target not called
         miss -> call target, store.set, return result

Failures raised by the target propagate unchanged and are never stored.
StoreErrors propagate as well; there is no fallback to a direct call.

Concurrent misses on the same key may call the target more than once and
write the same key more than once.

Author: System Architect
Date: 2026-10-17
"""

import inspect
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from callcache.caching.key_generator import generate_key
from callcache.caching.observer import CallObserver
from callcache.caching.options import ClassCacheOptions
from callcache.caching.policy import should_cache
from callcache.core.config.constants import CALLABLE_SEPARATOR, LOG_KEY_LENGTH, Stage
from callcache.core.exceptions import ConfigurationError, StoreError
from callcache.core.interfaces import Store
from callcache.core.logging.logger import get_correlation_id, get_logger, log_stage
from callcache.plugins.adapter_registry import StoreAdapterRegistry, get_store_registry

logger = get_logger(__name__)


def target_name(target: Any) -> str:
    """Fully qualified name of a class or module."""
    if inspect.ismodule(target):
        return target.__name__
    return f"{target.__module__}.{target.__qualname__}"


class ClassCache:
    """
    Call-result cache for the callables of one class or module.

    Any public attribute that is not part of this class forwards to
    ``call``, so the cache can stand in for the target:

        cache = ClassCache(target_type=ReportService, store=MemoryStore())
        cache.monthly_total(2026, 9)          # == cache.call("monthly_total", [2026, 9])

    Static attributes of the target are reached through ``get_static``,
    ``set_static``, ``has_static`` and ``delete_static``; they are never cached.
    """

    def __init__(
        self,
        options: ClassCacheOptions | None = None,
        *,
        registry: StoreAdapterRegistry | None = None,
        **kwargs,
    ):
        """
        Args:
            options: Prepared options; keyword arguments are used when omitted
            registry: Adapter registry for string stores (default: global)
            **kwargs: ClassCacheOptions fields

        Raises:
            ConfigurationError: Missing or invalid target_type / store
            ResolutionError: store names an unknown adapter
        """
        if options is None:
            try:
                options = ClassCacheOptions(**kwargs)
            except ValidationError as e:
                raise ConfigurationError.from_exception(e, message="Invalid class cache options") from e
        elif kwargs:
            raise ConfigurationError(
                "Pass either options or keyword arguments, not both",
                details={"keywords": sorted(kwargs)},
            )

        if options.target_type is None:
            raise ConfigurationError("Missing option 'target_type'")
        if not (inspect.isclass(options.target_type) or inspect.ismodule(options.target_type)):
            raise ConfigurationError(
                "Option 'target_type' must be a class or a module",
                details={"target_type": type(options.target_type).__name__},
            )
        if options.store is None:
            raise ConfigurationError("Missing option 'store'")

        store = options.store
        if isinstance(store, str):
            store = (registry or get_store_registry()).resolve(store)
        if not isinstance(store, Store):
            raise ConfigurationError(
                "Option 'store' must implement Store",
                details={"store_type": type(store).__name__},
            )

        self._options = options.model_copy(update={"store": store})
        self._target_name = target_name(options.target_type)
        self._observer = CallObserver()

        log_stage(
            logger,
            Stage.CONFIGURATION,
            "Class cache configured",
            target=self._target_name,
            store=type(store).__name__,
            cache_by_default=options.cache_by_default,
        )

    @classmethod
    def from_settings(cls, target_type: Any, **overrides) -> "ClassCache":
        """Build a cache using CACHE_STORE_ADAPTER and CACHE_BY_DEFAULT."""
        return cls(ClassCacheOptions.from_settings(target_type, **overrides))

    # -------------------------------------------------------------------------
    # Configuration access
    # -------------------------------------------------------------------------

    @property
    def options(self) -> ClassCacheOptions:
        return self._options

    @property
    def store(self) -> Store:
        return self._options.store

    @property
    def target_type(self) -> Any:
        return self._options.target_type

    # -------------------------------------------------------------------------
    # Calls
    # -------------------------------------------------------------------------

    def call(
        self,
        method: str,
        args: Sequence[Any] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> Any:
        """
        Call a method of the target, through the store when cacheable.

        Args:
            method: Method name (case-insensitive)
            args: Positional arguments
            kwargs: Keyword arguments

        Returns:
            The stored or freshly computed result

        Raises:
            StoreError: The store failed
            ArgumentSerializationError: The arguments can't form a key
            AttributeError: The target has no such callable
            Exception: Anything the target raises, unchanged
        """
        method_name = method.lower()
        identity = f"{self._target_name}{CALLABLE_SEPARATOR}{method_name}"
        func = self._resolve_callable(method)

        if not should_cache(method_name, self._options):
            self._observer.record_bypass(identity)
            self._observer.record_invocation(identity, cached=False)
            return self._invoke(func, args, kwargs)

        key = generate_key(identity, args, kwargs)
        self._observer.record_key(identity, key)
        store = self._options.store

        try:
            value, found = store.get(key)
        except StoreError as e:
            self._report_store_error(Stage.STORE_LOOKUP, e, identity, key)
            raise

        if found:
            self._observer.record_hit(identity, key)
            return value

        self._observer.record_miss(identity, key)
        self._observer.record_invocation(identity, cached=True)
        result = self._invoke(func, args, kwargs)

        try:
            store.set(key, result)
        except StoreError as e:
            self._report_store_error(Stage.STORE_WRITE, e, identity, key)
            raise

        self._observer.record_write(identity, key)
        return result

    def _report_store_error(self, stage: Stage, error: StoreError, identity: str, key: str) -> None:
        error.with_context(callable=identity, cache_key=key[:LOG_KEY_LENGTH])
        if error.correlation_id is None:
            error.correlation_id = get_correlation_id()
        self._observer.record_store_error(stage, error)

    def generate_key(
        self,
        method: str,
        args: Sequence[Any] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> str:
        """Key under which ``call(method, args, kwargs)`` is stored."""
        return generate_key(f"{self._target_name}{CALLABLE_SEPARATOR}{method}", args, kwargs)

    @staticmethod
    def _invoke(func: Callable[..., Any], args: Sequence[Any], kwargs: Mapping[str, Any] | None) -> Any:
        if args or kwargs:
            return func(*args, **(kwargs or {}))
        return func()

    def _resolve_callable(self, method: str) -> Callable[..., Any]:
        """
        Find the target callable, by exact name first and then ignoring case.
        """
        target = self._options.target_type
        func = getattr(target, method, None)
        if callable(func):
            return func

        wanted = method.lower()
        matches = [
            name for name in dir(target)
            if name.lower() == wanted and callable(getattr(target, name, None))
        ]
        if len(matches) == 1:
            return getattr(target, matches[0])
        if len(matches) > 1:
            raise AttributeError(
                f"'{self._target_name}' has several callables matching '{method}': {sorted(matches)}"
            )
        raise AttributeError(f"'{self._target_name}' has no callable '{method}'")

    def __getattr__(self, name: str) -> Callable[..., Any]:
        # Only reached for names that are not attributes of ClassCache itself
        if name.startswith("_"):
            raise AttributeError(name)

        def forward(*args, **kwargs):
            return self.call(name, args, kwargs or None)

        forward.__name__ = name
        return forward

    # -------------------------------------------------------------------------
    # Static members (never cached)
    # -------------------------------------------------------------------------

    def get_static(self, name: str) -> Any:
        """Read a static attribute of the target."""
        return getattr(self._options.target_type, name)

    def set_static(self, name: str, value: Any) -> None:
        """Write a static attribute of the target."""
        setattr(self._options.target_type, name, value)

    def has_static(self, name: str) -> bool:
        """Check whether the target has a static attribute."""
        return hasattr(self._options.target_type, name)

    def delete_static(self, name: str) -> None:
        """Remove a static attribute from the target."""
        delattr(self._options.target_type, name)

    # -------------------------------------------------------------------------
    # Monitoring
    # -------------------------------------------------------------------------

    def stats(self) -> dict[str, Any]:
        """
        Returns:
            Call counters and hit rate, plus the target and store in use
        """
        return {
            **self._observer.get_stats(),
            "target": self._target_name,
            "store": type(self._options.store).__name__,
            "cache_by_default": self._options.cache_by_default,
        }

    def __repr__(self) -> str:
        return f"ClassCache(target='{self._target_name}', store={type(self._options.store).__name__})"
