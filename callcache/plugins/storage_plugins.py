"""
Storage Plugins

Behaviour add-ons attached to a BaseStore through its event bus.

Plugins:
    ClearExpiredByFactor  purge expired entries after some writes
    OptimizeByFactor      compact the store after some deletes
    ExceptionHandler      observe and optionally suppress StoreErrors
    Serializer            encode values on write, decode on read

Options are validated with pydantic at construction; invalid options raise
ConfigurationError.

Author: System Architect
Date: 2026-10-17
"""

import random
from collections.abc import Callable
from typing import Any, ClassVar

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from callcache.core.config.constants import Stage
from callcache.core.exceptions import ConfigurationError, StoreError
from callcache.core.logging.logger import get_logger, log_stage
from callcache.infrastructure.cache.base_store import BaseStore, StoreEvent

logger = get_logger(__name__)

_STORE_OPERATIONS = ("has", "get", "set", "delete", "clear")


class PluginOptions(BaseModel):
    """Base class for plugin options."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)


class AbstractPlugin:
    """
    Common attach/detach bookkeeping.

    Subclasses declare ``options_class`` and implement ``listeners()``,
    returning (event name, callback) pairs.
    """

    options_class: ClassVar[type[PluginOptions]] = PluginOptions

    def __init__(self, **options):
        try:
            self.options = self.options_class(**options)
        except ValidationError as e:
            raise ConfigurationError.from_exception(
                e, message=f"Invalid options for {type(self).__name__}", plugin=type(self).__name__
            ) from e
        # id(store) -> listeners registered on that store
        self._handles: dict[int, list[tuple[str, Callable[[StoreEvent], None]]]] = {}

    def listeners(self) -> list[tuple[str, Callable[[StoreEvent], None]]]:
        raise NotImplementedError

    def attach(self, store: BaseStore, priority: int = 1) -> None:
        handles = [(name, store.on(name, callback, priority)) for name, callback in self.listeners()]
        self._handles[id(store)] = handles

    def detach(self, store: BaseStore) -> None:
        for name, callback in self._handles.pop(id(store), []):
            store.off(name, callback)


class ClearExpiredByFactorOptions(PluginOptions):
    clearing_factor: int = Field(default=0, ge=0, description="1/N chance per write; 0 disables")


class ClearExpiredByFactor(AbstractPlugin):
    """
    After a successful write, with probability ``1/clearing_factor``, ask
    the store to purge expired entries. Stores without ``clear_expired()``
    are left alone.
    """

    options_class = ClearExpiredByFactorOptions

    def listeners(self):
        return [("set.post", self.clear_expired_by_factor)]

    def clear_expired_by_factor(self, event: StoreEvent) -> None:
        factor = self.options.clearing_factor
        clear_expired = getattr(event.store, "clear_expired", None)
        if factor and callable(clear_expired) and random.randint(1, factor) == 1:
            removed = clear_expired()
            log_stage(logger, Stage.STORE_EVENT, "Expired entries cleared", level="debug", removed=removed)


class OptimizeByFactorOptions(PluginOptions):
    optimizing_factor: int = Field(default=0, ge=0, description="1/N chance per delete; 0 disables")


class OptimizeByFactor(AbstractPlugin):
    """
    After a successful delete, with probability ``1/optimizing_factor``,
    ask the store to optimize itself.
    """

    options_class = OptimizeByFactorOptions

    def listeners(self):
        return [("delete.post", self.optimize_by_factor)]

    def optimize_by_factor(self, event: StoreEvent) -> None:
        factor = self.options.optimizing_factor
        optimize = getattr(event.store, "optimize", None)
        if factor and callable(optimize) and random.randint(1, factor) == 1:
            optimize()
            log_stage(logger, Stage.STORE_EVENT, "Store optimized", level="debug")


class ExceptionHandlerOptions(PluginOptions):
    exception_callback: Callable[[StoreError], Any] | None = None
    throw_exceptions: bool = True


class ExceptionHandler(AbstractPlugin):
    """
    Hand every StoreError to ``exception_callback``. With
    ``throw_exceptions=False`` the error is suppressed and the operation
    returns its neutral result, e.g. a miss for ``get``.
    """

    options_class = ExceptionHandlerOptions

    def listeners(self):
        return [(f"{operation}.exception", self.on_exception) for operation in _STORE_OPERATIONS]

    def on_exception(self, event: StoreEvent) -> None:
        callback = self.options.exception_callback
        if callback is not None:
            callback(event.exception)
        event.throw_exception = self.options.throw_exceptions


def _orjson_dumps(value: Any) -> str:
    return orjson.dumps(value).decode("utf-8")


class SerializerOptions(PluginOptions):
    dumps: Callable[[Any], Any] = _orjson_dumps
    loads: Callable[[Any], Any] = orjson.loads


class Serializer(AbstractPlugin):
    """
    Encode values before they reach the store and decode them on read.

    Defaults to orjson; any dumps/loads pair can be supplied.
    """

    options_class = SerializerOptions

    def listeners(self):
        return [("set.pre", self.on_write), ("get.post", self.on_read)]

    def on_write(self, event: StoreEvent) -> None:
        value = event.params["value"]
        try:
            event.params["value"] = self.options.dumps(value)
        except (TypeError, ValueError) as e:
            raise StoreError(
                f"Value cannot be serialized: {e}",
                details={"value_type": type(value).__name__},
            ) from e

    def on_read(self, event: StoreEvent) -> None:
        value, found = event.result
        if not found:
            return
        try:
            event.result = (self.options.loads(value), True)
        except (TypeError, ValueError) as e:
            raise StoreError(f"Stored value cannot be deserialized: {e}") from e
