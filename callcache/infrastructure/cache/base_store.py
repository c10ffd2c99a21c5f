"""
Evented Store Base

Common base for the bundled Store implementations. Every public operation
is wrapped in three events that storage plugins can listen to:

    <operation>.pre        params may be rewritten, or the call short-circuited
    <operation>.post       result may be rewritten
    <operation>.exception  a StoreError occurred; listeners may suppress it

Architecture:
    BaseStore (public has/get/set/delete/clear)
        ├── _run() (event orchestration)
        │   └── _has/_get/_set/_delete/_clear (backend hooks)
        └── listeners (registered directly or by StoragePlugin.attach)

Author: System Architect
Date: 2026-10-17
"""

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from callcache.core.config.constants import LOG_KEY_LENGTH, Stage
from callcache.core.exceptions import StoreError
from callcache.core.interfaces import StoragePlugin
from callcache.core.logging.logger import get_logger, log_stage

logger = get_logger(__name__)

Listener = Callable[["StoreEvent"], None]

# Result returned for an operation whose StoreError a listener suppressed
_NEUTRAL_RESULTS: dict[str, Any] = {
    "has": False,
    "get": (None, False),
    "set": None,
    "delete": False,
    "clear": None,
}


@dataclass
class StoreEvent:
    """
    Event passed to store listeners.

    Attributes:
        name: Event name, e.g. "set.post"
        store: Store emitting the event
        params: Operation arguments (mutable in ``.pre`` listeners)
        result: Operation result (mutable in ``.post`` / ``.exception`` listeners)
        exception: The StoreError being handled (``.exception`` only)
        throw_exception: Re-raise the exception after listeners ran
        propagation_stopped: Skip remaining listeners; on ``.pre`` also skip the backend
    """

    name: str
    store: "BaseStore"
    params: dict[str, Any] = field(default_factory=dict)
    result: Any = None
    exception: StoreError | None = None
    throw_exception: bool = True
    propagation_stopped: bool = False

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


class BaseStore:
    """
    Store base class with an event bus for plugins.

    Subclasses implement the ``_has``/``_get``/``_set``/``_delete``/``_clear``
    hooks and raise StoreError (or a subclass) on backend failure.
    """

    adapter_name = "base"

    def __init__(self):
        self._listeners: dict[str, list[tuple[int, Listener]]] = defaultdict(list)
        self._plugins: list[StoragePlugin] = []

    # -------------------------------------------------------------------------
    # Store operations
    # -------------------------------------------------------------------------

    def has(self, key: str) -> bool:
        return self._run("has", {"key": key}, self._has)

    def get(self, key: str) -> tuple[Any, bool]:
        return self._run("get", {"key": key}, self._get)

    def set(self, key: str, value: Any) -> None:
        self._run("set", {"key": key, "value": value}, self._set)

    def delete(self, key: str) -> bool:
        return self._run("delete", {"key": key}, self._delete)

    def clear(self) -> None:
        self._run("clear", {}, self._clear)

    # -------------------------------------------------------------------------
    # Backend hooks
    # -------------------------------------------------------------------------

    def _has(self, key: str) -> bool:
        raise NotImplementedError

    def _get(self, key: str) -> tuple[Any, bool]:
        raise NotImplementedError

    def _set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def _delete(self, key: str) -> bool:
        raise NotImplementedError

    def _clear(self) -> None:
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def on(self, event_name: str, listener: Listener, priority: int = 1) -> Listener:
        """
        Register a listener. Higher priority runs first; equal priorities
        run in registration order.
        """
        self._listeners[event_name].append((priority, listener))
        return listener

    def off(self, event_name: str, listener: Listener) -> bool:
        """Remove a listener. Returns False if it was not registered."""
        entries = self._listeners.get(event_name, [])
        for index, (_, registered) in enumerate(entries):
            if registered == listener:
                del entries[index]
                return True
        return False

    def trigger(self, event: StoreEvent) -> StoreEvent:
        entries = sorted(
            enumerate(self._listeners.get(event.name, [])),
            key=lambda item: (-item[1][0], item[0]),
        )
        for _, (_, listener) in entries:
            listener(event)
            if event.propagation_stopped:
                break
        return event

    def _run(self, operation: str, params: dict[str, Any], backend: Callable[..., Any]) -> Any:
        pre = self.trigger(StoreEvent(f"{operation}.pre", self, params))
        if pre.propagation_stopped:
            return pre.result

        try:
            result = backend(**pre.params)
        except StoreError as exc:
            event = self.trigger(
                StoreEvent(
                    f"{operation}.exception",
                    self,
                    pre.params,
                    result=_NEUTRAL_RESULTS.get(operation),
                    exception=exc,
                )
            )
            if event.throw_exception:
                raise
            log_stage(
                logger,
                Stage.STORE_EVENT,
                "Store error suppressed by listener",
                level="warning",
                adapter=self.adapter_name,
                operation=operation,
                cache_key=str(pre.params.get("key", ""))[:LOG_KEY_LENGTH],
                error=str(exc),
            )
            return event.result

        post = self.trigger(StoreEvent(f"{operation}.post", self, pre.params, result=result))
        return post.result

    # -------------------------------------------------------------------------
    # Plugins
    # -------------------------------------------------------------------------

    def add_plugin(self, plugin: StoragePlugin, priority: int = 1) -> "BaseStore":
        """Attach a storage plugin. Adding the same plugin twice is a no-op."""
        if plugin in self._plugins:
            return self
        plugin.attach(self, priority)
        self._plugins.append(plugin)
        log_stage(
            logger,
            Stage.STORE_EVENT,
            "Storage plugin attached",
            level="debug",
            adapter=self.adapter_name,
            plugin=type(plugin).__name__,
        )
        return self

    def remove_plugin(self, plugin: StoragePlugin) -> "BaseStore":
        if plugin in self._plugins:
            plugin.detach(self)
            self._plugins.remove(plugin)
        return self

    def has_plugin(self, plugin: StoragePlugin) -> bool:
        return plugin in self._plugins

    @property
    def plugins(self) -> list[StoragePlugin]:
        return list(self._plugins)
