"""
Plugin Registry

Resolves human-friendly plugin names to instances.

Architecture:
    aliases   (every accepted spelling -> canonical name)
    factories (canonical name -> factory callable)
    instances (canonical name -> shared instance, lock-protected)

Alias tables list each accepted spelling explicitly (snake_case, lowercase,
camelCase, PascalCase) instead of normalizing names programmatically, so two
canonical names can never collide under a normalization rule.

Resolution:
    1. Alias lookup, else the name itself must be a canonical name
    2. Shared and already built -> reuse
    3. Otherwise call the factory
    4. Check the instance against ``instance_of``
    5. Shared -> publish for reuse

Author: System Architect
Date: 2026-10-17
"""

import threading
from collections.abc import Callable
from typing import Any, ClassVar

from callcache.core.config.constants import Stage
from callcache.core.exceptions import ConfigurationError, ResolutionError
from callcache.core.logging.logger import get_logger, log_stage

logger = get_logger(__name__)

Factory = Callable[..., Any]


class PluginRegistry:
    """
    Name -> instance registry with alias normalization and a capability check.

    Subclasses declare their static tables as class attributes; constructor
    arguments extend or override them per registry instance.

    Usage:
        registry = PluginRegistry(
            aliases={"Memory": "memory"},
            factories={"memory": MemoryStore},
            instance_of=Store,
        )
        store = registry.resolve("Memory")
    """

    aliases: ClassVar[dict[str, str]] = {}
    factories: ClassVar[dict[str, Factory]] = {}
    shared_by_default: ClassVar[bool] = True
    instance_of: ClassVar[type | None] = None
    plugin_kind: ClassVar[str] = "plugin"

    def __init__(
        self,
        aliases: dict[str, str] | None = None,
        factories: dict[str, Factory] | None = None,
        shared_by_default: bool | None = None,
        instance_of: type | None = None,
        shared: dict[str, bool] | None = None,
    ):
        """
        Args:
            aliases: Extra alias -> canonical name entries
            factories: Extra canonical name -> factory entries
            shared_by_default: Override the class-level sharing default
            instance_of: Override the class-level capability contract
            shared: Per canonical name sharing overrides
        """
        self._aliases: dict[str, str] = {**type(self).aliases, **(aliases or {})}
        self._factories: dict[str, Factory] = {**type(self).factories, **(factories or {})}
        self._shared_by_default = (
            type(self).shared_by_default if shared_by_default is None else shared_by_default
        )
        self._instance_of = instance_of if instance_of is not None else type(self).instance_of
        self._shared: dict[str, bool] = dict(shared or {})
        self._instances: dict[str, Any] = {}
        self._lock = threading.RLock()

        logger.debug(
            f"{type(self).__name__} initialized",
            stage=Stage.PLUGIN_RESOLUTION.value,
            factories=len(self._factories),
            aliases=len(self._aliases),
            shared_by_default=self._shared_by_default,
        )

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def canonical_name(self, name: str) -> str:
        """
        Map a requested name to its canonical name.

        Aliases may point at other aliases; chains are followed until a
        name without an alias entry is reached.

        Raises:
            ResolutionError: If the name resolves to no registered factory
        """
        canonical = name
        seen = {canonical}
        while canonical in self._aliases:
            canonical = self._aliases[canonical]
            if canonical in seen:
                raise ResolutionError(
                    f"Circular alias detected while resolving {self.plugin_kind} '{name}'",
                    details={"name": name, "alias_chain": sorted(seen)},
                )
            seen.add(canonical)

        if canonical not in self._factories:
            raise ResolutionError(
                f"Unable to resolve {self.plugin_kind} '{name}'",
                details={"name": name, "available": self.available()},
            ).with_suggestion(f"Register a factory or an alias for '{name}'")
        return canonical

    def has(self, name: str) -> bool:
        """Check whether a name resolves to a registered factory."""
        try:
            self.canonical_name(name)
        except ResolutionError:
            return False
        return True

    def resolve(self, name: str) -> Any:
        """
        Get the instance registered under a name.

        Raises:
            ResolutionError: Unknown name
            ConfigurationError: The factory produced an instance that does
                not satisfy ``instance_of``
        """
        canonical = self.canonical_name(name)

        if not self.is_shared(canonical):
            return self._create(canonical, name, {})

        with self._lock:
            if canonical not in self._instances:
                self._instances[canonical] = self._create(canonical, name, {})
            return self._instances[canonical]

    def build(self, name: str, **options) -> Any:
        """
        Build a fresh instance with options. Never shared.

        Raises:
            ResolutionError: Unknown name
            ConfigurationError: Instance fails the capability check
        """
        canonical = self.canonical_name(name)
        return self._create(canonical, name, options)

    def _create(self, canonical: str, requested: str, options: dict[str, Any]) -> Any:
        factory = self._factories[canonical]
        instance = factory(**options)
        self._validate(instance, requested)

        log_stage(
            logger,
            Stage.PLUGIN_RESOLUTION,
            f"Created {self.plugin_kind}",
            level="debug",
            requested=requested,
            canonical=canonical,
            instance_type=type(instance).__name__,
        )
        return instance

    def _validate(self, instance: Any, requested: str) -> None:
        if self._instance_of is None or isinstance(instance, self._instance_of):
            return

        raise ConfigurationError(
            f"{self.plugin_kind.capitalize()} of type {type(instance).__name__} is invalid; "
            f"must implement {self._instance_of.__name__}",
            details={"name": requested, "instance_type": type(instance).__name__},
        )

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def set_alias(self, alias: str, target: str) -> None:
        """Register an alias for a canonical name (or for another alias)."""
        with self._lock:
            self._aliases[alias] = target

    def set_factory(self, name: str, factory: Factory) -> None:
        """
        Register or replace a factory.

        A shared instance built by a previous factory for the same name is
        discarded so the next resolve uses the new factory.
        """
        with self._lock:
            self._factories[name] = factory
            self._instances.pop(name, None)

        logger.info(f"Registered {self.plugin_kind}: {name}", stage=Stage.PLUGIN_RESOLUTION.value)

    def set_shared(self, name: str, flag: bool) -> None:
        """Override sharing for one canonical name."""
        with self._lock:
            self._shared[name] = flag

    def is_shared(self, canonical: str) -> bool:
        return self._shared.get(canonical, self._shared_by_default)

    @property
    def shares_by_default(self) -> bool:
        return self._shared_by_default

    def available(self) -> list[str]:
        """Get the canonical names of all registered factories."""
        return sorted(self._factories)

    def aliases_for(self, canonical: str) -> list[str]:
        """Get every alias that points directly at a canonical name."""
        return sorted(alias for alias, target in self._aliases.items() if target == canonical)
