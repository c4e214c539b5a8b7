"""Process-wide dialect adapter registry.

Adapters are registered once at startup (see :func:`vertiql.register_vertica`)
and looked up by identity for every query and introspection call::

    from vertiql.compile.registry import AdapterRegistry

    adapter = AdapterRegistry.get("vertica")
    expr = adapter.truncate("month", column)

Registration takes a lock; lookups after startup are read-only.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import ClassVar

from vertiql.compile.base import DialectAdapter
from vertiql.errors import ConfigurationError

logger = logging.getLogger(__name__)

#: Zero-argument factory returning an adapter instance.
AdapterFactory = Callable[[], DialectAdapter]


class AdapterRegistry:
    """Registry mapping engine identities to :class:`DialectAdapter` instances.

    A factory is registered once; its adapter is built on first lookup and
    reused, since adapters are stateless.

    Example::

        AdapterRegistry.register("vertica", VerticaAdapter)
        adapter = AdapterRegistry.get("vertica")
    """

    _factories: ClassVar[dict[str, AdapterFactory]] = {}
    _instances: ClassVar[dict[str, DialectAdapter]] = {}
    _lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def register(cls, name: str, factory: AdapterFactory) -> None:
        """Register ``factory`` under ``name``.

        Re-registering an equal factory is a no-op; a different factory
        replaces the old one and drops its cached adapter.

        Args:
            name: Engine identity (e.g. ``"vertica"``).
            factory: Callable returning an adapter; usually the class itself.
        """
        with cls._lock:
            if cls._factories.get(name) == factory:
                return
            cls._factories[name] = factory
            cls._instances.pop(name, None)
        logger.info("Registered dialect adapter '%s'", name)

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove ``name`` from the registry, if present."""
        with cls._lock:
            cls._factories.pop(name, None)
            cls._instances.pop(name, None)

    @classmethod
    def get(cls, name: str) -> DialectAdapter:
        """Return the adapter registered for ``name``.

        Raises:
            ConfigurationError: If no adapter is registered for ``name``.
        """
        adapter = cls._instances.get(name)
        if adapter is not None:
            return adapter
        with cls._lock:
            factory = cls._factories.get(name)
            if factory is None:
                registered = sorted(cls._factories)
                raise ConfigurationError(
                    f"No dialect adapter registered for '{name}'. "
                    f"Registered adapters: {registered}.",
                    setting=name,
                )
            adapter = cls._instances.get(name)
            if adapter is None:
                adapter = factory()
                cls._instances[name] = adapter
        return adapter

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._factories

    @classmethod
    def registered_names(cls) -> list[str]:
        """Return the sorted list of registered identities."""
        return sorted(cls._factories)
