"""vertiql – Vertica dialect adapter for dialect-agnostic SQL compilers.

Public API
----------
``VerticaAdapter``
    The facade a host compiler dispatches through: type mapping, temporal
    expressions, connection specs and catalog description.

``AdapterRegistry``
    Process-wide lookup of adapters by engine identity.

``register_vertica``
    Register :class:`VerticaAdapter` under ``"vertica"`` when the
    ``vertica_python`` client is installed.  Runs once on import.

Usage::

    import vertiql
    from sqlalchemy import column, DateTime

    adapter = vertiql.AdapterRegistry.get("vertica")
    expr = adapter.truncate("week", column("created_at", DateTime))
"""

from __future__ import annotations

import importlib.util
import logging
from dataclasses import dataclass

from vertiql.compile.base import DialectAdapter
from vertiql.compile.registry import AdapterRegistry
from vertiql.compile.temporal import TemporalCompiler
from vertiql.compile.vertica import VerticaAdapter, parse_db_time
from vertiql.config import AdapterConfig
from vertiql.errors import (
    ConfigurationError,
    ConnectionSpecError,
    InvalidOffsetError,
    SupplementaryFetchError,
    UnsupportedGranularityError,
    VertiQLError,
)
from vertiql.introspect.merger import CatalogMerger
from vertiql.introspect.views import FetchResult
from vertiql.schema.catalog import DatabaseSchema, TableDescriptor
from vertiql.schema.connection import ConnectionParams, ConnectionSpec, build_spec
from vertiql.schema.granularity import Granularity
from vertiql.schema.types import LogicalType, resolve_type

logger = logging.getLogger(__name__)

#: Import name of the native Vertica client library.
VERTICA_CLIENT_MODULE = "vertica_python"

__all__ = [
    # Adapter
    "VerticaAdapter",
    "DialectAdapter",
    "AdapterRegistry",
    "AdapterConfig",
    "TemporalCompiler",
    "CatalogMerger",
    "FetchResult",
    "register_vertica",
    "vertica_client_available",
    "parse_db_time",
    # Models
    "LogicalType",
    "Granularity",
    "TableDescriptor",
    "DatabaseSchema",
    "ConnectionParams",
    "ConnectionSpec",
    "build_spec",
    "resolve_type",
    # Errors
    "VertiQLError",
    "ConfigurationError",
    "UnsupportedGranularityError",
    "InvalidOffsetError",
    "ConnectionSpecError",
    "SupplementaryFetchError",
]


@dataclass(frozen=True)
class _ConfiguredAdapter:
    """Adapter factory bound to one config; equal configs give equal factories."""

    config: AdapterConfig

    def __call__(self) -> VerticaAdapter:
        return VerticaAdapter(self.config)


def vertica_client_available() -> bool:
    """Return ``True`` if the ``vertica_python`` client can be imported."""
    return importlib.util.find_spec(VERTICA_CLIENT_MODULE) is not None


def register_vertica(config: AdapterConfig | None = None) -> bool:
    """Register :class:`VerticaAdapter` if the native client is present.

    Args:
        config: Adapter settings; ``config.identity`` is the registry key.

    Returns:
        ``True`` if the adapter was registered, ``False`` if the client
        library is missing (registration is skipped).
    """
    config = config or AdapterConfig()
    if not vertica_client_available():
        logger.info(
            "%s not installed; Vertica adapter not registered", VERTICA_CLIENT_MODULE
        )
        return False
    if config == AdapterConfig():
        AdapterRegistry.register(config.identity, VerticaAdapter)
    else:
        AdapterRegistry.register(config.identity, _ConfiguredAdapter(config))
    return True


register_vertica()
