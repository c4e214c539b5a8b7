"""The capability set a dialect adapter provides to the host compiler.

``DialectAdapter`` is a structural :class:`~typing.Protocol`: any object with
these members can be registered with
:class:`~vertiql.compile.registry.AdapterRegistry`; no base class is needed.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from vertiql.schema.catalog import DatabaseSchema
    from vertiql.schema.connection import ConnectionField, ConnectionParams, ConnectionSpec
    from vertiql.schema.types import LogicalType


@runtime_checkable
class DialectAdapter(Protocol):
    """Dialect-specific hooks the generic query compiler dispatches through."""

    @property
    def name(self) -> str:
        """Registry identity (e.g. ``'vertica'``)."""

    @property
    def details_fields(self) -> tuple[ConnectionField, ...]:
        """Ordered connection-field descriptors."""

    @property
    def set_timezone_sql(self) -> str:
        """SQL template with one ``%s`` placeholder for the zone name."""

    @property
    def current_time_query(self) -> str:
        """Query returning the server's wall-clock time as text."""

    @property
    def time_format(self) -> str:
        """Pattern describing :attr:`current_time_query` output."""

    def resolve_type(self, database_type: Any) -> LogicalType:
        """Map a native column type name to a logical type."""

    def truncate(self, granularity: Any, expr: Any) -> Any:
        """Truncate / extract ``expr`` at ``granularity``."""

    def date_offset(self, unit: Any, amount: Any) -> Any:
        """``now()`` shifted by ``amount`` whole units."""

    def string_length(self, expr: Any) -> Any:
        """Character length of ``expr``."""

    def build_spec(self, params: ConnectionParams | Mapping[str, Any]) -> ConnectionSpec:
        """Transport parameters for ``params``."""

    def describe_database(self, engine: Engine) -> DatabaseSchema:
        """Full table catalog of the database behind ``engine``."""
