"""Vertica dialect adapter.

:class:`VerticaAdapter` is the single object the host registers for Vertica.
It holds no mutable state and performs no I/O when constructed; every
operation delegates to the type map, the temporal compiler, the connection
spec builder or the catalog merger.
"""

from __future__ import annotations

import datetime as dt
import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy import text

from vertiql.compile.temporal import TemporalCompiler
from vertiql.config import AdapterConfig
from vertiql.introspect.base import ColumnDescriptor, describe_table
from vertiql.introspect.merger import CatalogMerger
from vertiql.schema.catalog import DatabaseSchema, TableDescriptor
from vertiql.schema.connection import (
    DETAILS_FIELDS,
    ConnectionField,
    ConnectionParams,
    ConnectionSpec,
    build_spec,
)
from vertiql.schema.types import LogicalType, resolve_type

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

SET_TIMEZONE_SQL = "SET TIME ZONE TO %s;"
CURRENT_TIME_QUERY = "select to_char(CURRENT_TIMESTAMP, 'YYYY-MM-DD HH24:MI:SS TZ')"
#: Display pattern of CURRENT_TIME_QUERY output, and its strptime equivalent.
TIME_FORMAT = "yyyy-MM-dd HH:mm:ss z"
STRPTIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_UTC_NAMES = {"UTC", "GMT", "Z"}
_OFFSET_RE = re.compile(r"([+-])(\d{2})(?::?(\d{2}))?")


class VerticaAdapter:
    """Dialect adapter for Vertica.

    Args:
        config: Adapter settings; defaults to :class:`AdapterConfig`.
        merger: Catalog merger override, mainly for tests.
    """

    set_timezone_sql = SET_TIMEZONE_SQL
    current_time_query = CURRENT_TIME_QUERY
    time_format = TIME_FORMAT

    def __init__(
        self,
        config: AdapterConfig | None = None,
        merger: CatalogMerger | None = None,
    ) -> None:
        self._config = config or AdapterConfig()
        self._temporal = TemporalCompiler()
        self._merger = merger or CatalogMerger(self._config)

    @property
    def name(self) -> str:
        return self._config.identity

    @property
    def details_fields(self) -> tuple[ConnectionField, ...]:
        return DETAILS_FIELDS

    # ------------------------------------------------------------------
    # Type mapping
    # ------------------------------------------------------------------

    def resolve_type(self, database_type: Any) -> LogicalType:
        return resolve_type(database_type)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def truncate(self, granularity: Any, expr: Any) -> Any:
        return self._temporal.truncate(granularity, expr)

    def date_offset(self, unit: Any, amount: Any) -> Any:
        return self._temporal.date_offset(unit, amount)

    def string_length(self, expr: Any) -> Any:
        return self._temporal.string_length(expr)

    def unix_timestamp_to_timestamp(self, expr: Any, unit: str = "seconds") -> Any:
        return self._temporal.unix_timestamp_to_timestamp(expr, unit)

    # ------------------------------------------------------------------
    # Connections and catalog
    # ------------------------------------------------------------------

    def build_spec(self, params: ConnectionParams | Mapping[str, Any]) -> ConnectionSpec:
        return build_spec(params)

    def describe_database(self, engine: Engine) -> DatabaseSchema:
        return self._merger.describe_database(engine)

    def describe_table(self, engine: Engine, table: TableDescriptor) -> list[ColumnDescriptor]:
        return describe_table(engine, table)

    def timezone_statement(self, zone: str) -> str:
        """Render :attr:`set_timezone_sql` for ``zone`` (quoted literal)."""
        safe = zone.replace("'", "''")
        return self.set_timezone_sql % f"'{safe}'"

    def current_db_time(self, engine: Engine) -> dt.datetime:
        """Read the server's current time, for clock-drift checks."""
        with engine.connect() as conn:
            value = conn.execute(text(self.current_time_query)).scalar_one()
        return parse_db_time(value)


def parse_db_time(value: str) -> dt.datetime:
    """Parse ``CURRENT_TIME_QUERY`` output (``2024-01-07 10:15:00 UTC``).

    ``UTC``/``GMT`` and numeric offsets (``+05``, ``-03:30``) produce an
    aware datetime.  Other zone abbreviations are ambiguous and yield a naive
    value.

    Raises:
        ValueError: If the date/time part does not match the format.
    """
    parts = value.split()
    stamp = dt.datetime.strptime(" ".join(parts[:2]), STRPTIME_FORMAT)
    zone = parts[2] if len(parts) > 2 else ""
    if zone.upper() in _UTC_NAMES:
        return stamp.replace(tzinfo=dt.timezone.utc)
    match = _OFFSET_RE.fullmatch(zone)
    if match:
        sign = -1 if match.group(1) == "-" else 1
        offset = dt.timedelta(hours=int(match.group(2)), minutes=int(match.group(3) or 0))
        return stamp.replace(tzinfo=dt.timezone(sign * offset))
    if zone:
        logger.debug("Unrecognised time zone %r in server time; returning naive value", zone)
    return stamp
