"""Best-effort fetch of views listed in Vertica's ``V_CATALOG.VIEWS``.

SQLAlchemy's inspector only reports base tables.  The views are fetched
with a direct system-catalog query whose outcome is returned as a
:class:`FetchResult` value instead of being raised: the system view may be
missing or unreadable for the connecting user, and that must never cost the
caller its base catalog.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from vertiql.config import VIEWS_QUERY
from vertiql.errors import SupplementaryFetchError
from vertiql.schema.catalog import TableDescriptor

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

#: ``(engine, sql) -> rows``; each row maps column names to values.
QueryExecutor = Callable[["Engine", str], Iterable[Mapping[str, Any]]]


def execute_query(engine: Engine, sql: str) -> list[dict[str, Any]]:
    """Run ``sql`` on a fresh connection and return the rows as dicts."""
    with engine.connect() as conn:
        return [dict(row) for row in conn.execute(text(sql)).mappings()]


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a supplementary catalog fetch.

    Exactly one of ``tables`` (on success) or ``error`` is meaningful.
    """

    tables: frozenset[TableDescriptor] = field(default_factory=frozenset)
    error: SupplementaryFetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, tables: Iterable[TableDescriptor]) -> "FetchResult":
        return cls(tables=frozenset(tables))

    @classmethod
    def failure(cls, error: SupplementaryFetchError) -> "FetchResult":
        return cls(error=error)


def fetch_views(
    engine: Engine,
    *,
    executor: QueryExecutor = execute_query,
    query: str = VIEWS_QUERY,
) -> FetchResult:
    """Fetch ``(schema, name)`` rows for Vertica views.

    Args:
        engine: Engine to query.
        executor: Raw-query collaborator; rows need ``schema`` and ``name``
            keys.
        query: Catalog query to run.

    Returns:
        A successful :class:`FetchResult`, or a failed one carrying a
        :class:`SupplementaryFetchError` when the driver or its
        connection failed, or when the rows were malformed.
    """
    try:
        rows = executor(engine, query)
        tables = [TableDescriptor(str(row["schema"]), str(row["name"])) for row in rows]
    except (SQLAlchemyError, OSError, LookupError, TypeError) as exc:
        return FetchResult.failure(SupplementaryFetchError(str(exc), query=query))
    return FetchResult.success(tables)
