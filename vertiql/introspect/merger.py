"""Merge the generic table catalog with Vertica's views."""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from vertiql.config import AdapterConfig
from vertiql.introspect.base import describe_base_tables
from vertiql.introspect.views import QueryExecutor, execute_query, fetch_views
from vertiql.schema.catalog import DatabaseSchema

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

#: ``engine -> DatabaseSchema``; the generic base-table introspector.
Introspector = Callable[["Engine"], DatabaseSchema]


class CatalogMerger:
    """Describes a Vertica database as base tables plus views.

    The base introspection is the primary path: its errors propagate.  The
    view fetch is a side path whose failure is logged and discarded.

    Args:
        config: Adapter configuration (view query, excluded schemas, and
            whether views are fetched at all).
        introspector: Base catalog collaborator.  Defaults to SQLAlchemy
            reflection honouring ``config.excluded_schemas``.
        executor: Raw-query collaborator used for the view fetch.
    """

    def __init__(
        self,
        config: AdapterConfig | None = None,
        introspector: Introspector | None = None,
        executor: QueryExecutor = execute_query,
    ) -> None:
        self._config = config or AdapterConfig()
        self._introspector = introspector or self._reflect
        self._executor = executor

    def describe_database(self, engine: Engine) -> DatabaseSchema:
        """Return the union of base tables and views for ``engine``.

        Raises:
            sqlalchemy.exc.SQLAlchemyError: If the base introspection fails.
        """
        base = self._introspector(engine)
        if not self._config.fetch_views:
            return base

        result = fetch_views(engine, executor=self._executor, query=self._config.views_query)
        if not result.ok:
            logger.error(
                "Failed to fetch views for this database: %s", result.error
            )
            return base

        merged = base.union(result.tables)
        logger.debug(
            "Described database: %d base tables, %d views, %d merged",
            len(base.tables), len(result.tables), len(merged.tables),
        )
        return merged

    def _reflect(self, engine: Engine) -> DatabaseSchema:
        return describe_base_tables(engine, excluded_schemas=self._config.excluded_schemas)
