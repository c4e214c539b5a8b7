"""Unit tests for catalog introspection and the view merge."""

from __future__ import annotations

import logging

import pytest
from sqlalchemy.exc import OperationalError, ProgrammingError

from vertiql.config import AdapterConfig
from vertiql.introspect.base import describe_base_tables, describe_table
from vertiql.introspect.merger import CatalogMerger
from vertiql.introspect.views import VIEWS_QUERY, FetchResult, fetch_views
from vertiql.schema.catalog import DatabaseSchema, TableDescriptor
from vertiql.schema.types import LogicalType
from tests.fixtures import make_engine

ORDERS = TableDescriptor("public", "orders")
ORDERS_MV = TableDescriptor("public", "orders_mv")


def _base(*tables: TableDescriptor):
    return lambda engine: DatabaseSchema.of(tables)


def _rows(*rows: dict):
    return lambda engine, sql: list(rows)


def _failing(exc: Exception):
    def executor(engine, sql):
        raise exc

    return executor


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


def test_union_collapses_duplicates():
    schema = DatabaseSchema.of([ORDERS])
    merged = schema.union([ORDERS, TableDescriptor("public", "orders")])
    assert merged.tables == frozenset({ORDERS})
    assert schema.union([ORDERS_MV]) is not schema


def test_get_table_and_qualified_names():
    schema = DatabaseSchema.of([ORDERS, ORDERS_MV])
    assert schema.get_table("public", "orders") == ORDERS
    assert schema.get_table("public", "missing") is None
    assert schema.qualified_names == ["public.orders", "public.orders_mv"]


# ---------------------------------------------------------------------------
# Merger with stub collaborators
# ---------------------------------------------------------------------------


def test_merges_views_into_base_tables():
    merger = CatalogMerger(
        introspector=_base(ORDERS),
        executor=_rows({"schema": "public", "name": "orders_mv"}),
    )
    result = merger.describe_database(engine=None)
    assert result.tables == frozenset({ORDERS, ORDERS_MV})


def test_duplicate_view_rows_collapse():
    merger = CatalogMerger(
        introspector=_base(ORDERS),
        executor=_rows(
            {"schema": "public", "name": "orders"},
            {"schema": "public", "name": "orders_mv"},
            {"schema": "public", "name": "orders_mv"},
        ),
    )
    assert len(merger.describe_database(engine=None).tables) == 2


@pytest.mark.parametrize(
    "exc",
    [
        ProgrammingError(VIEWS_QUERY, {}, Exception("permission denied for V_CATALOG")),
        OperationalError(VIEWS_QUERY, {}, Exception("connection reset")),
    ],
)
def test_view_fetch_failure_returns_base_unchanged(exc, caplog):
    base = DatabaseSchema.of([ORDERS])
    merger = CatalogMerger(introspector=lambda engine: base, executor=_failing(exc))
    with caplog.at_level(logging.ERROR, logger="vertiql.introspect.merger"):
        result = merger.describe_database(engine=None)
    assert result == base
    assert "Failed to fetch views" in caplog.text
    assert str(exc.orig) in caplog.text


def test_dropped_connection_during_view_fetch_keeps_base(caplog):
    base = DatabaseSchema.of([ORDERS])
    merger = CatalogMerger(
        introspector=lambda engine: base,
        executor=_failing(ConnectionResetError("connection reset by peer")),
    )
    with caplog.at_level(logging.ERROR, logger="vertiql.introspect.merger"):
        result = merger.describe_database(engine=None)
    assert result == base
    assert "connection reset by peer" in caplog.text


def test_malformed_view_rows_are_contained():
    merger = CatalogMerger(
        introspector=_base(ORDERS),
        executor=_rows({"table_schema": "public"}),
    )
    assert merger.describe_database(engine=None).tables == frozenset({ORDERS})


def test_base_failure_propagates():
    def broken(engine):
        raise OperationalError("SELECT 1", {}, Exception("host unreachable"))

    merger = CatalogMerger(introspector=broken, executor=_rows())
    with pytest.raises(OperationalError, match="host unreachable"):
        merger.describe_database(engine=None)


def test_view_fetch_can_be_disabled():
    calls = []

    def executor(engine, sql):
        calls.append(sql)
        return []

    merger = CatalogMerger(
        AdapterConfig(fetch_views=False), introspector=_base(ORDERS), executor=executor
    )
    assert merger.describe_database(engine=None).tables == frozenset({ORDERS})
    assert calls == []


def test_fetch_views_result_values():
    ok = fetch_views(None, executor=_rows({"schema": "s", "name": "v"}))
    assert ok.ok and ok.tables == frozenset({TableDescriptor("s", "v")})

    failed = fetch_views(None, executor=_failing(ProgrammingError("q", {}, Exception("nope"))))
    assert not failed.ok
    assert failed.tables == frozenset()
    assert failed.error.query == VIEWS_QUERY
    assert isinstance(FetchResult.success([]), FetchResult)


# ---------------------------------------------------------------------------
# SQLAlchemy reflection against SQLite
# ---------------------------------------------------------------------------


def test_describe_base_tables_reflects_sqlite(engine):
    schema = describe_base_tables(engine)
    assert schema.tables == frozenset(
        {TableDescriptor("main", "orders"), TableDescriptor("main", "customers")}
    )


def test_describe_base_tables_single_schema(engine):
    schema = describe_base_tables(engine, schema="main")
    assert TableDescriptor("main", "orders") in schema.tables


def test_missing_view_catalog_keeps_base_tables(engine, caplog):
    with caplog.at_level(logging.ERROR):
        schema = CatalogMerger().describe_database(engine)
    assert schema.qualified_names == ["main.customers", "main.orders"]
    assert "V_CATALOG.VIEWS" in caplog.text


def test_view_catalog_is_merged_end_to_end():
    engine = make_engine(with_view_catalog=True, views=[("main", "orders_mv")])
    schema = CatalogMerger().describe_database(engine)
    assert schema.qualified_names == ["main.customers", "main.orders", "main.orders_mv"]


def test_describe_table_maps_column_types(engine):
    columns = {c.name: c for c in describe_table(engine, TableDescriptor("main", "orders"))}
    assert columns["order_id"].logical_type is LogicalType.INTEGER
    assert columns["customer"].logical_type is LogicalType.TEXT
    assert columns["customer"].nullable is False
    assert columns["paid"].logical_type is LogicalType.BOOLEAN
    assert columns["total"].logical_type is LogicalType.DECIMAL
    assert columns["created_at"].logical_type is LogicalType.DATE_TIME
    assert columns["notes"].logical_type is LogicalType.UNKNOWN
