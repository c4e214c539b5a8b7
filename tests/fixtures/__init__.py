"""Test fixtures: sample Vertica-flavoured DDL and expression rendering."""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

#: Tables created in the in-memory SQLite stand-in for a Vertica database.
SAMPLE_DDL: tuple[str, ...] = (
    """
    CREATE TABLE orders (
        order_id    INTEGER PRIMARY KEY,
        customer    VARCHAR(80) NOT NULL,
        paid        BOOLEAN,
        total       NUMERIC(10, 2),
        created_at  TIMESTAMP,
        notes       BLOB
    )
    """,
    """
    CREATE TABLE customers (
        customer_id INTEGER PRIMARY KEY,
        name        VARCHAR(120) NOT NULL
    )
    """,
)


def render(expr: Any) -> str:
    """Compile a SQLAlchemy expression to SQL with inline literal values."""
    return str(expr.compile(compile_kwargs={"literal_binds": True}))


def make_engine(*, with_view_catalog: bool = False, views: list[tuple[str, str]] | None = None) -> Engine:
    """Return an in-memory SQLite engine seeded with :data:`SAMPLE_DDL`.

    When ``with_view_catalog`` is set, an attached ``V_CATALOG`` database with
    a ``VIEWS`` table is added so the Vertica view query runs unchanged.
    """
    engine = create_engine("sqlite://", poolclass=StaticPool)
    with engine.connect() as conn:
        if with_view_catalog:
            conn.exec_driver_sql("ATTACH DATABASE ':memory:' AS V_CATALOG")
        for ddl in SAMPLE_DDL:
            conn.execute(text(ddl))
        if with_view_catalog:
            conn.execute(text("CREATE TABLE V_CATALOG.VIEWS (TABLE_SCHEMA TEXT, TABLE_NAME TEXT)"))
            for schema, name in views or []:
                conn.execute(
                    text("INSERT INTO V_CATALOG.VIEWS VALUES (:schema, :name)"),
                    {"schema": schema, "name": name},
                )
        conn.commit()
    return engine
