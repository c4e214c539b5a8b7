"""Generic catalog introspection through SQLAlchemy reflection.

:func:`describe_base_tables` lists the base tables of every user schema the
engine can see.  :func:`describe_table` reflects one table's columns and
maps each reported column type onto a :class:`~vertiql.schema.types.LogicalType`.

Example::

    from sqlalchemy import create_engine
    from vertiql.introspect.base import describe_base_tables

    engine = create_engine("vertica+vertica_python://dbadmin@localhost:5433/sales")
    schema = describe_base_tables(engine)

Both functions let transport errors propagate unchanged.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import inspect

from vertiql.config import SYSTEM_SCHEMAS
from vertiql.schema.catalog import DatabaseSchema, TableDescriptor
from vertiql.schema.types import LogicalType, resolve_type

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


@dataclass(frozen=True)
class ColumnDescriptor:
    """A reflected column with its portable type.

    Attributes:
        name: Column name.
        database_type: Type name as reported by the driver (e.g. ``VARCHAR(80)``).
        logical_type: The mapped :class:`LogicalType`.
        nullable: Whether the column can be NULL.
    """

    name: str
    database_type: str
    logical_type: LogicalType
    nullable: bool = True


def describe_base_tables(
    engine: Engine,
    *,
    schema: str | None = None,
    excluded_schemas: Iterable[str] = SYSTEM_SCHEMAS,
) -> DatabaseSchema:
    """Reflect the base tables visible to ``engine``.

    Args:
        engine: A SQLAlchemy engine.
        schema: Restrict to one schema.  When ``None`` every schema except
            ``excluded_schemas`` is listed.
        excluded_schemas: Schema names (case-insensitive) to skip.

    Returns:
        A :class:`DatabaseSchema` of ``(schema, table)`` descriptors.
    """
    excluded = {s.lower() for s in excluded_schemas}
    with engine.connect() as conn:
        inspector = inspect(conn)
        if schema is not None:
            schemas = [schema]
        else:
            schemas = [s for s in inspector.get_schema_names() if s.lower() not in excluded]
        tables = [
            TableDescriptor(schema_name, table_name)
            for schema_name in schemas
            for table_name in inspector.get_table_names(schema=schema_name)
        ]
    return DatabaseSchema.of(tables)


def describe_table(engine: Engine, table: TableDescriptor) -> list[ColumnDescriptor]:
    """Reflect ``table``'s columns, resolving each type to a logical type."""
    with engine.connect() as conn:
        columns = inspect(conn).get_columns(table.name, schema=table.schema)
    return [
        ColumnDescriptor(
            name=col["name"],
            database_type=str(col["type"]),
            logical_type=resolve_type(str(col["type"])),
            # Unset nullability is treated as nullable.
            nullable=col.get("nullable") is not False,
        )
        for col in columns
    ]
