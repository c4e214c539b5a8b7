"""vertiql schema models: logical types, granularities, connections, catalog."""
from vertiql.schema.catalog import DatabaseSchema, TableDescriptor
from vertiql.schema.connection import (
    DETAILS_FIELDS,
    ConnectionField,
    ConnectionParams,
    ConnectionSpec,
    build_spec,
)
from vertiql.schema.granularity import INTERVAL_UNITS, Granularity
from vertiql.schema.types import VERTICA_TYPE_MAP, LogicalType, resolve_type

__all__ = [
    "DatabaseSchema",
    "TableDescriptor",
    "DETAILS_FIELDS",
    "ConnectionField",
    "ConnectionParams",
    "ConnectionSpec",
    "build_spec",
    "INTERVAL_UNITS",
    "Granularity",
    "VERTICA_TYPE_MAP",
    "LogicalType",
    "resolve_type",
]
