"""vertiql introspection: base tables, Vertica views, and their merge."""
from vertiql.introspect.base import ColumnDescriptor, describe_base_tables, describe_table
from vertiql.introspect.merger import CatalogMerger
from vertiql.introspect.views import FetchResult, fetch_views

__all__ = [
    "ColumnDescriptor",
    "describe_base_tables",
    "describe_table",
    "CatalogMerger",
    "FetchResult",
    "fetch_views",
]
