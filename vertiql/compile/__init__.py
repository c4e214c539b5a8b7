"""vertiql compilation layer: Vertica expressions and the adapter facade."""
from vertiql.compile.base import DialectAdapter
from vertiql.compile.registry import AdapterRegistry
from vertiql.compile.temporal import TemporalCompiler
from vertiql.compile.vertica import VerticaAdapter

__all__ = [
    "DialectAdapter",
    "AdapterRegistry",
    "TemporalCompiler",
    "VerticaAdapter",
]
