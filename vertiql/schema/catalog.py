"""Value objects for the table catalog returned by schema introspection."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True, order=True)
class TableDescriptor:
    """A single table (or view) identified by ``(schema, name)``.

    Frozen, so descriptors are hashable and collapse in sets.
    """

    schema: str
    name: str

    @property
    def qualified_name(self) -> str:
        return f"{self.schema}.{self.name}"


@dataclass(frozen=True)
class DatabaseSchema:
    """The set of tables discovered in one database.

    Attributes:
        tables: Unique ``(schema, name)`` descriptors; order is irrelevant.
    """

    tables: frozenset[TableDescriptor] = field(default_factory=frozenset)

    @classmethod
    def of(cls, tables: Iterable[TableDescriptor]) -> "DatabaseSchema":
        return cls(tables=frozenset(tables))

    def union(self, others: Iterable[TableDescriptor]) -> "DatabaseSchema":
        """Return a new schema holding these tables plus ``others``.

        Duplicates (same schema and name) collapse; ``self`` is not mutated.
        """
        return DatabaseSchema(tables=self.tables | frozenset(others))

    def get_table(self, schema: str, name: str) -> TableDescriptor | None:
        """Returns the descriptor for ``schema.name``, or ``None``."""
        candidate = TableDescriptor(schema, name)
        return candidate if candidate in self.tables else None

    @property
    def qualified_names(self) -> list[str]:
        """Returns sorted ``schema.name`` strings for every table."""
        return sorted(t.qualified_name for t in self.tables)
