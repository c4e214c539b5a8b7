"""Small SQLAlchemy Core helpers shared by the Vertica expression builders.

Every helper returns a *new* clause; input expressions are never mutated.
"""
from __future__ import annotations

import datetime as dt
import re
from typing import Any

from sqlalchemy import Integer, Interval, String, cast, literal, literal_column
from sqlalchemy.sql.elements import BindParameter, ClauseElement, ColumnElement
from sqlalchemy.types import TIMESTAMP

# ISO-8601 date ("2024-01-07", optionally followed by a time) or a bare time.
_TEMPORAL_TEXT_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}(?:[ T]\d{2}:\d{2}.*)?$|^\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?$"
)


def as_expression(value: Any) -> ColumnElement[Any]:
    """Return ``value`` unchanged if it is already a clause, else a literal."""
    if isinstance(value, ClauseElement):
        return value  # type: ignore[return-value]
    return literal(value)


def is_temporal_literal(expr: Any) -> bool:
    """Return ``True`` if ``expr`` is a stringified date/time literal.

    The host hands dates and timestamps to the dialect layer as bound
    literal values.  Those carry either a ``date``/``datetime``/``time`` or
    an ISO-8601 string; columns and function calls are never temporal
    literals.
    """
    if isinstance(expr, (dt.date, dt.time)):
        return True
    if isinstance(expr, str):
        return _looks_temporal(expr)
    if isinstance(expr, BindParameter):
        value = expr.effective_value
        if isinstance(value, (dt.date, dt.time)):
            return True
        if isinstance(value, str):
            return _looks_temporal(value)
    return False


def _looks_temporal(text: str) -> bool:
    candidate = text.strip()
    if not _TEMPORAL_TEXT_RE.match(candidate):
        return False
    for parse in (dt.datetime.fromisoformat, dt.time.fromisoformat):
        try:
            parse(candidate)
        except ValueError:
            continue
        return True
    return False


def cast_timestamp(expr: Any) -> ColumnElement[Any]:
    """Wrap stringified temporal literals in ``CAST(... AS TIMESTAMP)``.

    Vertica does not coerce strings inside date functions, so date/time
    literals need an explicit cast before any truncation or extraction.
    Anything else is returned as-is.
    """
    if is_temporal_literal(expr):
        return cast(as_expression(expr), TIMESTAMP)
    return as_expression(expr)


def unit_literal(unit: str) -> ColumnElement[Any]:
    """Inline quoted unit name for ``date_trunc`` (``'week'``).

    Rendered inline rather than bound; a bound parameter leaves the
    argument type unresolved for the function overload.
    """
    safe = unit.replace("'", "''")
    return literal_column(f"'{safe}'", type_=String)


def interval(amount: int, unit: str) -> ColumnElement[Any]:
    """Inline ``INTERVAL '<amount> <unit>'`` literal."""
    return literal_column(f"INTERVAL '{int(amount)} {unit}'", type_=Interval)


def to_integer(expr: ColumnElement[Any]) -> ColumnElement[Any]:
    """``CAST(expr AS INTEGER)``."""
    return cast(expr, Integer)
