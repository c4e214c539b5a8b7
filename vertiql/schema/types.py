"""Vertica column types and the portable logical types they map to.

The host query layer only understands a handful of :class:`LogicalType`
categories.  :func:`resolve_type` maps whatever type name the introspector
reports onto one of them and never fails: unrecognised names fall back to
:attr:`LogicalType.UNKNOWN`.
"""

from __future__ import annotations

import re
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class LogicalType(str, Enum):
    """Portable value categories understood by the host query layer."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    BIG_INTEGER = "big_integer"
    DECIMAL = "decimal"
    FLOAT = "float"
    TEXT = "text"
    DATE = "date"
    TIME = "time"
    DATE_TIME = "date_time"
    UNKNOWN = "unknown"


#: Vertica type name (canonical spelling) -> logical type.
#: Entries are additive only; changing an existing mapping breaks schema sync.
VERTICA_TYPE_MAP: Mapping[str, LogicalType] = MappingProxyType(
    {
        "Boolean": LogicalType.BOOLEAN,
        "Integer": LogicalType.INTEGER,
        "Bigint": LogicalType.BIG_INTEGER,
        "Varbinary": LogicalType.UNKNOWN,
        "Binary": LogicalType.UNKNOWN,
        "Char": LogicalType.TEXT,
        "Varchar": LogicalType.TEXT,
        "Money": LogicalType.DECIMAL,
        "Numeric": LogicalType.DECIMAL,
        "Double": LogicalType.DECIMAL,
        "Float": LogicalType.FLOAT,
        "Date": LogicalType.DATE,
        "Time": LogicalType.TIME,
        "TimeTz": LogicalType.TIME,
        "Timestamp": LogicalType.DATE_TIME,
        "TimestampTz": LogicalType.DATE_TIME,
        "AUTO_INCREMENT": LogicalType.INTEGER,
        "Long Varchar": LogicalType.TEXT,
        "Long Varbinary": LogicalType.UNKNOWN,
    }
)

_FOLDED_TYPE_MAP: Mapping[str, LogicalType] = MappingProxyType(
    {name.casefold(): logical for name, logical in VERTICA_TYPE_MAP.items()}
)

# "Varchar(80)", "Numeric(10, 2)" -> "Varchar", "Numeric"
_TYPE_ARGS_RE = re.compile(r"\s*\(.*\)\s*$")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_type_name(name: str) -> str:
    """Return the lookup key for a reported type name.

    Strips length / precision arguments and collapses internal whitespace, so
    ``"Long  Varchar(65000)"`` becomes ``"Long Varchar"``.
    """
    stripped = _TYPE_ARGS_RE.sub("", name.strip())
    return _WHITESPACE_RE.sub(" ", stripped)


def resolve_type(name: Any) -> LogicalType:
    """Map a Vertica type name to its :class:`LogicalType`.

    The canonical spelling (e.g. ``"Long Varchar"``) is tried first, then a
    case-insensitive match, since SQLAlchemy reflection reports names in
    upper case (``"VARCHAR"``).

    Args:
        name: The type name as reported by the introspector.

    Returns:
        The mapped logical type, or :attr:`LogicalType.UNKNOWN` for anything
        unrecognised (including empty strings and non-string input).
    """
    if not isinstance(name, str):
        return LogicalType.UNKNOWN
    key = normalize_type_name(name)
    logical = VERTICA_TYPE_MAP.get(key)
    if logical is not None:
        return logical
    return _FOLDED_TYPE_MAP.get(key.casefold(), LogicalType.UNKNOWN)
