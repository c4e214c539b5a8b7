"""Vertica temporal expression compiler.

Translates a portable ``(granularity, expression)`` request into the native
Vertica expression built from SQLAlchemy Core constructs::

    from sqlalchemy import column, DateTime
    from vertiql.compile.temporal import TemporalCompiler

    compiler = TemporalCompiler()
    expr = compiler.truncate("week", column("created_at", DateTime))
    # date_trunc('week', created_at + INTERVAL '1 day') - INTERVAL '1 day'

Unit mapping
------------
``minute`` / ``hour`` / ``month`` / ``quarter``
    ``date_trunc('<unit>', expr)``.
``*-of-*`` and ``year``
    ``CAST(EXTRACT(<field> FROM expr) AS INTEGER)``.  Vertica's ``EXTRACT``
    returns NUMERIC; the cast keeps host arithmetic integer-typed.
``day``
    ``CAST(expr AS DATE)``.
``day-of-week``
    ``EXTRACT(dow ...) + 1``; Vertica counts Sunday as 0, the host as 1.
``week``
    Vertica's weeks start on Monday, the host's on Sunday: shift forward one
    day, truncate, shift back.
``week-of-year``
    ``WEEK(expr)``.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal
from numbers import Integral, Real
from typing import Any

from sqlalchemy import Date, DateTime, Integer, cast, extract, func
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.types import VARCHAR

from vertiql.compile.expressions import (
    as_expression,
    cast_timestamp,
    interval,
    to_integer,
    unit_literal,
)
from vertiql.errors import (
    ConfigurationError,
    InvalidOffsetError,
    UnsupportedGranularityError,
)
from vertiql.schema.granularity import INTERVAL_UNITS, Granularity

logger = logging.getLogger(__name__)

Expression = ColumnElement[Any]
TemporalHandler = Callable[[Any], Any]


# ---------------------------------------------------------------------------
# Primitive builders
# ---------------------------------------------------------------------------


def date_trunc(unit: str, expr: Any) -> Expression:
    return func.date_trunc(unit_literal(unit), cast_timestamp(expr), type_=DateTime)


def extract_integer(field: str, expr: Any) -> Expression:
    return to_integer(extract(field, cast_timestamp(expr)))


def day_of_week(expr: Any) -> Expression:
    return extract_integer("dow", expr) + 1


def week(expr: Any) -> Expression:
    # The guard wraps the raw input; the shifted sum is no longer a literal.
    shifted = cast_timestamp(expr) + interval(1, "day")
    return date_trunc("week", shifted) - interval(1, "day")


def week_of_year(expr: Any) -> Expression:
    return func.week(cast_timestamp(expr), type_=Integer)


def to_date(expr: Any) -> Expression:
    return cast(as_expression(expr), Date)


# ---------------------------------------------------------------------------
# Compiler
# ---------------------------------------------------------------------------


class TemporalCompiler:
    """Builds Vertica date/time expressions.

    The dispatch table is checked against :class:`Granularity` when the
    compiler is constructed, so a granularity added without a handler fails
    at startup rather than at query time.

    Raises:
        ConfigurationError: If a :class:`Granularity` member has no handler.
    """

    def __init__(self) -> None:
        self._handlers = self._build_handlers()
        missing = [g.value for g in Granularity if g not in self._handlers]
        if missing:
            raise ConfigurationError(
                f"No temporal handler for granularities: {missing}.", setting=missing
            )

    def _build_handlers(self) -> dict[Granularity, TemporalHandler]:
        return {
            Granularity.DEFAULT: lambda expr: expr,
            Granularity.MINUTE: lambda expr: date_trunc("minute", expr),
            Granularity.MINUTE_OF_HOUR: lambda expr: extract_integer("minute", expr),
            Granularity.HOUR: lambda expr: date_trunc("hour", expr),
            Granularity.HOUR_OF_DAY: lambda expr: extract_integer("hour", expr),
            Granularity.DAY: to_date,
            Granularity.DAY_OF_WEEK: day_of_week,
            Granularity.DAY_OF_MONTH: lambda expr: extract_integer("day", expr),
            Granularity.DAY_OF_YEAR: lambda expr: extract_integer("doy", expr),
            Granularity.WEEK: week,
            Granularity.WEEK_OF_YEAR: week_of_year,
            Granularity.MONTH: lambda expr: date_trunc("month", expr),
            Granularity.MONTH_OF_YEAR: lambda expr: extract_integer("month", expr),
            Granularity.QUARTER: lambda expr: date_trunc("quarter", expr),
            Granularity.QUARTER_OF_YEAR: lambda expr: extract_integer("quarter", expr),
            Granularity.YEAR: lambda expr: extract_integer("year", expr),
        }

    @property
    def supported_granularities(self) -> list[str]:
        return [g.value for g in self._handlers]

    def truncate(self, granularity: Granularity | str, expr: Any) -> Any:
        """Truncate or extract ``expr`` at ``granularity``.

        Args:
            granularity: A :class:`Granularity` or its string value
                (``"day-of-week"``).
            expr: A SQLAlchemy expression, or a plain value to be bound as a
                literal.

        Returns:
            A new expression; ``expr`` itself for ``"default"``.

        Raises:
            UnsupportedGranularityError: If ``granularity`` is not supported.
        """
        unit = self._coerce_granularity(granularity)
        result = self._handlers[unit](expr)
        logger.debug("Compiled %s truncation: %s", unit.value, result)
        return result

    def date_offset(self, unit: Granularity | str, amount: Any) -> Expression:
        """Return ``now() + INTERVAL '<amount> <unit>'``.

        Args:
            unit: Interval unit (``"day"``, ``"month"``, ...).
            amount: Whole number of units; negative values look backwards.

        Raises:
            InvalidOffsetError: If ``amount`` is not a whole number.
            ConfigurationError: If ``unit`` is not an interval unit.
        """
        unit_name = str(getattr(unit, "value", unit)).lower()
        if unit_name not in INTERVAL_UNITS:
            raise ConfigurationError(
                f"Unsupported interval unit: {unit!r}. "
                f"Supported units: {sorted(INTERVAL_UNITS)}.",
                setting=unit,
            )
        count = _whole_units(amount, unit_name)
        return func.now() + interval(count, unit_name)

    def string_length(self, expr: Any) -> Expression:
        """``char_length(CAST(expr AS VARCHAR))``."""
        return func.char_length(cast(as_expression(expr), VARCHAR))

    def unix_timestamp_to_timestamp(self, expr: Any, unit: str = "seconds") -> Expression:
        """Convert a UNIX epoch number to a timestamp with ``to_timestamp``.

        Args:
            expr: Epoch value expression.
            unit: ``"seconds"`` or ``"milliseconds"``.

        Raises:
            ConfigurationError: For any other unit.
        """
        value = as_expression(expr)
        if unit == "seconds":
            return func.to_timestamp(value, type_=DateTime)
        if unit == "milliseconds":
            return func.to_timestamp(value / 1000.0, type_=DateTime)
        raise ConfigurationError(f"Unsupported epoch unit: {unit!r}.", setting=unit)

    def _coerce_granularity(self, granularity: Granularity | str) -> Granularity:
        try:
            unit = Granularity(granularity)
        except ValueError:
            raise UnsupportedGranularityError(
                granularity, self.supported_granularities
            ) from None
        if unit not in self._handlers:
            raise UnsupportedGranularityError(granularity, self.supported_granularities)
        return unit


def _whole_units(amount: Any, unit: str) -> int:
    """Return ``amount`` as an ``int`` or raise :class:`InvalidOffsetError`."""
    if isinstance(amount, bool):
        raise InvalidOffsetError(amount, unit)
    if isinstance(amount, Integral):
        return int(amount)
    if isinstance(amount, Decimal):
        if amount.is_finite() and amount == amount.to_integral_value():
            return int(amount)
        raise InvalidOffsetError(amount, unit)
    if isinstance(amount, Real):
        as_float = float(amount)
        if as_float.is_integer():
            return int(as_float)
    raise InvalidOffsetError(amount, unit)
