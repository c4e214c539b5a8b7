"""Temporal granularities the host query layer can request."""

from __future__ import annotations

from enum import Enum


class Granularity(str, Enum):
    """Truncation / extraction units for :meth:`TemporalCompiler.truncate`.

    Members without an ``-of-`` suffix truncate a timestamp to the start of
    the unit; ``*-of-*`` members extract an integer component.
    ``DEFAULT`` leaves the expression untouched.
    """

    DEFAULT = "default"
    MINUTE = "minute"
    MINUTE_OF_HOUR = "minute-of-hour"
    HOUR = "hour"
    HOUR_OF_DAY = "hour-of-day"
    DAY = "day"
    DAY_OF_WEEK = "day-of-week"
    DAY_OF_MONTH = "day-of-month"
    DAY_OF_YEAR = "day-of-year"
    WEEK = "week"
    WEEK_OF_YEAR = "week-of-year"
    MONTH = "month"
    MONTH_OF_YEAR = "month-of-year"
    QUARTER = "quarter"
    QUARTER_OF_YEAR = "quarter-of-year"
    YEAR = "year"


#: Units accepted by :meth:`TemporalCompiler.date_offset`.
INTERVAL_UNITS: frozenset[str] = frozenset(
    {"second", "minute", "hour", "day", "week", "month", "quarter", "year"}
)
