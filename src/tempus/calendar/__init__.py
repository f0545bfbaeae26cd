"""
tempus.calendar — calendar value types consumed by the interchange core.

Dates, times, offsets and their combinations, each validated on construction and
raising ``ComponentRange`` for out-of-range fields.

Public API
----------
Date, Time, UtcOffset, PrimitiveDateTime, OffsetDateTime   Value types.
Month, Weekday                                             Enumerations.
is_leap_year, days_in_year, days_in_month, weeks_in_year   Calendar arithmetic.
"""

from __future__ import annotations

from .date import (
    MAX_YEAR,
    MIN_YEAR,
    Date,
    Month,
    Weekday,
    days_in_month,
    days_in_year,
    is_leap_year,
    weeks_in_year,
)
from .datetimes import OffsetDateTime, PrimitiveDateTime
from .time import Time, UtcOffset

__all__ = [
    "MIN_YEAR",
    "MAX_YEAR",
    "Date",
    "Month",
    "Weekday",
    "Time",
    "UtcOffset",
    "PrimitiveDateTime",
    "OffsetDateTime",
    "is_leap_year",
    "days_in_year",
    "days_in_month",
    "weeks_in_year",
]
