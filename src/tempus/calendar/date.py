"""
Proleptic Gregorian dates and the calendar arithmetic the interpreter relies on.

Covers years -9999..=9999 (including year 0), which the standard library ``datetime``
cannot represent. Every constructor validates its inputs and raises
``tempus.core.errors.ComponentRange`` naming the first invalid field.

Notes:
    - Leap years come from the standard library ``calendar.isleap``.
    - Day numbers count from 0001-01-01 (a Monday) as day 1, matching
      ``datetime.date.toordinal`` for the overlapping range.
"""

from __future__ import annotations

import calendar
import datetime as _dt
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any, BinaryIO, ClassVar

from tempus.core.components import Capability
from tempus.core.errors import ComponentRange, ConversionRange

if TYPE_CHECKING:
    from tempus.core.parsed import Parsed

__all__ = [
    "MIN_YEAR",
    "MAX_YEAR",
    "Month",
    "Weekday",
    "Date",
    "is_leap_year",
    "days_in_year",
    "days_in_month",
    "weeks_in_year",
]

MIN_YEAR: int = -9999
MAX_YEAR: int = 9999

# Days before the first of each month in a common year (index 1 = January).
_CUMULATIVE_DAYS: tuple[int, ...] = (0, 0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)


class Month(IntEnum):
    """Months of the year, numbered from 1."""

    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12


class Weekday(Enum):
    """Days of the week; the value counts days from Monday."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    def number_days_from_monday(self) -> int:
        return self.value

    def number_from_monday(self) -> int:
        return self.value + 1

    def number_days_from_sunday(self) -> int:
        return (self.value + 1) % 7

    def number_from_sunday(self) -> int:
        return self.number_days_from_sunday() + 1


def is_leap_year(year: int) -> bool:
    return calendar.isleap(year)


def days_in_year(year: int) -> int:
    return 366 if calendar.isleap(year) else 365


def days_in_month(year: int, month: int) -> int:
    return calendar.mdays[month] + (1 if month == 2 and calendar.isleap(year) else 0)


def weeks_in_year(year: int) -> int:
    """Number of ISO weeks (52 or 53) in ``year``."""
    jan1 = _weekday_of(year, 1)
    if jan1 is Weekday.THURSDAY or (jan1 is Weekday.WEDNESDAY and calendar.isleap(year)):
        return 53
    return 52


def _days_before_year(year: int) -> int:
    y = year - 1
    return y * 365 + y // 4 - y // 100 + y // 400


def _weekday_of(year: int, ordinal: int) -> Weekday:
    return Weekday((_days_before_year(year) + ordinal - 1) % 7)


def _ensure_in_range(
    name: str, minimum: int, maximum: int, value: int, conditional: bool = False
) -> None:
    if not minimum <= value <= maximum:
        raise ComponentRange(name, minimum, maximum, value, conditional_range=conditional)


@dataclass(frozen=True, order=True)
class Date:
    """
    A calendar date.

    Attributes:
        year (int): In -9999..=9999.
        month (Month): Month of the year.
        day (int): Day of the month, 1-based.

    Raises:
        ComponentRange: If any field is out of range ("year", "month" or "day").

    Examples:
        >>> from tempus.calendar import Date, Weekday
        >>> Date.from_ordinal_date(2000, 60)
        Date(year=2000, month=<Month.FEBRUARY: 2>, day=29)
        >>> Date(2021, 8, 27).weekday() is Weekday.FRIDAY
        True
    """

    FORMAT_CAPABILITIES: ClassVar[frozenset[Capability]] = frozenset({Capability.DATE})

    year: int
    month: Month
    day: int

    def __post_init__(self) -> None:
        _ensure_in_range("year", MIN_YEAR, MAX_YEAR, self.year)
        _ensure_in_range("month", 1, 12, int(self.month))
        _ensure_in_range(
            "day", 1, days_in_month(self.year, int(self.month)), self.day, conditional=True
        )
        object.__setattr__(self, "month", Month(self.month))

    # ── constructors ─────────────────────────────────────────────────────

    @classmethod
    def from_calendar_date(cls, year: int, month: int, day: int) -> Date:
        return cls(year, month, day)  # type: ignore[arg-type]

    @classmethod
    def from_ordinal_date(cls, year: int, ordinal: int) -> Date:
        _ensure_in_range("year", MIN_YEAR, MAX_YEAR, year)
        _ensure_in_range("ordinal", 1, days_in_year(year), ordinal, conditional=True)
        leap = 1 if calendar.isleap(year) else 0
        month = 12
        while month > 1:
            before = _CUMULATIVE_DAYS[month] + (leap if month > 2 else 0)
            if ordinal > before:
                return cls(year, Month(month), ordinal - before)
            month -= 1
        return cls(year, Month.JANUARY, ordinal)

    @classmethod
    def from_iso_week_date(cls, year: int, week: int, weekday: Weekday) -> Date:
        _ensure_in_range("year", MIN_YEAR, MAX_YEAR, year)
        _ensure_in_range("week", 1, weeks_in_year(year), week, conditional=True)
        jan4 = _weekday_of(year, 4)
        ordinal = week * 7 + weekday.number_from_monday() - (jan4.number_from_monday() + 3)
        if ordinal < 1:
            year -= 1
            ordinal += days_in_year(year)
        elif ordinal > days_in_year(year):
            ordinal -= days_in_year(year)
            year += 1
        return cls.from_ordinal_date(year, ordinal)

    # ── derived fields ───────────────────────────────────────────────────

    def ordinal(self) -> int:
        """Day of the year, 1-based."""
        leap = 1 if self.month > 2 and calendar.isleap(self.year) else 0
        return _CUMULATIVE_DAYS[self.month] + leap + self.day

    def weekday(self) -> Weekday:
        return _weekday_of(self.year, self.ordinal())

    def iso_year_week(self) -> tuple[int, int]:
        """ISO week-numbering year and week number."""
        week = (self.ordinal() - self.weekday().number_from_monday() + 10) // 7
        if week < 1:
            return self.year - 1, weeks_in_year(self.year - 1)
        if week > weeks_in_year(self.year):
            return self.year + 1, 1
        return self.year, week

    def iso_week(self) -> int:
        return self.iso_year_week()[1]

    def sunday_based_week(self) -> int:
        """Week number where week 1 starts on the year's first Sunday (0 before it)."""
        return (self.ordinal() + 6 - self.weekday().number_days_from_sunday()) // 7

    def monday_based_week(self) -> int:
        """Week number where week 1 starts on the year's first Monday (0 before it)."""
        return (self.ordinal() + 6 - self.weekday().number_days_from_monday()) // 7

    # ── stdlib interop ───────────────────────────────────────────────────

    def to_stdlib(self) -> _dt.date:
        """
        Convert to ``datetime.date``.

        Raises:
            ConversionRange: If the year is outside 1..=9999.
        """
        if not _dt.MINYEAR <= self.year <= _dt.MAXYEAR:
            raise ConversionRange()
        return _dt.date(self.year, int(self.month), self.day)

    @classmethod
    def from_stdlib(cls, value: _dt.date) -> Date:
        return cls(value.year, Month(value.month), value.day)

    # ── text interchange ─────────────────────────────────────────────────

    def _format_parts(self) -> tuple[Any, Any, Any]:
        return self, None, None

    def format(self, description: Any) -> str:
        from tempus.core.formatting import format_value

        return format_value(self, description)

    def format_into(self, output: BinaryIO, description: Any) -> int:
        from tempus.core.formatting import format_into

        return format_into(output, description, self)

    @classmethod
    def parse(cls, text: str | bytes, description: Any) -> Date:
        from tempus.core.parsed import parse_value

        return parse_value(cls, text, description)

    @classmethod
    def from_parsed(cls, parsed: Parsed) -> Date:
        return parsed.to_date()
