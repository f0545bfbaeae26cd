"""
Modifier records: the options each component kind accepts.

Every component kind has exactly one frozen pydantic model carrying its options with
documented defaults. Records compare and hash by value, reject unknown fields, and are
safe to share between threads once built.

Naming
- Enum classes: PascalCase; members UPPER_SNAKE; values lower_snake.
- Grammar tokens (``padding:zero``, ``repr:12``, ...) are mapped onto these records by
  ``tempus.core.grammar``; the records themselves know nothing about the grammar.

Examples:
    >>> from tempus.core.modifiers import Month, MonthRepr, Padding
    >>> Month() == Month(padding=Padding.ZERO, repr=MonthRepr.NUMERICAL)
    True
    >>> Month(repr=MonthRepr.SHORT).case_sensitive
    True
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

__all__ = [
    # option enums
    "Padding",
    "MonthRepr",
    "WeekdayRepr",
    "WeekNumberRepr",
    "YearRepr",
    "SubsecondDigits",
    # records
    "Day",
    "Month",
    "Ordinal",
    "Weekday",
    "WeekNumber",
    "Year",
    "Hour",
    "Minute",
    "Period",
    "Second",
    "Subsecond",
    "OffsetHour",
    "OffsetMinute",
    "OffsetSecond",
]


class Padding(Enum):
    """How a fixed-width number is filled: spaces, zeros, or not at all."""

    SPACE = "space"
    ZERO = "zero"
    NONE = "none"


class MonthRepr(Enum):
    NUMERICAL = "numerical"
    LONG = "long"
    SHORT = "short"


class WeekdayRepr(Enum):
    """Names (short/long) or a single digit counted from Sunday or Monday."""

    SHORT = "short"
    LONG = "long"
    SUNDAY = "sunday"
    MONDAY = "monday"


class WeekNumberRepr(Enum):
    """ISO week, or week 1 starting on the year's first Sunday/Monday."""

    ISO = "iso"
    SUNDAY = "sunday"
    MONDAY = "monday"


class YearRepr(Enum):
    FULL = "full"
    LAST_TWO = "last_two"


class SubsecondDigits(Enum):
    """Fixed number of fractional digits, or as many as needed (at least one)."""

    ONE = "one"
    TWO = "two"
    THREE = "three"
    FOUR = "four"
    FIVE = "five"
    SIX = "six"
    SEVEN = "seven"
    EIGHT = "eight"
    NINE = "nine"
    ONE_OR_MORE = "one_or_more"

    @property
    def digit_count(self) -> int | None:
        """Fixed digit count, or None for ONE_OR_MORE."""
        return _DIGIT_COUNTS.get(self)


_DIGIT_COUNTS: dict[SubsecondDigits, int] = {
    member: index
    for index, member in enumerate(SubsecondDigits, start=1)
    if member is not SubsecondDigits.ONE_OR_MORE
}


class _Modifiers(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Day(_Modifiers):
    padding: Padding = Padding.ZERO


class Month(_Modifiers):
    """
    Attributes:
        padding (Padding): Fill for the numerical repr.
        repr (MonthRepr): Number, long name ("January") or short name ("Jan").
        case_sensitive (bool): Parse-only; whether names must match case exactly.
    """

    padding: Padding = Padding.ZERO
    repr: MonthRepr = MonthRepr.NUMERICAL
    case_sensitive: bool = True


class Ordinal(_Modifiers):
    padding: Padding = Padding.ZERO


class Weekday(_Modifiers):
    """
    Attributes:
        repr (WeekdayRepr): Name or digit representation.
        one_indexed (bool): For digit reprs, whether the first day is 1 (else 0).
        case_sensitive (bool): Parse-only; whether names must match case exactly.
    """

    repr: WeekdayRepr = WeekdayRepr.LONG
    one_indexed: bool = True
    case_sensitive: bool = True


class WeekNumber(_Modifiers):
    padding: Padding = Padding.ZERO
    repr: WeekNumberRepr = WeekNumberRepr.ISO


class Year(_Modifiers):
    """
    Attributes:
        padding (Padding): Fill up to four (full) or two (last_two) digits.
        repr (YearRepr): Full year or its last two digits.
        iso_week_based (bool): Use the ISO week-numbering year.
        sign_is_mandatory (bool): Always print a sign for full years.
    """

    padding: Padding = Padding.ZERO
    repr: YearRepr = YearRepr.FULL
    iso_week_based: bool = False
    sign_is_mandatory: bool = False


class Hour(_Modifiers):
    padding: Padding = Padding.ZERO
    is_12_hour_clock: bool = False


class Minute(_Modifiers):
    padding: Padding = Padding.ZERO


class Period(_Modifiers):
    is_uppercase: bool = True
    case_sensitive: bool = True


class Second(_Modifiers):
    padding: Padding = Padding.ZERO


class Subsecond(_Modifiers):
    digits: SubsecondDigits = SubsecondDigits.ONE_OR_MORE


class OffsetHour(_Modifiers):
    padding: Padding = Padding.ZERO
    sign_is_mandatory: bool = False


class OffsetMinute(_Modifiers):
    padding: Padding = Padding.ZERO


class OffsetSecond(_Modifiers):
    padding: Padding = Padding.ZERO
