"""
Token readers for parse mode.

Each component kind has one reader taking the remaining input and the component's
modifier record. A reader returns ``(fields, remaining)`` where ``fields`` maps Parsed
field names to decoded values, or ``None`` when the input does not hold a token for
that component. Readers never mutate anything; ``Parsed.parse_component`` applies the
fields and turns ``None`` into ``InvalidComponent``.

Numeric tokens
- ``padding:zero`` needs exactly ``width`` digits.
- ``padding:space`` accepts up to ``width - 1`` leading spaces, then digits filling the
  width.
- ``padding:none`` accepts 1..=width digits.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from tempus.calendar.date import Month, Weekday

from . import modifiers as mod
from .components import ComponentKind
from .constants import (
    MONTH_NAMES_LONG,
    MONTH_NAMES_SHORT,
    PERIOD_NAMES_LOWER,
    PERIOD_NAMES_UPPER,
    WEEKDAY_NAMES_LONG,
    WEEKDAY_NAMES_SHORT,
    WIDTH_ORDINAL,
    WIDTH_TWO,
    WIDTH_YEAR,
)

__all__ = [
    "Reading",
    "digits",
    "number",
    "sign",
    "first_match",
    "COMPONENT_READERS",
]

Reading = tuple[dict[str, Any], bytes]


def digits(data: bytes, minimum: int, maximum: int) -> tuple[int, bytes] | None:
    """Read between ``minimum`` and ``maximum`` ASCII digits."""
    count = 0
    while count < maximum and count < len(data) and 0x30 <= data[count] <= 0x39:
        count += 1
    if count < minimum:
        return None
    return int(data[:count]), data[count:]


def number(data: bytes, width: int, padding: mod.Padding) -> tuple[int, bytes] | None:
    """Read a fixed-width number honoring ``padding``."""
    if padding is mod.Padding.NONE:
        return digits(data, 1, width)
    if padding is mod.Padding.ZERO:
        return digits(data, width, width)
    pad = 0
    while pad < width - 1 and pad < len(data) and data[pad] == 0x20:
        pad += 1
    return digits(data[pad:], width - pad, width - pad)


def sign(data: bytes) -> tuple[bytes | None, bytes]:
    """Split off a leading ``+`` or ``-``."""
    if data[:1] in (b"+", b"-"):
        return data[:1], data[1:]
    return None, data


def first_match(
    data: bytes, names: Sequence[bytes], case_sensitive: bool
) -> tuple[int, bytes] | None:
    """Index of the longest name that prefixes ``data``."""
    best: int | None = None
    for index, name in enumerate(names):
        head = data[: len(name)]
        if head == name or (not case_sensitive and head.lower() == name.lower()):
            if best is None or len(name) > len(names[best]):
                best = index
    if best is None:
        return None
    return best, data[len(names[best]) :]


def _single(field: str, width: int) -> Callable[[bytes, Any], Reading | None]:
    def read(data: bytes, modifiers: Any) -> Reading | None:
        got = number(data, width, modifiers.padding)
        if got is None:
            return None
        return {field: got[0]}, got[1]

    return read


def _year(data: bytes, modifiers: mod.Year) -> Reading | None:
    if modifiers.repr is mod.YearRepr.LAST_TWO:
        got = number(data, WIDTH_TWO, modifiers.padding)
        if got is None:
            return None
        field = "iso_year_last_two" if modifiers.iso_week_based else "year_last_two"
        return {field: got[0]}, got[1]

    marker, rest = sign(data)
    if marker is None and modifiers.sign_is_mandatory:
        return None
    got = number(rest, WIDTH_YEAR, modifiers.padding)
    if got is None:
        return None
    value = -got[0] if marker == b"-" else got[0]
    return {"iso_year" if modifiers.iso_week_based else "year": value}, got[1]


def _month(data: bytes, modifiers: mod.Month) -> Reading | None:
    if modifiers.repr is mod.MonthRepr.NUMERICAL:
        got = number(data, WIDTH_TWO, modifiers.padding)
        if got is None or not 1 <= got[0] <= 12:
            return None
        return {"month": Month(got[0])}, got[1]
    names = MONTH_NAMES_LONG if modifiers.repr is mod.MonthRepr.LONG else MONTH_NAMES_SHORT
    found = first_match(data, names, modifiers.case_sensitive)
    if found is None:
        return None
    return {"month": Month(found[0] + 1)}, found[1]


def _weekday(data: bytes, modifiers: mod.Weekday) -> Reading | None:
    if modifiers.repr in (mod.WeekdayRepr.SHORT, mod.WeekdayRepr.LONG):
        names = WEEKDAY_NAMES_LONG if modifiers.repr is mod.WeekdayRepr.LONG else WEEKDAY_NAMES_SHORT
        found = first_match(data, names, modifiers.case_sensitive)
        if found is None:
            return None
        return {"weekday": Weekday(found[0])}, found[1]

    got = digits(data, 1, 1)
    if got is None:
        return None
    offset = got[0] - (1 if modifiers.one_indexed else 0)
    if not 0 <= offset <= 6:
        return None
    if modifiers.repr is mod.WeekdayRepr.SUNDAY:
        return {"weekday": Weekday((offset - 1) % 7)}, got[1]
    return {"weekday": Weekday(offset)}, got[1]


def _week_number(data: bytes, modifiers: mod.WeekNumber) -> Reading | None:
    got = number(data, WIDTH_TWO, modifiers.padding)
    if got is None:
        return None
    field = {
        mod.WeekNumberRepr.ISO: "iso_week_number",
        mod.WeekNumberRepr.SUNDAY: "sunday_week_number",
        mod.WeekNumberRepr.MONDAY: "monday_week_number",
    }[modifiers.repr]
    return {field: got[0]}, got[1]


def _hour(data: bytes, modifiers: mod.Hour) -> Reading | None:
    got = number(data, WIDTH_TWO, modifiers.padding)
    if got is None:
        return None
    return {"hour_12" if modifiers.is_12_hour_clock else "hour_24": got[0]}, got[1]


def _period(data: bytes, modifiers: mod.Period) -> Reading | None:
    names = PERIOD_NAMES_UPPER if modifiers.is_uppercase else PERIOD_NAMES_LOWER
    found = first_match(data, names, modifiers.case_sensitive)
    if found is None:
        return None
    return {"hour_12_is_pm": found[0] == 1}, found[1]


def _subsecond(data: bytes, modifiers: mod.Subsecond) -> Reading | None:
    count = modifiers.digits.digit_count
    got = digits(data, 1, 9) if count is None else digits(data, count, count)
    if got is None:
        return None
    consumed = len(data) - len(got[1])
    return {"subsecond": got[0] * 10 ** (9 - consumed)}, got[1]


def _offset_hour(data: bytes, modifiers: mod.OffsetHour) -> Reading | None:
    marker, rest = sign(data)
    if marker is None and modifiers.sign_is_mandatory:
        return None
    got = number(rest, WIDTH_TWO, modifiers.padding)
    if got is None:
        return None
    negative = marker == b"-"
    return {"offset_hour": -got[0] if negative else got[0], "offset_is_negative": negative}, got[1]


COMPONENT_READERS: dict[ComponentKind, Callable[[bytes, Any], Reading | None]] = {
    ComponentKind.DAY: _single("day", WIDTH_TWO),
    ComponentKind.MONTH: _month,
    ComponentKind.ORDINAL: _single("ordinal", WIDTH_ORDINAL),
    ComponentKind.WEEKDAY: _weekday,
    ComponentKind.WEEK_NUMBER: _week_number,
    ComponentKind.YEAR: _year,
    ComponentKind.HOUR: _hour,
    ComponentKind.MINUTE: _single("minute", WIDTH_TWO),
    ComponentKind.PERIOD: _period,
    ComponentKind.SECOND: _single("second", WIDTH_TWO),
    ComponentKind.SUBSECOND: _subsecond,
    ComponentKind.OFFSET_HOUR: _offset_hour,
    ComponentKind.OFFSET_MINUTE: _single("offset_minute", WIDTH_TWO),
    ComponentKind.OFFSET_SECOND: _single("offset_second", WIDTH_TWO),
}
