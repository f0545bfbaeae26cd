"""
Format mode: render a value through compiled format items.

Responsibilities
- Check, once per description, which value capabilities (date, time, offset) it
  needs, and refuse value types that do not declare them.
- Render every item into a buffer, then hand the bytes to the output in one write, so
  a failure never leaves partial output behind.

Value protocol
- ``FORMAT_CAPABILITIES``: class attribute, a frozenset of Capability.
- ``_format_parts()``: returns ``(date, time, offset)``; parts the type does not carry
  are None.

Examples:
    >>> from tempus.calendar import Date
    >>> from tempus.core.formatting import format_value
    >>> from tempus.core.grammar import parse_format_description
    >>> format_value(Date(2021, 1, 2), parse_format_description("[day]/[month]/[year]"))
    '02/01/2021'
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from functools import lru_cache
from typing import Any, BinaryIO

from . import modifiers as mod
from .components import (
    Capability,
    Component,
    ComponentItem,
    ComponentKind,
    CompoundItem,
    FormatItem,
    LiteralItem,
)
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
from .errors import Format, InsufficientTypeInformation
from .grammar import cached_format_description
from .well_known import WellKnownFormat

__all__ = ["format_into", "format_value", "required_capabilities"]

logger = logging.getLogger(__name__)


def format_into(output: BinaryIO, description: Any, value: Any) -> int:
    """
    Render ``value`` and write the bytes to ``output``.

    Args:
        output (BinaryIO): Writable binary stream.
        description: Description text, a single item or component, a sequence of items,
            or a well-known format.
        value: A value type (Date, Time, UtcOffset, PrimitiveDateTime, OffsetDateTime).

    Returns:
        int: Number of bytes written.

    Raises:
        Format: Wrapping InsufficientTypeInformation, InvalidFormatComponent, or the
            OSError raised by ``output``.
        InvalidFormatDescription: If ``description`` is text that does not compile;
            nothing is written.
    """
    data = _render(description, value)
    try:
        output.write(data)
    except OSError as exc:
        logger.debug("writing formatted %s failed: %s", type(value).__name__, exc)
        raise Format(exc)
    return len(data)


def format_value(value: Any, description: Any) -> str:
    """
    Render ``value`` to a string.

    Output bytes that are not valid UTF-8 (from non-UTF-8 literals) come back as
    surrogate escapes.

    Raises:
        Format: Wrapping InsufficientTypeInformation or InvalidFormatComponent.
        InvalidFormatDescription: If ``description`` is text that does not compile.
            It is raised as-is, not wrapped in Format.
    """
    return _render(description, value).decode("utf-8", "surrogateescape")


@lru_cache(maxsize=256)
def required_capabilities(items: tuple[FormatItem, ...]) -> frozenset[Capability]:
    """Capabilities read by the components of ``items`` (compound items included)."""
    needed: set[Capability] = set()
    for item in items:
        if isinstance(item, ComponentItem):
            needed.add(item.component.kind.requires)
        elif isinstance(item, CompoundItem):
            needed |= required_capabilities(item.items)
    return frozenset(needed)


def _normalize(description: Any) -> tuple[FormatItem, ...] | WellKnownFormat:
    if isinstance(description, WellKnownFormat):
        return description
    if isinstance(description, (str, bytes)):
        return cached_format_description(description)
    if isinstance(description, (FormatItem, Component)):
        return (FormatItem.from_value(description),)
    if isinstance(description, Sequence):
        return tuple(FormatItem.from_value(item) for item in description)
    raise TypeError(f"unsupported format description: {type(description).__name__}")


def _render(description: Any, value: Any) -> bytes:
    items = _normalize(description)
    needed = items.requires if isinstance(items, WellKnownFormat) else required_capabilities(items)
    provided = getattr(type(value), "FORMAT_CAPABILITIES", frozenset())
    if not needed <= provided:
        logger.debug(
            "%s lacks %s", type(value).__name__, sorted(c.value for c in needed - provided)
        )
        raise Format(InsufficientTypeInformation())

    date, time, offset = value._format_parts()
    if isinstance(items, WellKnownFormat):
        return items.render(date, time, offset)
    buffer = bytearray()
    _render_items(buffer, items, date, time, offset)
    return bytes(buffer)


def _render_items(
    buffer: bytearray, items: Iterable[FormatItem], date: Any, time: Any, offset: Any
) -> None:
    for item in items:
        if isinstance(item, LiteralItem):
            buffer += item.value
        elif isinstance(item, ComponentItem):
            component = item.component
            _WRITERS[component.kind](buffer, component.modifiers, date, time, offset)
        elif isinstance(item, CompoundItem):
            _render_items(buffer, item.items, date, time, offset)


def _pad(value: int, width: int, padding: mod.Padding) -> bytes:
    text = str(value)
    if padding is mod.Padding.ZERO:
        text = text.rjust(width, "0")
    elif padding is mod.Padding.SPACE:
        text = text.rjust(width, " ")
    return text.encode("ascii")


# ============================================================================
# Component writers
# ============================================================================

Writer = Callable[[bytearray, Any, Any, Any, Any], None]


def _day(buffer: bytearray, m: mod.Day, date: Any, time: Any, offset: Any) -> None:
    buffer += _pad(date.day, WIDTH_TWO, m.padding)


def _month(buffer: bytearray, m: mod.Month, date: Any, time: Any, offset: Any) -> None:
    if m.repr is mod.MonthRepr.NUMERICAL:
        buffer += _pad(int(date.month), WIDTH_TWO, m.padding)
    elif m.repr is mod.MonthRepr.LONG:
        buffer += MONTH_NAMES_LONG[date.month - 1]
    else:
        buffer += MONTH_NAMES_SHORT[date.month - 1]


def _ordinal(buffer: bytearray, m: mod.Ordinal, date: Any, time: Any, offset: Any) -> None:
    buffer += _pad(date.ordinal(), WIDTH_ORDINAL, m.padding)


def _weekday(buffer: bytearray, m: mod.Weekday, date: Any, time: Any, offset: Any) -> None:
    weekday = date.weekday()
    if m.repr is mod.WeekdayRepr.LONG:
        buffer += WEEKDAY_NAMES_LONG[weekday.value]
    elif m.repr is mod.WeekdayRepr.SHORT:
        buffer += WEEKDAY_NAMES_SHORT[weekday.value]
    else:
        if m.repr is mod.WeekdayRepr.SUNDAY:
            number = weekday.number_days_from_sunday()
        else:
            number = weekday.number_days_from_monday()
        buffer += str(number + (1 if m.one_indexed else 0)).encode("ascii")


def _week_number(buffer: bytearray, m: mod.WeekNumber, date: Any, time: Any, offset: Any) -> None:
    if m.repr is mod.WeekNumberRepr.ISO:
        week = date.iso_week()
    elif m.repr is mod.WeekNumberRepr.SUNDAY:
        week = date.sunday_based_week()
    else:
        week = date.monday_based_week()
    buffer += _pad(week, WIDTH_TWO, m.padding)


def _year(buffer: bytearray, m: mod.Year, date: Any, time: Any, offset: Any) -> None:
    year = date.iso_year_week()[0] if m.iso_week_based else date.year
    if m.repr is mod.YearRepr.LAST_TWO:
        buffer += _pad(abs(year) % 100, WIDTH_TWO, m.padding)
        return
    if year < 0:
        buffer += b"-"
    elif m.sign_is_mandatory:
        buffer += b"+"
    buffer += _pad(abs(year), WIDTH_YEAR, m.padding)


def _hour(buffer: bytearray, m: mod.Hour, date: Any, time: Any, offset: Any) -> None:
    hour = (time.hour - 1) % 12 + 1 if m.is_12_hour_clock else time.hour
    buffer += _pad(hour, WIDTH_TWO, m.padding)


def _minute(buffer: bytearray, m: mod.Minute, date: Any, time: Any, offset: Any) -> None:
    buffer += _pad(time.minute, WIDTH_TWO, m.padding)


def _period(buffer: bytearray, m: mod.Period, date: Any, time: Any, offset: Any) -> None:
    names = PERIOD_NAMES_UPPER if m.is_uppercase else PERIOD_NAMES_LOWER
    buffer += names[time.hour >= 12]


def _second(buffer: bytearray, m: mod.Second, date: Any, time: Any, offset: Any) -> None:
    buffer += _pad(time.second, WIDTH_TWO, m.padding)


def _subsecond(buffer: bytearray, m: mod.Subsecond, date: Any, time: Any, offset: Any) -> None:
    digits = f"{time.nanosecond:09d}"
    count = m.digits.digit_count
    if count is None:
        buffer += (digits.rstrip("0") or "0").encode("ascii")
    else:
        buffer += digits[:count].encode("ascii")


def _offset_hour(buffer: bytearray, m: mod.OffsetHour, date: Any, time: Any, offset: Any) -> None:
    if offset.is_negative():
        buffer += b"-"
    elif m.sign_is_mandatory:
        buffer += b"+"
    buffer += _pad(abs(offset.hours), WIDTH_TWO, m.padding)


def _offset_minute(
    buffer: bytearray, m: mod.OffsetMinute, date: Any, time: Any, offset: Any
) -> None:
    buffer += _pad(abs(offset.minutes), WIDTH_TWO, m.padding)


def _offset_second(
    buffer: bytearray, m: mod.OffsetSecond, date: Any, time: Any, offset: Any
) -> None:
    buffer += _pad(abs(offset.seconds), WIDTH_TWO, m.padding)


_WRITERS: dict[ComponentKind, Writer] = {
    ComponentKind.DAY: _day,
    ComponentKind.MONTH: _month,
    ComponentKind.ORDINAL: _ordinal,
    ComponentKind.WEEKDAY: _weekday,
    ComponentKind.WEEK_NUMBER: _week_number,
    ComponentKind.YEAR: _year,
    ComponentKind.HOUR: _hour,
    ComponentKind.MINUTE: _minute,
    ComponentKind.PERIOD: _period,
    ComponentKind.SECOND: _second,
    ComponentKind.SUBSECOND: _subsecond,
    ComponentKind.OFFSET_HOUR: _offset_hour,
    ComponentKind.OFFSET_MINUTE: _offset_minute,
    ComponentKind.OFFSET_SECOND: _offset_second,
}
