"""
Well-known formats with fixed layouts and rules of their own.

Currently provides RFC 3339 (``YYYY-MM-DDTHH:MM:SS[.fraction](Z|+HH:MM|-HH:MM)``).

Notes:
    - Formatting requires a value with a date, a time and an offset.
    - RFC 3339 cannot express years outside 0..=9999 or offsets with seconds; those
      raise ``Format(InvalidFormatComponent(...))`` naming the component.
    - Parsing accepts ``T``/``t`` as the separator, a fraction of 1 to 9 digits, and
      ``Z``/``z`` for UTC.

Examples:
    >>> from tempus.calendar import Date, OffsetDateTime, Time, UtcOffset
    >>> from tempus.core.well_known import RFC3339
    >>> value = OffsetDateTime(Date(2021, 1, 2), Time(3, 4, 5), UtcOffset.UTC)
    >>> value.format(RFC3339)
    '2021-01-02T03:04:05Z'
"""

from __future__ import annotations

from typing import Any, ClassVar

from .components import Capability, Component, ComponentKind
from .errors import Format, InvalidComponent, InvalidFormatComponent, InvalidLiteral
from .grammar import parse_format_description
from .modifiers import OffsetHour

__all__ = ["WellKnownFormat", "Rfc3339", "RFC3339"]

_DATE = parse_format_description("[year]-[month]-[day]")
_TIME = parse_format_description("[hour]:[minute]:[second]")
_SUBSECOND = Component(ComponentKind.SUBSECOND)
_OFFSET = (
    Component(ComponentKind.OFFSET_HOUR, OffsetHour(sign_is_mandatory=True)),
    *parse_format_description(":[offset_minute]"),
)


class WellKnownFormat:
    """
    Base class for formats that are not expressed as format items.

    Subclasses declare the capabilities they read in ``requires`` and implement
    ``render`` and ``parse_into``.
    """

    requires: ClassVar[frozenset[Capability]] = frozenset()

    def render(self, date: Any, time: Any, offset: Any) -> bytes:
        raise NotImplementedError

    def parse_into(self, parsed: Any, data: bytes) -> bytes:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Rfc3339(WellKnownFormat):
    """The RFC 3339 date-time layout."""

    requires = frozenset({Capability.DATE, Capability.TIME, Capability.OFFSET})

    def render(self, date: Any, time: Any, offset: Any) -> bytes:
        """
        Raises:
            Format: Wrapping InvalidFormatComponent("year") for years outside 0..=9999,
                or InvalidFormatComponent("offset_second") for offsets with seconds.
        """
        if not 0 <= date.year <= 9999:
            raise Format(InvalidFormatComponent("year"))
        if offset.seconds != 0:
            raise Format(InvalidFormatComponent("offset_second"))

        text = (
            f"{date.year:04d}-{int(date.month):02d}-{date.day:02d}"
            f"T{time.hour:02d}:{time.minute:02d}:{time.second:02d}"
        )
        if time.nanosecond:
            text += "." + f"{time.nanosecond:09d}".rstrip("0")
        if offset.is_utc():
            text += "Z"
        else:
            text += (
                f"{'-' if offset.is_negative() else '+'}"
                f"{abs(offset.hours):02d}:{abs(offset.minutes):02d}"
            )
        return text.encode("ascii")

    def parse_into(self, parsed: Any, data: bytes) -> bytes:
        """
        Raises:
            InvalidComponent: Naming the component that could not be read.
            InvalidLiteral: If a separator is missing.
        """
        if data[:1] in (b"+", b"-"):
            raise InvalidComponent(ComponentKind.YEAR.display_name)
        data = parsed.parse_items(data, _DATE)
        if data[:1] not in (b"T", b"t"):
            raise InvalidLiteral()
        data = parsed.parse_items(data[1:], _TIME)
        if data[:1] == b".":
            data = parsed.parse_component(data[1:], _SUBSECOND)
        if data[:1] in (b"Z", b"z"):
            parsed.offset_hour = 0
            parsed.offset_minute = 0
            parsed.offset_is_negative = False
            return data[1:]
        return parsed.parse_items(data, _OFFSET)


RFC3339 = Rfc3339()
