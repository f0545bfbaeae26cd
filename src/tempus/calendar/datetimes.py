"""
Date-times with and without a UTC offset.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, BinaryIO, ClassVar

from tempus.core.components import Capability
from tempus.core.errors import IndeterminateOffset

from .date import Date
from .time import Time, UtcOffset

if TYPE_CHECKING:
    from tempus.core.parsed import Parsed

__all__ = ["PrimitiveDateTime", "OffsetDateTime"]


@dataclass(frozen=True, order=True)
class PrimitiveDateTime:
    """A date and a time with no offset attached."""

    FORMAT_CAPABILITIES: ClassVar[frozenset[Capability]] = frozenset(
        {Capability.DATE, Capability.TIME}
    )

    date: Date
    time: Time

    def assume_offset(self, offset: UtcOffset) -> OffsetDateTime:
        return OffsetDateTime(self.date, self.time, offset)

    def assume_utc(self) -> OffsetDateTime:
        return self.assume_offset(UtcOffset.UTC)

    def to_stdlib(self) -> _dt.datetime:
        return _dt.datetime.combine(self.date.to_stdlib(), self.time.to_stdlib())

    @classmethod
    def from_stdlib(cls, value: _dt.datetime) -> PrimitiveDateTime:
        return cls(Date.from_stdlib(value.date()), Time.from_stdlib(value.time()))

    def _format_parts(self) -> tuple[Any, Any, Any]:
        return self.date, self.time, None

    def format(self, description: Any) -> str:
        from tempus.core.formatting import format_value

        return format_value(self, description)

    def format_into(self, output: BinaryIO, description: Any) -> int:
        from tempus.core.formatting import format_into

        return format_into(output, description, self)

    @classmethod
    def parse(cls, text: str | bytes, description: Any) -> PrimitiveDateTime:
        from tempus.core.parsed import parse_value

        return parse_value(cls, text, description)

    @classmethod
    def from_parsed(cls, parsed: Parsed) -> PrimitiveDateTime:
        return parsed.to_primitive_datetime()


@dataclass(frozen=True)
class OffsetDateTime:
    """A date and a time at a known UTC offset."""

    FORMAT_CAPABILITIES: ClassVar[frozenset[Capability]] = frozenset(
        {Capability.DATE, Capability.TIME, Capability.OFFSET}
    )

    date: Date
    time: Time
    offset: UtcOffset

    def to_stdlib(self) -> _dt.datetime:
        return _dt.datetime.combine(
            self.date.to_stdlib(), self.time.to_stdlib(), tzinfo=self.offset.to_stdlib()
        )

    @classmethod
    def from_stdlib(cls, value: _dt.datetime) -> OffsetDateTime:
        """
        Convert an aware ``datetime.datetime``.

        Raises:
            IndeterminateOffset: If ``value`` is naive.
        """
        delta = value.utcoffset()
        if delta is None:
            raise IndeterminateOffset()
        return cls(
            Date.from_stdlib(value.date()),
            Time.from_stdlib(value.time()),
            UtcOffset.from_stdlib(delta),
        )

    def _format_parts(self) -> tuple[Any, Any, Any]:
        return self.date, self.time, self.offset

    def format(self, description: Any) -> str:
        from tempus.core.formatting import format_value

        return format_value(self, description)

    def format_into(self, output: BinaryIO, description: Any) -> int:
        from tempus.core.formatting import format_into

        return format_into(output, description, self)

    @classmethod
    def parse(cls, text: str | bytes, description: Any) -> OffsetDateTime:
        from tempus.core.parsed import parse_value

        return parse_value(cls, text, description)

    @classmethod
    def from_parsed(cls, parsed: Parsed) -> OffsetDateTime:
        return parsed.to_offset_datetime()
