"""
Clock times and UTC offsets.

Both types are immutable and validated on construction; out-of-range fields raise
``tempus.core.errors.ComponentRange`` naming the field.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, BinaryIO, ClassVar

from tempus.core.components import Capability
from tempus.core.errors import ComponentRange

if TYPE_CHECKING:
    from tempus.core.parsed import Parsed

__all__ = ["Time", "UtcOffset"]


def _ensure_in_range(name: str, minimum: int, maximum: int, value: int) -> None:
    if not minimum <= value <= maximum:
        raise ComponentRange(name, minimum, maximum, value)


@dataclass(frozen=True, order=True)
class Time:
    """
    A clock time with nanosecond precision.

    Attributes:
        hour (int): In 0..=23.
        minute (int): In 0..=59.
        second (int): In 0..=59.
        nanosecond (int): In 0..=999_999_999.
    """

    FORMAT_CAPABILITIES: ClassVar[frozenset[Capability]] = frozenset({Capability.TIME})
    MIDNIGHT: ClassVar[Time]

    hour: int
    minute: int
    second: int = 0
    nanosecond: int = 0

    def __post_init__(self) -> None:
        _ensure_in_range("hour", 0, 23, self.hour)
        _ensure_in_range("minute", 0, 59, self.minute)
        _ensure_in_range("second", 0, 59, self.second)
        _ensure_in_range("nanosecond", 0, 999_999_999, self.nanosecond)

    @classmethod
    def from_hms(cls, hour: int, minute: int, second: int) -> Time:
        return cls(hour, minute, second)

    @classmethod
    def from_hms_nano(cls, hour: int, minute: int, second: int, nanosecond: int) -> Time:
        return cls(hour, minute, second, nanosecond)

    def to_stdlib(self) -> _dt.time:
        """Convert to ``datetime.time``; sub-microsecond precision is truncated."""
        return _dt.time(self.hour, self.minute, self.second, self.nanosecond // 1_000)

    @classmethod
    def from_stdlib(cls, value: _dt.time) -> Time:
        return cls(value.hour, value.minute, value.second, value.microsecond * 1_000)

    def _format_parts(self) -> tuple[Any, Any, Any]:
        return None, self, None

    def format(self, description: Any) -> str:
        from tempus.core.formatting import format_value

        return format_value(self, description)

    def format_into(self, output: BinaryIO, description: Any) -> int:
        from tempus.core.formatting import format_into

        return format_into(output, description, self)

    @classmethod
    def parse(cls, text: str | bytes, description: Any) -> Time:
        from tempus.core.parsed import parse_value

        return parse_value(cls, text, description)

    @classmethod
    def from_parsed(cls, parsed: Parsed) -> Time:
        return parsed.to_time()


Time.MIDNIGHT = Time(0, 0)


@dataclass(frozen=True)
class UtcOffset:
    """
    An offset from UTC.

    Attributes:
        hours (int): In -23..=23.
        minutes (int): In -59..=59.
        seconds (int): In -59..=59.

    Notes:
        All three parts carry the same sign. Smaller parts take the sign of the
        largest nonzero part, so ``UtcOffset(-1, 30)`` is one and a half hours west.
    """

    FORMAT_CAPABILITIES: ClassVar[frozenset[Capability]] = frozenset({Capability.OFFSET})
    UTC: ClassVar[UtcOffset]

    hours: int
    minutes: int = 0
    seconds: int = 0

    def __post_init__(self) -> None:
        _ensure_in_range("hours", -23, 23, self.hours)
        _ensure_in_range("minutes", -59, 59, self.minutes)
        _ensure_in_range("seconds", -59, 59, self.seconds)
        negative = self.hours < 0 or (self.hours == 0 and self.minutes < 0)
        sign = -1 if negative else 1
        if self.hours == 0 and self.minutes == 0:
            sign = -1 if self.seconds < 0 else 1
        object.__setattr__(self, "minutes", sign * abs(self.minutes))
        object.__setattr__(self, "seconds", sign * abs(self.seconds))

    @classmethod
    def from_hms(cls, hours: int, minutes: int, seconds: int) -> UtcOffset:
        return cls(hours, minutes, seconds)

    def is_negative(self) -> bool:
        return self.hours < 0 or self.minutes < 0 or self.seconds < 0

    def is_utc(self) -> bool:
        return self.hours == 0 and self.minutes == 0 and self.seconds == 0

    def whole_seconds(self) -> int:
        return self.hours * 3_600 + self.minutes * 60 + self.seconds

    def to_stdlib(self) -> _dt.timezone:
        return _dt.timezone(_dt.timedelta(seconds=self.whole_seconds()))

    @classmethod
    def from_whole_seconds(cls, seconds: int) -> UtcOffset:
        _ensure_in_range("seconds", -86_399, 86_399, seconds)
        sign = -1 if seconds < 0 else 1
        hours, rest = divmod(abs(seconds), 3_600)
        return cls(sign * hours, sign * (rest // 60), sign * (rest % 60))

    @classmethod
    def from_stdlib(cls, value: _dt.tzinfo | _dt.timedelta) -> UtcOffset:
        delta = value if isinstance(value, _dt.timedelta) else value.utcoffset(None)
        if delta is None:
            raise ValueError("tzinfo does not define a fixed UTC offset")
        return cls.from_whole_seconds(int(delta.total_seconds()))

    def _format_parts(self) -> tuple[Any, Any, Any]:
        return None, None, self

    def format(self, description: Any) -> str:
        from tempus.core.formatting import format_value

        return format_value(self, description)

    def format_into(self, output: BinaryIO, description: Any) -> int:
        from tempus.core.formatting import format_into

        return format_into(output, description, self)

    @classmethod
    def parse(cls, text: str | bytes, description: Any) -> UtcOffset:
        from tempus.core.parsed import parse_value

        return parse_value(cls, text, description)

    @classmethod
    def from_parsed(cls, parsed: Parsed) -> UtcOffset:
        return parsed.to_offset()


UtcOffset.UTC = UtcOffset(0)
