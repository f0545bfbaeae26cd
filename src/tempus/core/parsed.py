"""
Parsed: the accumulator filled by parse mode and consumed by the resolver.

Responsibilities
- Hold every quantity a component can produce as an optional, validated field.
- Drive parse mode: match literals, read component tokens, and commit the fields of a
  description only when every item of it matched.
- Resolve the accumulated fields into Date, Time, UtcOffset, PrimitiveDateTime and
  OffsetDateTime values, distinguishing missing information from contradicting
  information.

Field constraints
- Fields only bound what the tokens can hold (e.g. ``day >= 1``, ``hour_12`` in
  1..=12). Calendar bounds (month 13, hour 24, ordinal 367) are checked by the value
  types during resolution and surface as ComponentRange inside TryFromParsed.
- Assigning a field overwrites any earlier value (last write wins). ``with_`` returns
  a validated copy and raises ``pydantic.ValidationError`` on the first bad value.

Date resolution order (first complete set wins)
1. year + ordinal
2. year + month + day
3. iso_year + iso_week_number + weekday
4. year + sunday_week_number + weekday
5. year + monday_week_number + weekday

Examples:
    >>> from tempus.core.parsed import Parsed
    >>> parsed = Parsed().with_(year=2021).with_(ordinal=32)
    >>> parsed.to_date()
    Date(year=2021, month=<Month.FEBRUARY: 2>, day=1)
    >>> parsed.month is None
    True
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from tempus.calendar.date import Date, Month, Weekday
from tempus.calendar.datetimes import OffsetDateTime, PrimitiveDateTime
from tempus.calendar.time import Time, UtcOffset

from .components import Component, ComponentItem, CompoundItem, FormatItem, LiteralItem
from .errors import (
    ComponentRange,
    InconsistentInformation,
    InsufficientInformation,
    InvalidComponent,
    InvalidFormatDescription,
    InvalidLiteral,
    Parse,
    ParseFromDescription,
    TryFromParsed,
    UnexpectedTrailingCharacters,
)
from .grammar import cached_format_description
from .parsing import COMPONENT_READERS
from .well_known import WellKnownFormat

__all__ = ["Parsed", "parse_value"]

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


def _as_bytes(data: str | bytes | bytearray | memoryview) -> bytes:
    return data.encode("utf-8", "surrogateescape") if isinstance(data, str) else bytes(data)


class Parsed(BaseModel):
    """
    Optional fields discovered while parsing, plus the resolver over them.

    Attributes:
        year (int | None): Calendar year.
        year_last_two (int | None): Last two digits of the calendar year.
        iso_year (int | None): ISO week-numbering year.
        iso_year_last_two (int | None): Last two digits of the ISO year.
        month (Month | None): Month of the year.
        sunday_week_number (int | None): Week of the year, weeks starting on Sunday.
        monday_week_number (int | None): Week of the year, weeks starting on Monday.
        iso_week_number (int | None): ISO week of the ISO year.
        weekday (Weekday | None): Day of the week.
        ordinal (int | None): Day of the year.
        day (int | None): Day of the month.
        hour_24 (int | None): Hour on a 24-hour clock.
        hour_12 (int | None): Hour on a 12-hour clock.
        hour_12_is_pm (bool | None): Whether ``hour_12`` is after noon.
        minute (int | None): Minute of the hour.
        second (int | None): Second of the minute.
        subsecond (int | None): Fraction of the second, in nanoseconds.
        offset_hour (int | None): Signed whole hours of the UTC offset.
        offset_minute (int | None): Minutes of the UTC offset.
        offset_second (int | None): Seconds of the UTC offset.
        offset_is_negative (bool): Whether the offset was written with a ``-`` sign;
            keeps the sign of offsets such as ``-00:30``.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    year: int | None = Field(default=None, ge=-999_999, le=999_999)
    year_last_two: int | None = Field(default=None, ge=0, le=99)
    iso_year: int | None = Field(default=None, ge=-999_999, le=999_999)
    iso_year_last_two: int | None = Field(default=None, ge=0, le=99)
    month: Month | None = None
    sunday_week_number: int | None = Field(default=None, ge=0, le=99)
    monday_week_number: int | None = Field(default=None, ge=0, le=99)
    iso_week_number: int | None = Field(default=None, ge=1, le=99)
    weekday: Weekday | None = None
    ordinal: int | None = Field(default=None, ge=1, le=999)
    day: int | None = Field(default=None, ge=1, le=99)
    hour_24: int | None = Field(default=None, ge=0, le=99)
    hour_12: int | None = Field(default=None, ge=1, le=12)
    hour_12_is_pm: bool | None = None
    minute: int | None = Field(default=None, ge=0, le=99)
    second: int | None = Field(default=None, ge=0, le=99)
    subsecond: int | None = Field(default=None, ge=0, le=999_999_999)
    offset_hour: int | None = Field(default=None, ge=-99, le=99)
    offset_minute: int | None = Field(default=None, ge=-99, le=99)
    offset_second: int | None = Field(default=None, ge=-99, le=99)
    offset_is_negative: bool = False

    # ── builder ──────────────────────────────────────────────────────────

    def with_(self, **fields: Any) -> Parsed:
        """
        Return a validated copy with ``fields`` overwritten.

        Raises:
            pydantic.ValidationError: If a field is unknown or a value is out of bounds.
        """
        data = self.model_dump()
        data.update(fields)
        return type(self).model_validate(data)

    def _commit(self, source: Parsed, names: Iterable[str]) -> None:
        for name in names:
            setattr(self, name, getattr(source, name))

    # ── parse mode ───────────────────────────────────────────────────────

    def parse_literal(self, input: str | bytes, literal: bytes) -> bytes:
        """
        Match ``literal`` byte-for-byte at the start of ``input``.

        Raises:
            InvalidLiteral: If ``input`` does not start with ``literal``.
        """
        data = _as_bytes(input)
        if not data.startswith(literal):
            raise InvalidLiteral()
        return data[len(literal) :]

    def parse_component(self, input: str | bytes, component: Component) -> bytes:
        """
        Read one component token and store its fields.

        Returns:
            bytes: The input left after the token.

        Raises:
            InvalidComponent: If the input holds no valid token for ``component``;
                nothing is stored in that case.
        """
        data = _as_bytes(input)
        name = component.kind.display_name
        reading = COMPONENT_READERS[component.kind](data, component.modifiers)
        if reading is None:
            raise InvalidComponent(name)
        fields, remaining = reading
        try:
            updated = self.with_(**fields)
        except ValidationError:
            raise InvalidComponent(name) from None
        self._commit(updated, fields)
        return remaining

    def parse_item(self, input: str | bytes, item: FormatItem | Component) -> bytes:
        """Parse a single literal, component or compound item."""
        if isinstance(item, LiteralItem):
            return self.parse_literal(input, item.value)
        if isinstance(item, ComponentItem):
            return self.parse_component(input, item.component)
        if isinstance(item, Component):
            return self.parse_component(input, item)
        if isinstance(item, CompoundItem):
            return self.parse_items(input, item.items)
        raise TypeError(f"cannot parse with {type(item).__name__}")

    def parse_items(
        self, input: str | bytes, items: Iterable[FormatItem | Component]
    ) -> bytes:
        """
        Parse ``items`` in order.

        Fields are stored only if every item matched; on failure this Parsed is left as
        it was before the call.

        Raises:
            ParseFromDescription: The first item that did not match.
        """
        work = self.model_copy()
        remaining = _as_bytes(input)
        for item in items:
            remaining = work.parse_item(remaining, item)
        self._commit(work, type(self).model_fields)
        return remaining

    def parse_format(self, input: str | bytes, description: Any) -> bytes:
        """
        Parse ``input`` with any accepted description.

        ``description`` may be description text (compiled through the description
        cache), a single item or component, a sequence of items, or a well-known format.

        Raises:
            InvalidFormatDescription: If description text does not compile.
            ParseFromDescription: If the input does not match.
        """
        data = _as_bytes(input)
        if isinstance(description, WellKnownFormat):
            work = self.model_copy()
            remaining = description.parse_into(work, data)
            self._commit(work, type(self).model_fields)
            return remaining
        if isinstance(description, (str, bytes)):
            description = cached_format_description(description)
        if isinstance(description, (FormatItem, Component)):
            return self.parse_items(data, (description,))
        if isinstance(description, Sequence):
            return self.parse_items(data, [FormatItem.from_value(item) for item in description])
        raise TypeError(f"unsupported format description: {type(description).__name__}")

    # ── resolution ───────────────────────────────────────────────────────

    def _resolve(self, build: Callable[[], _T], what: str) -> _T:
        try:
            return build()
        except (ComponentRange, InsufficientInformation, InconsistentInformation) as exc:
            logger.debug("could not resolve %s: %s", what, exc)
            raise TryFromParsed(exc)

    def to_date(self) -> Date:
        """
        Resolve a Date.

        Raises:
            TryFromParsed: Wrapping InsufficientInformation when no complete set of
                fields is present, ComponentRange when a field is out of range, or
                InconsistentInformation when an extra field contradicts the date.
        """
        return self._resolve(self._build_date, "date")

    def to_time(self) -> Time:
        """
        Resolve a Time.

        The hour comes from ``hour_24``, else from ``hour_12`` with ``hour_12_is_pm``.
        An hour given with a period and nothing else is a full time; otherwise
        ``minute`` is required and ``second``/``subsecond`` default to 0.

        Raises:
            TryFromParsed: As for ``to_date``.
        """
        return self._resolve(self._build_time, "time")

    def to_offset(self) -> UtcOffset:
        """
        Resolve a UtcOffset from ``offset_hour`` and optional minutes and seconds.

        Raises:
            TryFromParsed: As for ``to_date``.
        """
        return self._resolve(self._build_offset, "offset")

    def to_primitive_datetime(self) -> PrimitiveDateTime:
        return PrimitiveDateTime(self.to_date(), self.to_time())

    def to_offset_datetime(self) -> OffsetDateTime:
        return OffsetDateTime(self.to_date(), self.to_time(), self.to_offset())

    def _build_date(self) -> Date:
        year = self.year
        if year is not None and self.ordinal is not None:
            date = Date.from_ordinal_date(year, self.ordinal)
        elif year is not None and self.month is not None and self.day is not None:
            date = Date.from_calendar_date(year, self.month, self.day)
        elif (
            self.iso_year is not None
            and self.iso_week_number is not None
            and self.weekday is not None
        ):
            date = Date.from_iso_week_date(self.iso_year, self.iso_week_number, self.weekday)
        elif year is not None and self.weekday is not None and self.sunday_week_number is not None:
            first = Date(year, Month.JANUARY, 1).weekday().number_days_from_sunday()
            date = Date.from_ordinal_date(
                year,
                self.sunday_week_number * 7
                + self.weekday.number_days_from_sunday()
                - (first or 7)
                + 1,
            )
        elif year is not None and self.weekday is not None and self.monday_week_number is not None:
            first = Date(year, Month.JANUARY, 1).weekday().number_days_from_monday()
            date = Date.from_ordinal_date(
                year,
                self.monday_week_number * 7
                + self.weekday.number_days_from_monday()
                - (first or 7)
                + 1,
            )
        else:
            raise InsufficientInformation()

        iso_year, iso_week = date.iso_year_week()
        expected = {
            "year": date.year,
            "year_last_two": abs(date.year) % 100,
            "iso_year": iso_year,
            "iso_year_last_two": abs(iso_year) % 100,
            "month": date.month,
            "day": date.day,
            "ordinal": date.ordinal(),
            "weekday": date.weekday(),
            "iso_week_number": iso_week,
            "sunday_week_number": date.sunday_based_week(),
            "monday_week_number": date.monday_based_week(),
        }
        for name, value in expected.items():
            given = getattr(self, name)
            if given is not None and given != value:
                raise InconsistentInformation(name)
        return date

    def _build_time(self) -> Time:
        if self.hour_24 is not None:
            hour = self.hour_24
        elif self.hour_12 is not None and self.hour_12_is_pm is not None:
            hour = self.hour_12 % 12 + (12 if self.hour_12_is_pm else 0)
        else:
            raise InsufficientInformation()

        if self.minute is not None:
            time = Time(hour, self.minute, self.second or 0, self.subsecond or 0)
        elif self.hour_24 is None and self.second is None and self.subsecond is None:
            time = Time(hour, 0)
        else:
            raise InsufficientInformation()

        if self.hour_24 is not None:
            if self.hour_12 is not None and self.hour_12 != (hour - 1) % 12 + 1:
                raise InconsistentInformation("hour_12")
            if self.hour_12_is_pm is not None and self.hour_12_is_pm != (hour >= 12):
                raise InconsistentInformation("hour_12_is_pm")
        return time

    def _build_offset(self) -> UtcOffset:
        if self.offset_hour is None:
            raise InsufficientInformation()
        sign = -1 if self.offset_is_negative or self.offset_hour < 0 else 1
        return UtcOffset(
            self.offset_hour,
            sign * abs(self.offset_minute or 0),
            sign * abs(self.offset_second or 0),
        )


def parse_value(cls: Any, text: str | bytes, description: Any) -> Any:
    """
    Parse ``text`` with ``description`` and build a ``cls`` value from the result.

    Args:
        cls: A value type exposing ``from_parsed`` (Date, Time, UtcOffset,
            PrimitiveDateTime or OffsetDateTime).
        text (str | bytes): Input; ``str`` is encoded as UTF-8.
        description: Anything ``Parsed.parse_format`` accepts.

    Raises:
        Parse: Wrapping the description, matching, trailing-input or resolution error.
    """
    parsed = Parsed()
    try:
        remaining = parsed.parse_format(text, description)
    except (ParseFromDescription, InvalidFormatDescription) as exc:
        logger.debug("parsing %s failed: %s", cls.__name__, exc)
        raise Parse(exc)
    if remaining:
        logger.debug("parsing %s left %d trailing bytes", cls.__name__, len(remaining))
        raise Parse(UnexpectedTrailingCharacters())
    try:
        return cls.from_parsed(parsed)
    except TryFromParsed as exc:
        raise Parse(exc)
