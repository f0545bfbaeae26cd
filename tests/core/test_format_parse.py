from __future__ import annotations

import io

import pytest

from tempus.calendar import (
    Date,
    Month,
    OffsetDateTime,
    PrimitiveDateTime,
    Time,
    UtcOffset,
)
from tempus.core.components import (
    Component,
    ComponentItem,
    ComponentKind,
    CompoundItem,
    LiteralItem,
)
from tempus.core.errors import (
    ComponentRange,
    Format,
    InsufficientTypeInformation,
    InvalidComponent,
    InvalidFormatDescription,
    Parse,
    TryFromParsed,
    UnexpectedTrailingCharacters,
)
from tempus.core.formatting import format_into, format_value, required_capabilities
from tempus.core.grammar import parse_format_description


class _FailingWriter:
    def __init__(self) -> None:
        self.calls = 0

    def write(self, data: bytes) -> int:
        self.calls += 1
        raise OSError("disk full")


FRIDAY = Date(2021, Month.AUGUST, 27)


@pytest.mark.parametrize(
    ("value", "description", "expected"),
    [
        (Date(2021, 1, 2), "[day]/[month]/[year]", "02/01/2021"),
        (Date(2021, 1, 2), "[day padding:space]|[month padding:none]", " 2|1"),
        (Date(-44, 3, 15), "[year]", "-0044"),
        (Date(2021, 1, 2), "[year sign:mandatory]", "+2021"),
        (Date(-44, 3, 15), "[year repr:last_two]", "44"),
        (Date(5, 3, 15), "[year padding:none]", "5"),
        (Date(2018, 12, 31), "[year base:iso_week]-W[week_number]", "2019-W01"),
        (FRIDAY, "[month repr:long] [month repr:short]", "August Aug"),
        (FRIDAY, "[weekday] [weekday repr:short]", "Friday Fri"),
        (FRIDAY, "[weekday repr:sunday] [weekday repr:monday one_indexed:false]", "6 4"),
        (FRIDAY, "[ordinal]", "239"),
        (Date(2021, 2, 1), "[ordinal] [ordinal padding:none]", "032 32"),
        (
            Date(2021, 1, 1),
            "[week_number] [week_number repr:sunday] [week_number repr:monday]",
            "53 00 00",
        ),
        (Time(0, 5, 9), "[hour repr:12]:[minute]:[second] [period]", "12:05:09 AM"),
        (Time(13, 5), "[hour repr:12 padding:none][period case:lower]", "1pm"),
        (Time(12, 0), "[hour repr:12] [period]", "12 PM"),
        (Time(1, 2, 3, 120_000_000), "[subsecond]", "12"),
        (Time(1, 2, 3, 120_000_000), "[subsecond digits:3]", "120"),
        (Time(1, 2, 3, 987_654_321), "[subsecond digits:2]", "98"),
        (Time(1, 2, 3), "[subsecond]", "0"),
        (Time(1, 2, 3, 5), "[subsecond]", "000000005"),
        (UtcOffset(-5, -30), "[offset_hour]:[offset_minute]", "-05:30"),
        (UtcOffset(5, 30), "[offset_hour sign:mandatory]:[offset_minute]", "+05:30"),
        (UtcOffset(5, 30), "[offset_hour]", "05"),
        (UtcOffset(0, -30), "[offset_hour]:[offset_minute]", "-00:30"),
        (UtcOffset(1, 2, 3), "[offset_hour]:[offset_minute]:[offset_second]", "01:02:03"),
    ],
)
def test_format(value: object, description: str, expected: str) -> None:
    assert value.format(parse_format_description(description)) == expected
    assert value.format(description) == expected


def test_format_combined_values() -> None:
    date, time, offset = FRIDAY, Time(13, 5, 9, 500_000_000), UtcOffset(-3)
    description = "[year]-[month]-[day] [hour]:[minute]:[second].[subsecond] [offset_hour]"
    assert PrimitiveDateTime(date, time).format("[year]-[month]-[day] [hour]") == "2021-08-27 13"
    assert OffsetDateTime(date, time, offset).format(description) == (
        "2021-08-27 13:05:09.5 -03"
    )


def test_format_accepts_single_items_and_nested_sequences() -> None:
    day = Component(ComponentKind.DAY)
    assert FRIDAY.format(day) == "27"
    assert FRIDAY.format([day, b"/", [Component(ComponentKind.MONTH)]]) == "27/08"


@pytest.mark.parametrize(
    ("value", "description"),
    [
        (Date(2021, 1, 1), "[hour]"),
        (Time(1, 0), "[day]"),
        (Time(1, 0), "[offset_hour]"),
        (UtcOffset(1), "[year]"),
        (PrimitiveDateTime(Date(2021, 1, 1), Time(0, 0)), "[offset_minute]"),
    ],
)
def test_insufficient_type_information(value: object, description: str) -> None:
    buffer = io.BytesIO()
    with pytest.raises(Format) as info:
        value.format_into(buffer, description)
    assert isinstance(info.value.inner, InsufficientTypeInformation)
    assert info.value.__cause__ is None
    assert buffer.getvalue() == b""


def test_required_capabilities_include_compound_items() -> None:
    items = (
        LiteralItem(b"x"),
        CompoundItem([ComponentItem(Component(ComponentKind.HOUR)), LiteralItem(b":")]),
        ComponentItem(Component(ComponentKind.DAY)),
    )
    assert {c.value for c in required_capabilities(items)} == {"date", "time"}


def test_format_into_returns_byte_count() -> None:
    buffer = io.BytesIO()
    assert format_into(buffer, "[month repr:long] [day]", FRIDAY) == 9
    assert buffer.getvalue() == b"August 27"
    assert format_value(FRIDAY, "[year]") == "2021"


def test_format_into_wraps_os_error() -> None:
    writer = _FailingWriter()
    with pytest.raises(Format) as info:
        FRIDAY.format_into(writer, "[year]")
    assert writer.calls == 1
    io_error = info.value.into_io_error()
    assert isinstance(io_error, OSError)
    assert info.value.__cause__ is io_error
    assert str(info.value) == "disk full"


def test_invalid_description_text_while_formatting() -> None:
    buffer = io.BytesIO()
    with pytest.raises(InvalidFormatDescription):
        format_value(FRIDAY, "[year")
    with pytest.raises(InvalidFormatDescription):
        format_into(buffer, "[year", FRIDAY)
    assert buffer.getvalue() == b""


def test_format_value_keeps_non_utf8_literals() -> None:
    text = format_value(FRIDAY, b"\xff[year]")
    assert text == "\udcff2021"
    assert Date.parse(text + "-08-27", b"\xff[year]-[month]-[day]") == FRIDAY


# ── parse ────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("cls", "text", "description", "expected"),
    [
        (Date, "2021-08-27", "[year]-[month]-[day]", FRIDAY),
        (Date, "Aug 7, 2021", "[month repr:short] [day padding:none], [year]", Date(2021, 8, 7)),
        (Date, "2021-239", "[year]-[ordinal]", FRIDAY),
        (
            Date,
            "2019-W01-1",
            "[year base:iso_week]-W[week_number]-[weekday repr:monday]",
            Date(2018, 12, 31),
        ),
        (Date, "Friday, 2021-08-27", "[weekday], [year]-[month]-[day]", FRIDAY),
        (Time, "12:05 AM", "[hour repr:12]:[minute] [period]", Time(0, 5)),
        (Time, "9pm", "[hour repr:12 padding:none][period case:lower]", Time(21, 0)),
        (Time, "13:05:09.25", "[hour]:[minute]:[second].[subsecond]", Time(13, 5, 9, 250_000_000)),
        (UtcOffset, "-00:30", "[offset_hour]:[offset_minute]", UtcOffset(0, -30)),
        (UtcOffset, "+05", "[offset_hour sign:mandatory]", UtcOffset(5)),
        (
            PrimitiveDateTime,
            "2021-08-27 13:05",
            "[year]-[month]-[day] [hour]:[minute]",
            PrimitiveDateTime(FRIDAY, Time(13, 5)),
        ),
        (
            OffsetDateTime,
            "2021-08-27 13:05 -03:00",
            "[year]-[month]-[day] [hour]:[minute] [offset_hour]:[offset_minute]",
            OffsetDateTime(FRIDAY, Time(13, 5), UtcOffset(-3)),
        ),
    ],
)
def test_parse(cls: type, text: str, description: str, expected: object) -> None:
    assert cls.parse(text, description) == expected
    assert cls.parse(text.encode("utf-8"), parse_format_description(description)) == expected


@pytest.mark.parametrize(
    "description",
    [
        "[year]-[month]-[day]",
        "[day padding:space] [month repr:long] [year sign:mandatory]",
        "[year repr:full padding:none]/[ordinal padding:none]",
        "[weekday repr:short] [year]-[month]-[day]",
    ],
)
def test_format_then_parse_date(description: str) -> None:
    for date in (FRIDAY, Date(2000, 2, 29), Date(1, 1, 1), Date(-752, 4, 21)):
        assert Date.parse(date.format(description), description) == date


PADDINGS = ["zero", "space", "none"]


@pytest.mark.parametrize("padding", PADDINGS)
@pytest.mark.parametrize(
    "value",
    [
        OffsetDateTime(Date(2021, 8, 7), Time(1, 2, 3), UtcOffset(-5, -3, -2)),
        OffsetDateTime(Date(-7, 1, 9), Time(13, 45, 9), UtcOffset(0, -30)),
        OffsetDateTime(Date(987, 12, 31), Time(0, 0, 0), UtcOffset(9, 30, 59)),
        OffsetDateTime(FRIDAY, Time(23, 59, 59), UtcOffset.UTC),
    ],
)
def test_padded_offset_datetime_round_trip(padding: str, value: OffsetDateTime) -> None:
    description = (
        f"[year padding:{padding}]-[month padding:{padding}]-[day padding:{padding}]"
        f"T[hour padding:{padding}]:[minute padding:{padding}]:[second padding:{padding}]"
        f" [offset_hour padding:{padding}]:[offset_minute padding:{padding}]"
        f":[offset_second padding:{padding}]"
    )
    assert OffsetDateTime.parse(value.format(description), description) == value


@pytest.mark.parametrize("padding", PADDINGS)
@pytest.mark.parametrize("time", [Time(0, 5), Time(9, 7), Time(12, 0), Time(13, 45)])
def test_padded_twelve_hour_round_trip(padding: str, time: Time) -> None:
    description = f"[hour repr:12 padding:{padding}]:[minute padding:{padding}] [period]"
    assert Time.parse(time.format(description), description) == time


@pytest.mark.parametrize("padding", PADDINGS)
@pytest.mark.parametrize(
    "template",
    [
        "[year base:iso_week padding:{p}]-W[week_number padding:{p}]-[weekday repr:monday]",
        "[year padding:{p}] [week_number repr:sunday padding:{p}] [weekday]",
        "[year padding:{p}] [week_number repr:monday padding:{p}] [weekday]",
        "[year padding:{p}]/[ordinal padding:{p}]",
    ],
)
def test_padded_week_and_ordinal_round_trip(padding: str, template: str) -> None:
    description = template.format(p=padding)
    for date in (Date(2018, 12, 31), Date(2021, 1, 1), Date(2021, 1, 3), Date(2017, 12, 30)):
        assert Date.parse(date.format(description), description) == date


def test_trailing_characters() -> None:
    with pytest.raises(Parse) as info:
        Date.parse("2021-08-27x", "[year]-[month]-[day]")
    assert isinstance(info.value.inner, UnexpectedTrailingCharacters)
    assert info.value.__cause__ is None


def test_component_error_is_named() -> None:
    with pytest.raises(Parse) as info:
        Date.parse("2021-W99-1", "[year base:iso_week]-W[week_number padding:none]-[weekday]")
    assert InvalidComponent.try_from(info.value).name == "weekday"
    assert str(info.value) == "the 'weekday' component could not be parsed"


def test_range_error_after_matching() -> None:
    with pytest.raises(Parse) as info:
        Date.parse("2021-02-29", "[year]-[month]-[day]")
    assert isinstance(info.value.inner, TryFromParsed)
    assert ComponentRange.try_from(info.value).name == "day"


def test_insufficient_information_while_parsing() -> None:
    with pytest.raises(Parse) as info:
        Date.parse("2021", "[year]")
    assert str(info.value) == (
        "the `Parsed` struct did not include enough information to construct the type"
    )
    resolution = info.value.inner
    assert isinstance(resolution, TryFromParsed)
    assert info.value.__cause__ is resolution
    assert resolution.__cause__ is None


def test_inconsistent_information_while_parsing_has_no_cause() -> None:
    with pytest.raises(Parse) as info:
        Date.parse("2021-08-27 Mon", "[year]-[month]-[day] [weekday repr:short]")
    assert isinstance(info.value.inner, TryFromParsed)
    assert info.value.inner.inner.name == "weekday"
    assert info.value.inner.__cause__ is None


def test_invalid_description_text_while_parsing() -> None:
    with pytest.raises(Parse) as info:
        Date.parse("2021", "[year")
    assert isinstance(info.value.inner, InvalidFormatDescription)
    assert info.value.inner.index == 0
