from __future__ import annotations

import pytest

from tempus.calendar import Date
from tempus.core.errors import (
    ComponentRange,
    ConversionRange,
    DifferentVariant,
    Error,
    Format,
    IndeterminateOffset,
    InconsistentInformation,
    InsufficientInformation,
    InsufficientTypeInformation,
    InvalidComponent,
    InvalidComponentName,
    InvalidFormatComponent,
    InvalidFormatDescription,
    InvalidLiteral,
    InvalidModifier,
    MissingComponentName,
    Parse,
    ParseFromDescription,
    TryFromParsed,
    UnclosedOpeningBracket,
    UnexpectedTrailingCharacters,
)


def _component_range() -> ComponentRange:
    return ComponentRange("ordinal", 1, 366, 367, conditional_range=True)


@pytest.mark.parametrize(
    ("error", "text"),
    [
        (ComponentRange("hour", 0, 23, 24), "hour must be in the range 0..=23"),
        (
            ComponentRange("day", 1, 28, 30, conditional_range=True),
            "day must be in the range 1..=28, given values of other parameters",
        ),
        (ConversionRange(), "Source value is out of range for the target type"),
        (IndeterminateOffset(), "The system's UTC offset could not be determined"),
        (DifferentVariant(), "value was of a different variant than required"),
        (UnclosedOpeningBracket(0), "unclosed opening bracket at byte index 0"),
        (InvalidComponentName("foo", 1), "invalid component name `foo` at byte index 1"),
        (InvalidModifier("bar", 5), "invalid modifier `bar` at byte index 5"),
        (MissingComponentName(1), "missing component name at byte index 1"),
        (
            InsufficientTypeInformation(),
            "The type being formatted does not contain sufficient information to "
            "format a component.",
        ),
        (
            InvalidFormatComponent("year"),
            "The year component cannot be formatted into the requested format.",
        ),
        (InvalidLiteral(), "a character literal was not valid"),
        (InvalidComponent("week number"), "the 'week number' component could not be parsed"),
        (
            UnexpectedTrailingCharacters(),
            "unexpected trailing characters; the end of input was expected",
        ),
        (
            InsufficientInformation(),
            "the `Parsed` struct did not include enough information to construct the type",
        ),
        (
            InconsistentInformation("weekday"),
            "the `weekday` component is inconsistent with the other parsed components",
        ),
    ],
)
def test_leaf_display(error: Exception, text: str) -> None:
    assert str(error) == text


def test_container_display_delegates_to_inner() -> None:
    leaf = _component_range()
    for container in (TryFromParsed(leaf), Parse(leaf), Error(leaf), Error(TryFromParsed(leaf))):
        assert str(container) == str(leaf)


def test_cause_is_inner_error() -> None:
    leaf = _component_range()
    wrapped = TryFromParsed(leaf)
    assert wrapped.__cause__ is leaf
    assert Parse(wrapped).__cause__ is wrapped
    assert Error(wrapped).__cause__ is wrapped


@pytest.mark.parametrize(
    "container",
    [
        Parse(UnexpectedTrailingCharacters()),
        Error(UnexpectedTrailingCharacters()),
        TryFromParsed(InsufficientInformation()),
        TryFromParsed(InconsistentInformation("day")),
        Format(InsufficientTypeInformation()),
        Format(InvalidFormatComponent("offset_second")),
    ],
)
def test_causeless_leaves_have_no_cause(container: Exception) -> None:
    assert container.__cause__ is None


def test_parse_promotes_resolution_leaves_through_try_from_parsed() -> None:
    err = Parse(InsufficientInformation())
    assert isinstance(err.inner, TryFromParsed)
    assert isinstance(err.inner.inner, InsufficientInformation)


def test_error_flattens_parse() -> None:
    leaf = InvalidLiteral()
    err = Error(Parse(leaf))
    assert err.inner is leaf


def test_try_from_narrows_deeply() -> None:
    leaf = _component_range()
    err = Error(TryFromParsed(leaf))
    assert ComponentRange.try_from(err) is leaf
    assert TryFromParsed.try_from(err).inner is leaf
    parse = Parse.try_from(err)
    assert isinstance(parse, Parse)
    assert parse.inner.inner is leaf


def test_try_from_matching_base_kind() -> None:
    leaf = InvalidComponent("day")
    err = Error(Parse(leaf))
    assert ParseFromDescription.try_from(err) is leaf
    assert InvalidComponent.try_from(err) is leaf


def test_try_from_mismatch_raises_different_variant() -> None:
    err = Error(Parse(InvalidLiteral()))
    with pytest.raises(DifferentVariant):
        TryFromParsed.try_from(err)
    with pytest.raises(DifferentVariant):
        InvalidComponent.try_from(err)
    with pytest.raises(DifferentVariant):
        Format.try_from(Parse(UnexpectedTrailingCharacters()))


@pytest.mark.parametrize(
    "err",
    [
        Error(ComponentRange("day", 1, 28, 30, conditional_range=True)),
        Error(ConversionRange()),
        Error(IndeterminateOffset()),
        Error(InsufficientTypeInformation()),
    ],
)
def test_try_from_does_not_rebuild_around_unrelated_errors(err: Error) -> None:
    with pytest.raises(DifferentVariant):
        TryFromParsed.try_from(err)
    with pytest.raises(DifferentVariant):
        Parse.try_from(err)


def test_try_from_component_range_from_constructor() -> None:
    with pytest.raises(ComponentRange) as info:
        Date(2021, 2, 30)
    err = Error(info.value)
    assert ComponentRange.try_from(err) is info.value
    with pytest.raises(DifferentVariant):
        TryFromParsed.try_from(err)
    with pytest.raises(DifferentVariant):
        Parse.try_from(err)


def test_try_from_rebuilds_flattened_parse() -> None:
    leaf = InvalidLiteral()
    parse = Parse.try_from(Error(Parse(leaf)))
    assert isinstance(parse, Parse)
    assert parse.inner is leaf
    trailing = Parse.try_from(Error(UnexpectedTrailingCharacters()))
    assert isinstance(trailing.inner, UnexpectedTrailingCharacters)


def test_try_from_does_not_rebuild_inside_its_own_kind() -> None:
    with pytest.raises(DifferentVariant):
        Format.try_from(Error(TryFromParsed(_component_range())))
    with pytest.raises(DifferentVariant):
        TryFromParsed.try_from(Parse(InvalidComponent("day")))


def test_parse_holds_invalid_format_description() -> None:
    leaf = UnclosedOpeningBracket(3)
    err = Parse(leaf)
    assert InvalidFormatDescription.try_from(Error(err)) is leaf
    assert str(err) == "unclosed opening bracket at byte index 3"


def test_format_io_error_round_trip() -> None:
    io_error = OSError("disk full")
    err = Format(io_error)
    assert err.__cause__ is io_error
    assert err.into_io_error() is io_error
    assert Error(io_error).inner.into_io_error() is io_error
    with pytest.raises(DifferentVariant):
        Format(InsufficientTypeInformation()).into_io_error()


def test_container_rejects_unrelated_error() -> None:
    with pytest.raises(TypeError):
        TryFromParsed(InvalidLiteral())
    with pytest.raises(TypeError):
        Format(ValueError("nope"))


def test_errors_are_value_errors() -> None:
    assert isinstance(Parse(InvalidLiteral()), ValueError)
    assert isinstance(_component_range(), ValueError)
    assert isinstance(DifferentVariant(), TypeError)
