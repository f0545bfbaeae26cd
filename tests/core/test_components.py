from __future__ import annotations

import pytest
from pydantic import ValidationError

from tempus.core import modifiers as mod
from tempus.core.components import (
    Capability,
    Component,
    ComponentItem,
    ComponentKind,
    CompoundItem,
    FormatItem,
    LiteralItem,
)
from tempus.core.errors import DifferentVariant


def test_component_item_equals_bare_component() -> None:
    day = Component(ComponentKind.DAY)
    assert ComponentItem(day) == day
    assert hash(ComponentItem(day)) == hash(day)


def test_compound_item_equals_bare_sequence() -> None:
    items = (LiteralItem(b"a"), ComponentItem(Component(ComponentKind.YEAR)))
    assert CompoundItem(items) == items
    assert CompoundItem(items) == list(items)


def test_literal_never_equals_component_or_compound() -> None:
    literal = LiteralItem(b"day")
    assert literal != ComponentItem(Component(ComponentKind.DAY))
    assert literal != CompoundItem([literal])
    assert ComponentItem(Component(ComponentKind.DAY)) != CompoundItem([])


def test_to_component_and_to_compound() -> None:
    year = Component(ComponentKind.YEAR)
    assert ComponentItem(year).to_component() is year
    compound = CompoundItem([ComponentItem(year)])
    assert compound.to_compound() == (ComponentItem(year),)

    with pytest.raises(DifferentVariant):
        LiteralItem(b"x").to_component()
    with pytest.raises(DifferentVariant):
        ComponentItem(year).to_compound()
    with pytest.raises(DifferentVariant):
        compound.to_component()


def test_from_value_builds_each_variant() -> None:
    year = Component(ComponentKind.YEAR)
    assert FormatItem.from_value(b"-") == LiteralItem(b"-")
    assert FormatItem.from_value("-") == LiteralItem(b"-")
    assert FormatItem.from_value(year) == ComponentItem(year)
    assert FormatItem.from_value([year, b"-"]) == CompoundItem(
        [ComponentItem(year), LiteralItem(b"-")]
    )
    with pytest.raises(TypeError):
        FormatItem.from_value(3)


def test_component_defaults_and_type_check() -> None:
    assert Component(ComponentKind.MONTH).modifiers == mod.Month()
    with pytest.raises(TypeError):
        Component(ComponentKind.MONTH, mod.Day())


def test_modifier_records_are_frozen_and_strict() -> None:
    record = mod.Day()
    with pytest.raises(ValidationError):
        record.padding = mod.Padding.NONE
    with pytest.raises(ValidationError):
        mod.Day(width=2)


@pytest.mark.parametrize(
    ("kind", "capability"),
    [
        (ComponentKind.DAY, Capability.DATE),
        (ComponentKind.WEEK_NUMBER, Capability.DATE),
        (ComponentKind.YEAR, Capability.DATE),
        (ComponentKind.PERIOD, Capability.TIME),
        (ComponentKind.SUBSECOND, Capability.TIME),
        (ComponentKind.OFFSET_HOUR, Capability.OFFSET),
        (ComponentKind.OFFSET_SECOND, Capability.OFFSET),
    ],
)
def test_component_requirements(kind: ComponentKind, capability: Capability) -> None:
    assert kind.requires is capability


def test_display_names() -> None:
    assert ComponentKind.WEEK_NUMBER.display_name == "week number"
    assert ComponentKind.OFFSET_HOUR.display_name == "offset hour"
    assert ComponentKind.DAY.display_name == "day"


def test_subsecond_digit_counts() -> None:
    assert mod.SubsecondDigits.ONE.digit_count == 1
    assert mod.SubsecondDigits.NINE.digit_count == 9
    assert mod.SubsecondDigits.ONE_OR_MORE.digit_count is None
