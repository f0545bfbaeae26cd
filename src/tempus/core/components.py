"""
Component kinds and the compiled instruction representation (format items).

A compiled format description is a tuple of FormatItem values:

- LiteralItem: bytes emitted or matched verbatim.
- ComponentItem: one Component (kind + modifier record).
- CompoundItem: a nested run of items treated as a single item.

Responsibilities
- Define the closed set of component kinds, their grammar names and diagnostic names.
- Pair each kind with its modifier record type (see tempus.core.modifiers).
- Declare which value capability (date, time, offset) each kind reads when formatting.
- Provide cross-representation equality and typed narrowing between items.

Examples:
    >>> from tempus.core.components import Component, ComponentItem, ComponentKind
    >>> year = Component(ComponentKind.YEAR)
    >>> ComponentItem(year) == year
    True
    >>> ComponentItem(year).to_component() is year
    True
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel

from . import modifiers
from .errors import DifferentVariant

__all__ = [
    "Capability",
    "ComponentKind",
    "Component",
    "FormatItem",
    "LiteralItem",
    "ComponentItem",
    "CompoundItem",
]


class Capability(Enum):
    """Parts of a value a component may need in order to be formatted."""

    DATE = "date"
    TIME = "time"
    OFFSET = "offset"


class ComponentKind(Enum):
    """Closed set of components; values are the names used in format descriptions."""

    DAY = "day"
    MONTH = "month"
    ORDINAL = "ordinal"
    WEEKDAY = "weekday"
    WEEK_NUMBER = "week_number"
    YEAR = "year"
    HOUR = "hour"
    MINUTE = "minute"
    PERIOD = "period"
    SECOND = "second"
    SUBSECOND = "subsecond"
    OFFSET_HOUR = "offset_hour"
    OFFSET_MINUTE = "offset_minute"
    OFFSET_SECOND = "offset_second"

    @property
    def display_name(self) -> str:
        """Name used in diagnostics, e.g. "week number"."""
        return self.value.replace("_", " ")

    @property
    def modifier_type(self) -> type[BaseModel]:
        return _MODIFIER_TYPES[self]

    @property
    def requires(self) -> Capability:
        return _REQUIRES[self]


_MODIFIER_TYPES: dict[ComponentKind, type[BaseModel]] = {
    ComponentKind.DAY: modifiers.Day,
    ComponentKind.MONTH: modifiers.Month,
    ComponentKind.ORDINAL: modifiers.Ordinal,
    ComponentKind.WEEKDAY: modifiers.Weekday,
    ComponentKind.WEEK_NUMBER: modifiers.WeekNumber,
    ComponentKind.YEAR: modifiers.Year,
    ComponentKind.HOUR: modifiers.Hour,
    ComponentKind.MINUTE: modifiers.Minute,
    ComponentKind.PERIOD: modifiers.Period,
    ComponentKind.SECOND: modifiers.Second,
    ComponentKind.SUBSECOND: modifiers.Subsecond,
    ComponentKind.OFFSET_HOUR: modifiers.OffsetHour,
    ComponentKind.OFFSET_MINUTE: modifiers.OffsetMinute,
    ComponentKind.OFFSET_SECOND: modifiers.OffsetSecond,
}

_REQUIRES: dict[ComponentKind, Capability] = {
    kind: (
        Capability.DATE
        if kind
        in (
            ComponentKind.DAY,
            ComponentKind.MONTH,
            ComponentKind.ORDINAL,
            ComponentKind.WEEKDAY,
            ComponentKind.WEEK_NUMBER,
            ComponentKind.YEAR,
        )
        else Capability.OFFSET
        if kind.value.startswith("offset_")
        else Capability.TIME
    )
    for kind in ComponentKind
}


@dataclass(frozen=True)
class Component:
    """
    One component kind with its modifier record.

    Attributes:
        kind (ComponentKind): Which quantity this component reads or writes.
        modifiers (BaseModel): Record of type ``kind.modifier_type``; defaults to the
            record with every option at its documented default.

    Raises:
        TypeError: If ``modifiers`` is a record for a different kind.
    """

    kind: ComponentKind
    modifiers: Any = None

    def __post_init__(self) -> None:
        expected = self.kind.modifier_type
        if self.modifiers is None:
            object.__setattr__(self, "modifiers", expected())
        elif type(self.modifiers) is not expected:
            raise TypeError(
                f"{self.kind.value} takes {expected.__name__} modifiers, "
                f"got {type(self.modifiers).__name__}"
            )


class FormatItem:
    """Base class of the three item variants."""

    __slots__ = ()

    @staticmethod
    def from_value(value: Any) -> FormatItem:
        """Build the matching variant from bytes/str, a Component, or a sequence of items."""
        if isinstance(value, FormatItem):
            return value
        if isinstance(value, (bytes, bytearray)):
            return LiteralItem(bytes(value))
        if isinstance(value, str):
            return LiteralItem(value.encode("utf-8", "surrogateescape"))
        if isinstance(value, Component):
            return ComponentItem(value)
        if isinstance(value, Sequence):
            return CompoundItem(tuple(FormatItem.from_value(item) for item in value))
        raise TypeError(f"cannot build a format item from {type(value).__name__}")

    def to_component(self) -> Component:
        """
        Raises:
            DifferentVariant: If this item is not a ComponentItem.
        """
        raise DifferentVariant()

    def to_compound(self) -> tuple[FormatItem, ...]:
        """
        Raises:
            DifferentVariant: If this item is not a CompoundItem.
        """
        raise DifferentVariant()


class LiteralItem(FormatItem):
    __slots__ = ("value",)

    def __init__(self, value: bytes) -> None:
        self.value = bytes(value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LiteralItem):
            return self.value == other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash((LiteralItem, self.value))

    def __repr__(self) -> str:
        return f"LiteralItem({self.value!r})"


class ComponentItem(FormatItem):
    __slots__ = ("component",)

    def __init__(self, component: Component) -> None:
        self.component = component

    def to_component(self) -> Component:
        return self.component

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ComponentItem):
            return self.component == other.component
        if isinstance(other, Component):
            return self.component == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.component)

    def __repr__(self) -> str:
        return f"ComponentItem({self.component!r})"


class CompoundItem(FormatItem):
    __slots__ = ("items",)

    def __init__(self, items: Sequence[FormatItem]) -> None:
        self.items = tuple(items)

    def to_compound(self) -> tuple[FormatItem, ...]:
        return self.items

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CompoundItem):
            return self.items == other.items
        if isinstance(other, (tuple, list)):
            return self.items == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.items)

    def __repr__(self) -> str:
        return f"CompoundItem({list(self.items)!r})"
