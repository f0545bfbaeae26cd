"""
Format-description grammar: compile text into format items and render items back.

Grammar
-------
- Text outside brackets is a literal, emitted as maximal runs of bytes.
- ``[[`` is an escaped literal ``[``.
- ``[name key:value key:value ...]`` names one component followed by whitespace-separated
  modifiers; leading and trailing whitespace inside the brackets is ignored. A repeated
  key overrides the earlier one.

Byte offsets into the UTF-8 encoded description are tracked throughout; every
InvalidFormatDescription carries the 0-based index of the offending byte.

| Component      | Modifier tokens                                                        |
|----------------|------------------------------------------------------------------------|
| day            | padding:{space,zero,none}                                              |
| hour           | padding, repr:{24,12}                                                  |
| minute         | padding                                                                |
| month          | padding, repr:{numerical,long,short}, case_sensitive:{true,false}      |
| offset_hour    | padding, sign:{automatic,mandatory}                                    |
| offset_minute  | padding                                                                |
| offset_second  | padding                                                                |
| ordinal        | padding                                                                |
| period         | case:{upper,lower}, case_sensitive                                     |
| second         | padding                                                                |
| subsecond      | digits:{1,...,9,1+}                                                    |
| weekday        | repr:{short,long,sunday,monday}, one_indexed:{true,false}, case_sensitive |
| week_number    | padding, repr:{iso,sunday,monday}                                      |
| year           | padding, repr:{full,last_two}, base:{calendar,iso_week}, sign          |

Examples
--------
>>> from tempus.core.grammar import parse_format_description, describe
>>> items = parse_format_description("[year]-[month]-[day]")
>>> len(items)
5
>>> parse_format_description(describe(items)) == items
True
>>> parse_format_description("foo[[bar")
(LiteralItem(b'foo'), LiteralItem(b'['), LiteralItem(b'bar'))
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from functools import lru_cache
from typing import Any, Final

from tempus.config import get_settings

from .components import (
    Component,
    ComponentItem,
    ComponentKind,
    CompoundItem,
    FormatItem,
    LiteralItem,
)
from .errors import (
    InvalidComponentName,
    InvalidModifier,
    MissingComponentName,
    UnclosedOpeningBracket,
)
from .modifiers import MonthRepr, Padding, SubsecondDigits, WeekdayRepr, WeekNumberRepr, YearRepr

__all__ = [
    "parse_format_description",
    "cached_format_description",
    "clear_description_cache",
    "describe",
]

logger = logging.getLogger(__name__)

_WHITESPACE: Final[bytes] = b" \t\n\r\x0b\x0c"

_PADDING: Final[dict[str, Any]] = {
    "space": Padding.SPACE,
    "zero": Padding.ZERO,
    "none": Padding.NONE,
}
_BOOL: Final[dict[str, Any]] = {"true": True, "false": False}
_SIGN: Final[dict[str, Any]] = {"automatic": False, "mandatory": True}

# component -> grammar key -> (record field, grammar value -> field value)
_MODIFIER_TOKENS: Final[dict[ComponentKind, dict[str, tuple[str, dict[str, Any]]]]] = {
    ComponentKind.DAY: {"padding": ("padding", _PADDING)},
    ComponentKind.HOUR: {
        "padding": ("padding", _PADDING),
        "repr": ("is_12_hour_clock", {"24": False, "12": True}),
    },
    ComponentKind.MINUTE: {"padding": ("padding", _PADDING)},
    ComponentKind.MONTH: {
        "padding": ("padding", _PADDING),
        "repr": ("repr", {member.value: member for member in MonthRepr}),
        "case_sensitive": ("case_sensitive", _BOOL),
    },
    ComponentKind.OFFSET_HOUR: {
        "padding": ("padding", _PADDING),
        "sign": ("sign_is_mandatory", _SIGN),
    },
    ComponentKind.OFFSET_MINUTE: {"padding": ("padding", _PADDING)},
    ComponentKind.OFFSET_SECOND: {"padding": ("padding", _PADDING)},
    ComponentKind.ORDINAL: {"padding": ("padding", _PADDING)},
    ComponentKind.PERIOD: {
        "case": ("is_uppercase", {"upper": True, "lower": False}),
        "case_sensitive": ("case_sensitive", _BOOL),
    },
    ComponentKind.SECOND: {"padding": ("padding", _PADDING)},
    ComponentKind.SUBSECOND: {
        "digits": (
            "digits",
            {
                **{str(member.digit_count): member for member in SubsecondDigits if member.digit_count},
                "1+": SubsecondDigits.ONE_OR_MORE,
            },
        ),
    },
    ComponentKind.WEEKDAY: {
        "repr": ("repr", {member.value: member for member in WeekdayRepr}),
        "one_indexed": ("one_indexed", _BOOL),
        "case_sensitive": ("case_sensitive", _BOOL),
    },
    ComponentKind.WEEK_NUMBER: {
        "padding": ("padding", _PADDING),
        "repr": ("repr", {member.value: member for member in WeekNumberRepr}),
    },
    ComponentKind.YEAR: {
        "padding": ("padding", _PADDING),
        "repr": ("repr", {member.value: member for member in YearRepr}),
        "base": ("iso_week_based", {"calendar": False, "iso_week": True}),
        "sign": ("sign_is_mandatory", _SIGN),
    },
}


def parse_format_description(text: str | bytes) -> tuple[FormatItem, ...]:
    """
    Compile a format description into format items.

    Args:
        text (str | bytes): Description; ``str`` input is encoded as UTF-8, with lone
            surrogate escapes mapped back to the raw bytes they stand for.

    Returns:
        tuple[FormatItem, ...]: Literal and component items in input order.

    Raises:
        UnclosedOpeningBracket: A ``[`` has no matching ``]``.
        MissingComponentName: Brackets are empty or hold only whitespace.
        InvalidComponentName: The bracketed name is not a component.
        InvalidModifier: A modifier is not valid for the named component.
    """
    data = text.encode("utf-8", "surrogateescape") if isinstance(text, str) else bytes(text)
    items: list[FormatItem] = []
    literal_start = 0
    index = 0
    while index < len(data):
        if data[index] != ord("["):
            index += 1
            continue
        if index > literal_start:
            items.append(LiteralItem(data[literal_start:index]))
        if data[index + 1 : index + 2] == b"[":
            items.append(LiteralItem(b"["))
            index += 2
        else:
            close = data.find(b"]", index)
            if close < 0:
                raise UnclosedOpeningBracket(index)
            items.append(ComponentItem(_parse_component(data, index + 1, close)))
            index = close + 1
        literal_start = index
    if literal_start < len(data):
        items.append(LiteralItem(data[literal_start:]))

    logger.debug("compiled format description into %d items", len(items))
    return tuple(items)


def _skip_whitespace(data: bytes, index: int, end: int) -> int:
    while index < end and data[index] in _WHITESPACE:
        index += 1
    return index


def _find_whitespace(data: bytes, index: int, end: int) -> int:
    while index < end and data[index] not in _WHITESPACE:
        index += 1
    return index


def _parse_component(data: bytes, start: int, end: int) -> Component:
    # [start, end) is the text between the brackets.
    index = _skip_whitespace(data, start, end)
    name_end = _find_whitespace(data, index, end)
    name = data[index:name_end].decode("utf-8", errors="replace")
    if not name:
        raise MissingComponentName(index)
    try:
        kind = ComponentKind(name)
    except ValueError:
        raise InvalidComponentName(name, index) from None

    tokens = _MODIFIER_TOKENS[kind]
    options: dict[str, Any] = {}
    index = _skip_whitespace(data, name_end, end)
    while index < end:
        token_end = _find_whitespace(data, index, end)
        token = data[index:token_end].decode("utf-8", errors="replace")
        key, _, value = token.partition(":")
        try:
            field, choices = tokens[key]
            options[field] = choices[value]
        except KeyError:
            raise InvalidModifier(token, index) from None
        index = _skip_whitespace(data, token_end, end)

    return Component(kind, kind.modifier_type(**options))


# ============================================================================
# Rendering and caching
# ============================================================================


def describe(items: FormatItem | Iterable[FormatItem]) -> str:
    """
    Render format items back to canonical description text.

    Every modifier is written explicitly and ``[`` in literals is escaped, so compiling
    the result yields the same items for any compiled description. Literal bytes that are
    not valid UTF-8 come back as surrogate escapes (``"surrogateescape"``). Compound items
    are flattened.
    """
    return "".join(_describe_item(item) for item in _flatten(items))


def _flatten(items: FormatItem | Iterable[FormatItem]) -> Iterator[FormatItem]:
    if isinstance(items, CompoundItem):
        items = items.items
    elif isinstance(items, FormatItem):
        yield items
        return
    for item in items:
        yield from _flatten(item)


def _describe_item(item: FormatItem) -> str:
    if isinstance(item, LiteralItem):
        return item.value.decode("utf-8", "surrogateescape").replace("[", "[[")
    component = item.to_component()
    tokens = [component.kind.value]
    for key, (field, choices) in _MODIFIER_TOKENS[component.kind].items():
        current = getattr(component.modifiers, field)
        token = next(
            text
            for text, value in choices.items()
            if type(value) is type(current) and value == current
        )
        tokens.append(f"{key}:{token}")
    return "[" + " ".join(tokens) + "]"


_cached_compile: Callable[[str | bytes], tuple[FormatItem, ...]] | None = None


def cached_format_description(text: str | bytes) -> tuple[FormatItem, ...]:
    """
    Compile ``text`` through an LRU cache.

    The cache size comes from ``TempusSettings.description_cache_size`` when first used;
    a size of 0 disables caching.
    """
    global _cached_compile
    if _cached_compile is None:
        size = get_settings().description_cache_size
        logger.debug("format description cache size: %d", size)
        _cached_compile = (
            lru_cache(maxsize=size)(parse_format_description) if size > 0 else parse_format_description
        )
    return _cached_compile(text)


def clear_description_cache() -> None:
    """Drop cached descriptions; the next call re-reads the configured cache size."""
    global _cached_compile
    _cached_compile = None
