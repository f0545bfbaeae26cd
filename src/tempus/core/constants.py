"""
Fixed name tables and field widths shared by the formatter and the parser.

This module is zero-IO and uses only the Python standard library.

Notes:
    - Name tables are indexed by ``Month`` value minus one and by ``Weekday`` value
      (days from Monday).
    - Widths are the fixed digit counts used by ``padding:zero`` and ``padding:space``.
"""

from __future__ import annotations

__all__ = [
    "MONTH_NAMES_LONG",
    "MONTH_NAMES_SHORT",
    "WEEKDAY_NAMES_LONG",
    "WEEKDAY_NAMES_SHORT",
    "PERIOD_NAMES_UPPER",
    "PERIOD_NAMES_LOWER",
    "WIDTH_TWO",
    "WIDTH_ORDINAL",
    "WIDTH_YEAR",
    "NANOS_PER_SECOND",
]

MONTH_NAMES_LONG: tuple[bytes, ...] = (
    b"January",
    b"February",
    b"March",
    b"April",
    b"May",
    b"June",
    b"July",
    b"August",
    b"September",
    b"October",
    b"November",
    b"December",
)
MONTH_NAMES_SHORT: tuple[bytes, ...] = tuple(name[:3] for name in MONTH_NAMES_LONG)

WEEKDAY_NAMES_LONG: tuple[bytes, ...] = (
    b"Monday",
    b"Tuesday",
    b"Wednesday",
    b"Thursday",
    b"Friday",
    b"Saturday",
    b"Sunday",
)
WEEKDAY_NAMES_SHORT: tuple[bytes, ...] = tuple(name[:3] for name in WEEKDAY_NAMES_LONG)

# Index 0 = before noon.
PERIOD_NAMES_UPPER: tuple[bytes, bytes] = (b"AM", b"PM")
PERIOD_NAMES_LOWER: tuple[bytes, bytes] = (b"am", b"pm")

# Day, month, hour, minute, second, week number and every offset part.
WIDTH_TWO: int = 2
WIDTH_ORDINAL: int = 3
WIDTH_YEAR: int = 4

NANOS_PER_SECOND: int = 1_000_000_000
