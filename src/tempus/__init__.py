"""
tempus: calendar values with a bracketed format-description language for formatting
and parsing.

Public API
----------
Date, Time, UtcOffset, PrimitiveDateTime, OffsetDateTime   Value types.
Month, Weekday                                             Enumerations.
parse_format_description, describe                         Grammar compiler.
Parsed                                                     Parse accumulator.
RFC3339                                                    Well-known format.
Error, Format, Parse, TryFromParsed, ...                   Error taxonomy.

Examples
--------
>>> from tempus import Date, parse_format_description
>>> items = parse_format_description("[month repr:short] [day padding:none], [year]")
>>> Date(2021, 8, 7).format(items)
'Aug 7, 2021'
>>> Date.parse("Aug 7, 2021", items) == Date(2021, 8, 7)
True
"""

from __future__ import annotations

from .calendar import (
    Date,
    Month,
    OffsetDateTime,
    PrimitiveDateTime,
    Time,
    UtcOffset,
    Weekday,
)
from .config import TempusSettings, configure_logging, get_settings
from .core.errors import (
    ComponentRange,
    ConversionRange,
    DifferentVariant,
    Error,
    Format,
    InconsistentInformation,
    IndeterminateOffset,
    InsufficientInformation,
    InsufficientTypeInformation,
    InvalidComponent,
    InvalidFormatComponent,
    InvalidFormatDescription,
    InvalidLiteral,
    Parse,
    ParseFromDescription,
    TempusError,
    TryFromParsed,
    UnexpectedTrailingCharacters,
)
from .core.grammar import describe, parse_format_description
from .core.parsed import Parsed
from .core.well_known import RFC3339, Rfc3339

__all__ = [
    # values
    "Date",
    "Time",
    "UtcOffset",
    "PrimitiveDateTime",
    "OffsetDateTime",
    "Month",
    "Weekday",
    # grammar and parsing
    "parse_format_description",
    "describe",
    "Parsed",
    "RFC3339",
    "Rfc3339",
    # configuration
    "TempusSettings",
    "get_settings",
    "configure_logging",
    # errors
    "TempusError",
    "ComponentRange",
    "ConversionRange",
    "IndeterminateOffset",
    "DifferentVariant",
    "InvalidFormatDescription",
    "InsufficientTypeInformation",
    "InvalidFormatComponent",
    "ParseFromDescription",
    "InvalidLiteral",
    "InvalidComponent",
    "UnexpectedTrailingCharacters",
    "InsufficientInformation",
    "InconsistentInformation",
    "TryFromParsed",
    "Format",
    "Parse",
    "Error",
]
