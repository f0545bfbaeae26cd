"""
Interchange core for tempus: format-description grammar, format and parse modes, the
Parsed accumulator and its resolver, well-known formats, and the error taxonomy.

## Modules
- errors: leaf error kinds and the TryFromParsed / Format / Parse / Error containers.
- modifiers: per-component modifier records (frozen pydantic models).
- components: component kinds and compiled format items.
- grammar: compile description text into items, render items back, compile cache.
- formatting: format mode (capability check, buffered rendering).
- parsing: per-component token readers for parse mode.
- parsed: Parsed accumulator, parse mode driver, resolver, ``parse_value``.
- well_known: RFC 3339.

## Notes
- Zero-IO apart from the output stream handed to ``format_into``.
- This package imports nothing eagerly; import the modules directly. The calendar
  value types depend on ``components`` and ``errors``, while ``parsed`` depends on
  the calendar types.

## Examples
```python
from tempus.core.grammar import parse_format_description
from tempus.calendar import Date

items = parse_format_description("[year]-[month]-[day]")
Date(2021, 2, 3).format(items)  # '2021-02-03'
Date.parse("2021-02-03", items)  # Date(year=2021, month=<Month.FEBRUARY: 2>, day=3)
```
"""
