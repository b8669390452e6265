"""Fixed-width string codec.

Generation renders a field table into one 94-character record; parsing slices
a record back into a table by each field's column window. Also holds the
small arithmetic helpers shared by the record classes (check digits, block
padding, date formatting).
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, time

from nach.fields import Field, FieldTable, clone_table, ordered
from nach.layouts import BLOCKING_FACTOR, RECORD_LENGTH

NEWLINE = "\n"
FILLER_ROW = "9" * RECORD_LENGTH


def pad(value: object, width: int, fill_char: str = " ", justification: str = "left") -> str:
    """Pad ``value`` to exactly ``width`` characters, truncating when longer.

    Left-justified values keep their leftmost characters when truncated,
    right-justified values keep their rightmost ones.
    """
    text = "" if value is None else str(value)
    if justification == "right":
        return text.rjust(width, fill_char)[-width:]
    return text.ljust(width, fill_char)[:width]


def render_field(field: Field) -> str:
    if field.blank:
        return " " * field.width
    return pad(field.value, field.width, field.fill_char or " ", field.justification or "left")


def generate_string(table: Mapping[str, Field]) -> str:
    """Render a field table as its fixed-width record."""
    return "".join(render_field(field) for _name, field in ordered(table))


def _slice_value(line: str, field: Field) -> str:
    raw = line[field.start : field.end]
    if field.blank:
        return ""
    if field.type == "numeric":
        # leading zeros stay; callers convert with int() where a number is meant
        return raw.strip()
    return raw.rstrip(field.fill_char or " ")


def parse_values(line: str, table: Mapping[str, Field]) -> dict[str, str]:
    """Slice ``line`` into a name -> value mapping using the table's windows."""
    return {name: _slice_value(line, field) for name, field in ordered(table)}


def parse_line(line: str, table: Mapping[str, Field]) -> FieldTable:
    """Return a copy of ``table`` whose values are read from ``line``."""
    parsed = clone_table(table)
    for name, value in parse_values(line, table).items():
        parsed[name].value = value
    return parsed


def split_lines(text: str) -> list[str]:
    """Split raw file text into physical records.

    Newline-delimited input is split on line breaks (``\\r\\n`` tolerated);
    input without any line break before its end is cut into ``RECORD_LENGTH``
    chunks.
    """
    body = text.rstrip("\r\n")
    if "\n" in body:
        return [line.rstrip("\r") for line in text.split("\n")]
    return [body[i : i + RECORD_LENGTH] for i in range(0, len(body), RECORD_LENGTH)]


def compute_check_digit(routing: str) -> str:
    """Append the ABA check digit to an 8-digit routing prefix.

    Anything that is not exactly 8 digits is returned unchanged.
    """
    routing = str(routing)
    if len(routing) != 8 or not routing.isdigit():
        return routing
    digits = [int(ch) for ch in routing]
    weighted = 3 * (digits[0] + digits[3] + digits[6]) + 7 * (digits[1] + digits[4] + digits[7])
    weighted += digits[2] + digits[5]
    return routing + str((10 - weighted % 10) % 10)


def is_valid_routing_number(routing: str) -> bool:
    if len(routing) != 9 or not routing.isdigit():
        return False
    d = [int(ch) for ch in routing]
    total = 3 * (d[0] + d[3] + d[6]) + 7 * (d[1] + d[4] + d[7]) + (d[2] + d[5] + d[8])
    return total % 10 == 0


def next_multiple(value: int, multiple: int = BLOCKING_FACTOR) -> int:
    remainder = value % multiple
    return value if remainder == 0 else value + multiple - remainder


def padding_rows(rows: int, multiple: int = BLOCKING_FACTOR) -> list[str]:
    """Filler records needed to bring ``rows`` up to a multiple of ``multiple``."""
    return [FILLER_ROW] * (next_multiple(rows, multiple) - rows)


def format_date(value: date | datetime | str) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime("%y%m%d")
    return str(value)


def format_time(value: datetime | time | str) -> str:
    if isinstance(value, (datetime, time)):
        return value.strftime("%H%M")
    return str(value)


def last_digits(value: int, count: int = 10) -> str:
    """Rightmost ``count`` decimal digits of ``value``."""
    return str(value)[-count:]
