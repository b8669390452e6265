"""Field descriptors and field tables.

A field table is an ordered ``dict`` of field name -> ``Field``. Each record
kind owns one; tables are always built fresh from the layout factories so the
defaults are never shared between records.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, Literal

from nach.errors import UnknownField

FieldType = Literal["numeric", "alphanumeric"]
Justification = Literal["left", "right"]
FieldTable = dict[str, "Field"]


@dataclass
class Field:
    name: str
    position: int  # 1-based starting column
    width: int
    type: FieldType = "alphanumeric"
    required: bool = False
    value: str | int = ""
    fill_char: str | None = None
    justification: Justification | None = None
    blank: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError(f"{self.name}: width must be positive")
        if self.fill_char is None:
            self.fill_char = "0" if self.type == "numeric" else " "
        if self.justification is None:
            self.justification = "right" if self.type == "numeric" else "left"

    @property
    def start(self) -> int:
        return self.position - 1

    @property
    def end(self) -> int:
        return self.position - 1 + self.width

    def is_empty(self) -> bool:
        return self.value is None or str(self.value) == ""


_DESCRIPTOR_ATTRS = frozenset(f.name for f in fields(Field))


def clone_table(table: Mapping[str, Field]) -> FieldTable:
    return {key: replace(field) for key, field in table.items()}


def ordered(table: Mapping[str, Field]) -> list[tuple[str, Field]]:
    """Fields sorted by starting column."""
    return sorted(table.items(), key=lambda item: item[1].position)


def table_width(table: Mapping[str, Field]) -> int:
    return sum(field.width for field in table.values())


def apply_overrides(
    defaults: Mapping[str, Field], overrides: Mapping[str, Any] | None
) -> FieldTable:
    """Deep-merge ``overrides`` onto a copy of ``defaults``.

    Override entries may be a scalar (replaces the field value) or a mapping of
    descriptor attributes (merged into the descriptor). Fields missing from the
    overrides keep their default descriptor.
    """
    merged = clone_table(defaults)
    if not overrides:
        return merged
    for key, override in overrides.items():
        if key not in merged:
            raise UnknownField(key)
        if isinstance(override, Field):
            merged[key] = replace(override)
        elif isinstance(override, Mapping):
            unknown = set(override) - _DESCRIPTOR_ATTRS
            if unknown:
                raise UnknownField(f"{key}.{sorted(unknown)[0]}")
            merged[key] = replace(merged[key], **dict(override))
        else:
            merged[key].value = override
    return merged
