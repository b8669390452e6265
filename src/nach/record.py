"""Shared field access for records backed by one or more field tables."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from nach.errors import UnknownField
from nach.fields import Field, FieldTable


def truncate_left(value: object, width: int) -> str:
    """Keep the leftmost ``width`` characters."""
    return str(value)[:width]


def truncate_right(value: object, width: int) -> str:
    """Keep the rightmost ``width`` characters."""
    return str(value)[-width:]


def merge_options(options: Mapping[str, Any] | None, extra: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(options or {})
    merged.update(extra)
    return merged


def provided(options: Mapping[str, Any], name: str) -> bool:
    value = options.get(name)
    return value is not None and value != ""


class Record:
    """``get``/``set`` over the record's tables, in lookup order.

    ``get`` returns the value from the first table holding the field; ``set``
    writes every table holding it, so fields shared between a header and its
    control record stay equal.
    """

    _table_names: tuple[str, ...] = ("fields",)

    def _tables(self) -> Iterable[FieldTable]:
        return (getattr(self, name) for name in self._table_names)

    def _field(self, name: str) -> Field:
        for table in self._tables():
            if name in table:
                return table[name]
        raise UnknownField(name)

    def get(self, name: str) -> Any:
        return self._field(name).value

    def set(self, name: str, value: Any) -> None:
        value = self._coerce(name, value)
        found = False
        for table in self._tables():
            if name in table:
                table[name].value = value
                found = True
        if not found:
            raise UnknownField(name)

    def _coerce(self, name: str, value: Any) -> Any:
        return value

    def _apply_options(self, options: Mapping[str, Any], names: Iterable[str]) -> None:
        for name in names:
            if provided(options, name):
                self.set(name, options[name])
