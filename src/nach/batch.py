"""Batches: an ordered group of entries between a batch header (5) and control (8)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from nach import validate
from nach.codec import NEWLINE, format_date, generate_string, last_digits
from nach.entry import Entry
from nach.fields import apply_overrides
from nach.layouts import batch_control, batch_header
from nach.logging_setup import get_logger
from nach.record import Record, merge_options, truncate_left

logger = get_logger(__name__)

HIGH_LEVEL_HEADER_OVERRIDES = (
    "service_class_code",
    "company_name",
    "company_discretionary_data",
    "company_identification",
    "standard_entry_class_code",
    "company_entry_description",
    "company_descriptive_date",
    "effective_entry_date",
    "originator_status_code",
    "originating_dfi",
)
HIGH_LEVEL_CONTROL_OVERRIDES = ("message_authentication_code",)
# header values repeated on the control record
MIRRORED_FIELDS = ("service_class_code", "company_identification", "originating_dfi")
_FREE_TEXT = frozenset(
    {
        "company_name",
        "company_discretionary_data",
        "company_entry_description",
        "company_descriptive_date",
        "message_authentication_code",
    }
)


class Batch(Record):
    _table_names = ("header", "control")

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        auto_validate: bool = True,
        **kwargs: Any,
    ) -> None:
        opts = merge_options(options, kwargs)
        self._entries: list[Entry] = []
        self.header = apply_overrides(batch_header(), opts.get("header"))
        self.control = apply_overrides(batch_control(), opts.get("control"))
        self._apply_options(opts, HIGH_LEVEL_HEADER_OVERRIDES)
        self._apply_options(opts, HIGH_LEVEL_CONTROL_OVERRIDES)
        for name in MIRRORED_FIELDS:
            self.control[name].value = self.header[name].value

        if auto_validate:
            self.validate()

    def _coerce(self, name: str, value: Any) -> Any:
        if name in _FREE_TEXT or name == "originating_dfi":
            return truncate_left(value, self._field(name).width)
        if name == "effective_entry_date":
            return format_date(value)
        return value

    def validate(self) -> None:
        validate.validate_required_fields(self.header)
        validate.validate_service_class_code(self.get("service_class_code"))
        validate.validate_sec_code(self.get("standard_entry_class_code"))
        validate.validate_lengths(self.header)
        validate.validate_data_types(self.header)
        validate.validate_lengths(self.control)
        validate.validate_data_types(self.control)

    def add_entry(self, entry: Entry) -> None:
        self._entries.append(entry)

    def get_entries(self) -> list[Entry]:
        return list(self._entries)

    def compute_totals(self) -> None:
        """Recompute the control aggregates from the current entries."""
        total_debit = 0
        total_credit = 0
        entry_hash = 0
        records = 0
        for entry in self._entries:
            amount = int(entry.get("amount") or 0)
            if entry.is_credit:
                total_credit += amount
            elif entry.is_debit:
                total_debit += amount
            else:
                logger.warning(
                    "Transaction code %r is neither debit nor credit; amount left out of totals",
                    entry.get("transaction_code"),
                )
            entry_hash += int(entry.get("receiving_dfi"))
            records += entry.get_record_count()
        self.control["total_debit"].value = total_debit
        self.control["total_credit"].value = total_credit
        self.control["entry_hash"].value = last_digits(entry_hash)
        self.control["addenda_count"].value = records

    def generate_string(self) -> str:
        self.compute_totals()
        lines = [generate_string(self.header)]
        lines.extend(entry.generate_string() for entry in self._entries)
        lines.append(generate_string(self.control))
        return NEWLINE.join(lines)

    def __repr__(self) -> str:
        return f"Batch(number={self.get('batch_number')!r}, entries={len(self._entries)})"
