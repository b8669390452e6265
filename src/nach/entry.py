"""Entry detail records (record type 6) and their addenda."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from nach import validate
from nach.addenda import EntryAddenda
from nach.codec import NEWLINE, compute_check_digit, generate_string
from nach.fields import apply_overrides
from nach.layouts import entry_fields
from nach.record import Record, merge_options, provided, truncate_left

HIGH_LEVEL_OVERRIDES = (
    "transaction_code",
    "receiving_dfi",
    "check_digit",
    "dfi_account",
    "amount",
    "id_number",
    "individual_name",
    "discretionary_data",
    "addenda_id",
    "trace_number",
)
_FREE_TEXT = frozenset({"dfi_account", "id_number", "individual_name", "discretionary_data"})
TRACE_SEQUENCE_WIDTH = 7


class Entry(Record):
    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        auto_validate: bool = True,
        **kwargs: Any,
    ) -> None:
        opts = merge_options(options, kwargs)
        self._addendas: list[EntryAddenda] = []
        self.fields = apply_overrides(entry_fields(), opts.get("fields"))
        self._apply_options(opts, HIGH_LEVEL_OVERRIDES)

        routing = str(self.get("receiving_dfi"))
        if len(routing) == 8 and not provided(opts, "check_digit"):
            self.fields["check_digit"].value = compute_check_digit(routing)[8:]

        if auto_validate:
            self.validate()

    def set(self, name: str, value: Any) -> None:
        # a full 9-digit routing number carries its own check digit
        if name == "receiving_dfi" and len(str(value)) == 9:
            super().set("check_digit", str(value)[8])
            value = str(value)[:8]
        super().set(name, value)

    def _coerce(self, name: str, value: Any) -> Any:
        if name in _FREE_TEXT:
            return truncate_left(value, self.fields[name].width)
        if name == "amount":
            try:
                return int(value)
            except (TypeError, ValueError):
                return value  # left for type validation to reject
        return value

    def validate(self) -> None:
        validate.validate_required_fields(self.fields)
        validate.validate_routing_number(f"{self.get('receiving_dfi')}{self.get('check_digit')}")
        validate.validate_transaction_code(self.get("transaction_code"))
        validate.validate_lengths(self.fields)
        validate.validate_data_types(self.fields)

    def add_addenda(self, addenda: EntryAddenda) -> None:
        self.set("addenda_id", "1")
        addenda.set("addenda_sequence_number", len(self._addendas) + 1)
        trace = self.get("trace_number")
        if trace:
            addenda.set("entry_detail_sequence_number", str(trace))
        self._addendas.append(addenda)

    def get_addendas(self) -> list[EntryAddenda]:
        return list(self._addendas)

    def get_record_count(self) -> int:
        """Physical lines this entry occupies: itself plus its addenda."""
        return 1 + len(self._addendas)

    @property
    def is_credit(self) -> bool:
        return str(self.get("transaction_code")) in validate.CREDIT_CODES

    @property
    def is_debit(self) -> bool:
        return str(self.get("transaction_code")) in validate.DEBIT_CODES

    def ensure_trace_number(self, origin_prefix: str, sequence: int) -> str:
        """Assign ``origin_prefix + sequence`` as trace number when none is set."""
        if not self.get("trace_number"):
            self.set("trace_number", f"{origin_prefix}{sequence:0{TRACE_SEQUENCE_WIDTH}d}")
        trace = str(self.get("trace_number"))
        for addenda in self._addendas:
            addenda.set("entry_detail_sequence_number", trace)
        return trace

    def generate_string(self) -> str:
        lines = [generate_string(self.fields)]
        lines.extend(addenda.generate_string() for addenda in self._addendas)
        return NEWLINE.join(lines)

    def __repr__(self) -> str:
        return (
            f"Entry(transaction_code={self.get('transaction_code')!r}, "
            f"amount={self.get('amount')!r}, addendas={len(self._addendas)})"
        )
