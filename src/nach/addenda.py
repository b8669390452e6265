"""Entry addenda (record type 7): free-form continuation of one entry."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from nach import validate
from nach.codec import generate_string
from nach.fields import apply_overrides
from nach.layouts import addenda_fields
from nach.record import Record, merge_options, truncate_left, truncate_right

HIGH_LEVEL_OVERRIDES = (
    "addenda_type_code",
    "payment_related_information",
    "addenda_sequence_number",
    "entry_detail_sequence_number",
)
RETURN_CODE_WIDTH = 3


class EntryAddenda(Record):
    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        auto_validate: bool = True,
        **kwargs: Any,
    ) -> None:
        opts = merge_options(options, kwargs)
        self.fields = apply_overrides(addenda_fields(), opts.get("fields"))
        self._apply_options(opts, HIGH_LEVEL_OVERRIDES)

        # a return code travels as the first characters of the free text
        if opts.get("return_code"):
            code = truncate_left(opts["return_code"], RETURN_CODE_WIDTH)
            info = str(self.get("payment_related_information"))
            if not info.startswith(code):
                self.set("payment_related_information", code + info)

        if auto_validate:
            self.validate()

    def _coerce(self, name: str, value: Any) -> Any:
        if name == "payment_related_information":
            return truncate_left(value, self.fields[name].width)
        if name == "entry_detail_sequence_number":
            return truncate_right(value, self.fields[name].width)
        return value

    def validate(self) -> None:
        validate.validate_required_fields(self.fields)
        validate.validate_addenda_type_code(self.get("addenda_type_code"))
        validate.validate_lengths(self.fields)
        validate.validate_data_types(self.fields)

    def get_return_code(self) -> str | bool:
        """First three characters of the free text, or ``False`` when empty.

        Only meaningful for return addenda (type ``99``).
        """
        info = str(self.get("payment_related_information") or "")
        if info:
            return info[:RETURN_CODE_WIDTH]
        return False

    def generate_string(self) -> str:
        return generate_string(self.fields)

    def __repr__(self) -> str:
        return (
            f"EntryAddenda(type={self.get('addenda_type_code')!r}, "
            f"sequence={self.get('addenda_sequence_number')!r})"
        )
