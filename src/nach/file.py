"""NACH files: header, batches, control trailer and block padding.

``File.generate_file`` renders the whole tree, recomputing every control
aggregate; ``File.parse`` rebuilds a tree from text through the same
constructors used for hand-built files.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from nach import validate
from nach.addenda import EntryAddenda
from nach.batch import Batch
from nach.codec import (
    FILLER_ROW,
    NEWLINE,
    compute_check_digit,
    format_date,
    format_time,
    generate_string,
    last_digits,
    next_multiple,
    padding_rows,
    parse_values,
    split_lines,
)
from nach.entry import Entry
from nach.errors import NachError, ParseError
from nach.fields import apply_overrides
from nach.layouts import (
    ADDENDA,
    BATCH_CONTROL,
    BATCH_HEADER,
    BLOCKING_FACTOR,
    ENTRY,
    FILE_CONTROL,
    FILE_HEADER,
    RECORD_LENGTH,
    addenda_fields,
    batch_control,
    batch_header,
    entry_fields,
    file_control,
    file_header,
)
from nach.logging_setup import get_logger
from nach.record import Record, merge_options, truncate_left

logger = get_logger(__name__)

HIGH_LEVEL_OVERRIDES = (
    "immediate_destination",
    "immediate_origin",
    "file_creation_date",
    "file_creation_time",
    "file_id_modifier",
    "immediate_destination_name",
    "immediate_origin_name",
    "reference_code",
)
_FREE_TEXT = frozenset({"immediate_destination_name", "immediate_origin_name", "reference_code"})
TRACE_PREFIX_WIDTH = 8


@dataclass
class _ParsedEntry:
    values: dict[str, str]
    addenda: list[dict[str, str]] = field(default_factory=list)


@dataclass
class _ParsedBatch:
    header: dict[str, str]
    control: dict[str, str] | None = None
    entries: list[_ParsedEntry] = field(default_factory=list)


class File(Record):
    _table_names = ("header", "control")

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        auto_validate: bool = True,
        **kwargs: Any,
    ) -> None:
        opts = merge_options(options, kwargs)
        self._batches: list[Batch] = []
        self.header = apply_overrides(file_header(), opts.get("header"))
        self.control = apply_overrides(file_control(), opts.get("control"))
        self._apply_options(opts, HIGH_LEVEL_OVERRIDES)
        self._batch_sequence_number = int(opts.get("batch_sequence_number") or 0)

        if auto_validate:
            self.validate()

    def _coerce(self, name: str, value: Any) -> Any:
        if name == "immediate_destination":
            return compute_check_digit(str(value))
        if name == "immediate_origin":
            return str(value)
        if name == "file_creation_date":
            return format_date(value)
        if name == "file_creation_time":
            return format_time(value)
        if name in _FREE_TEXT:
            return truncate_left(value, self.header[name].width)
        return value

    @property
    def batch_sequence_number(self) -> int:
        return self._batch_sequence_number

    def validate(self) -> None:
        validate.validate_table(self.header)
        validate.validate_lengths(self.control)
        validate.validate_data_types(self.control)

    def validate_all(self) -> None:
        """Validate this file and every record it owns."""
        self.validate()
        for batch in self._batches:
            batch.validate()
            for entry in batch.get_entries():
                entry.validate()
                for addenda in entry.get_addendas():
                    addenda.validate()

    def add_batch(self, batch: Batch) -> None:
        """Attach ``batch``, stamping it with the next batch number."""
        batch.set("batch_number", self._batch_sequence_number)
        self._batch_sequence_number += 1
        self._batches.append(batch)

    def get_batches(self) -> list[Batch]:
        return list(self._batches)

    def generate_batches(self) -> tuple[list[str], int]:
        """Render every non-empty batch and refresh the control aggregates.

        Returns the rendered batch blocks and the physical row count of the
        file so far (header and control included, padding excluded).
        """
        rendered: list[str] = []
        rows = 2
        entry_count = 0
        entry_hash = 0
        batch_count = 0
        total_debit = 0
        total_credit = 0
        origin_prefix = str(self.get("immediate_origin"))[:TRACE_PREFIX_WIDTH]

        for batch in self._batches:
            entries = batch.get_entries()
            if not entries:
                logger.debug("Skipping empty batch %s", batch.get("batch_number"))
                continue
            for entry in entries:
                entry_count += 1
                entry.ensure_trace_number(origin_prefix, entry_count)
                entry_hash += int(entry.get("receiving_dfi"))
                rows += entry.get_record_count()
            batch_count += 1
            rows += 2
            # trace numbers must be in place before the batch renders
            rendered.append(batch.generate_string())
            total_debit += int(batch.get("total_debit"))
            total_credit += int(batch.get("total_credit"))

        self.control["batch_count"].value = batch_count
        self.control["total_debit"].value = total_debit
        self.control["total_credit"].value = total_credit
        self.control["addenda_count"].value = entry_count
        self.control["block_count"].value = next_multiple(rows, BLOCKING_FACTOR) // BLOCKING_FACTOR
        self.control["entry_hash"].value = last_digits(entry_hash)
        logger.debug("Generated %d batches, %d entries, %d rows", batch_count, entry_count, rows)
        return rendered, rows

    def generate_header(self) -> str:
        return generate_string(self.header)

    def generate_control(self) -> str:
        return generate_string(self.control)

    def generate_file(self, validate: bool = True) -> str:
        """Render the complete file text.

        The control record is rendered only after every batch, since its
        aggregates come out of batch generation.
        """
        if validate:
            self.validate_all()
        header = self.generate_header()
        batches, rows = self.generate_batches()
        control = self.generate_control()
        return NEWLINE.join([header, *batches, control, *padding_rows(rows)])

    def write_file(self, path: Path | str, validate: bool = True) -> Path:
        path = Path(path)
        path.write_text(self.generate_file(validate=validate), encoding="ascii")
        logger.debug("Wrote %s", path)
        return path

    @classmethod
    def parse(cls, text: str) -> File:
        """Build a File from NACH text, raising ``ParseError`` on any failure."""
        if not text:
            raise ParseError("Input string is empty")

        header_values: dict[str, str] | None = None
        control_values: dict[str, str] | None = None
        batches: list[_ParsedBatch] = []

        for lineno, line in enumerate(split_lines(text), start=1):
            if not line.strip():
                continue
            if len(line) > RECORD_LENGTH:
                raise ParseError(
                    f"Line {lineno} has {len(line)} characters, expected {RECORD_LENGTH}"
                )
            if len(line) < RECORD_LENGTH:
                logger.warning("Line %d has only %d characters; space-padding", lineno, len(line))
                line = line.ljust(RECORD_LENGTH)

            kind = line[0]
            if kind == FILE_HEADER:
                header_values = parse_values(line, file_header())
            elif kind == FILE_CONTROL:
                if line == FILLER_ROW:
                    continue
                control_values = parse_values(line, file_control())
            elif kind == BATCH_HEADER:
                batches.append(_ParsedBatch(header=parse_values(line, batch_header())))
            elif kind == BATCH_CONTROL:
                _current_batch(batches, lineno, "Batch control").control = parse_values(
                    line, batch_control()
                )
            elif kind == ENTRY:
                _current_batch(batches, lineno, "Entry").entries.append(
                    _ParsedEntry(values=parse_values(line, entry_fields()))
                )
            elif kind == ADDENDA:
                owner = _current_batch(batches, lineno, "Addenda")
                if not owner.entries:
                    raise ParseError(f"Addenda record without an entry on line {lineno}")
                owner.entries[-1].addenda.append(parse_values(line, addenda_fields()))
            else:
                raise ParseError(f"Unknown record type {kind!r} on line {lineno}")

        if header_values is None or control_values is None:
            raise ParseError("File records parse error")
        if not batches:
            raise ParseError("No batches found")

        try:
            return cls._assemble(header_values, batches)
        except (NachError, ValueError) as exc:
            raise ParseError(f"Invalid record: {exc}") from exc

    @classmethod
    def _assemble(cls, header_values: dict[str, str], batches: list[_ParsedBatch]) -> File:
        nach_file = cls({"header": header_values})
        for parsed in batches:
            control = parsed.control or {}
            batch = Batch(
                parsed.header,
                message_authentication_code=control.get("message_authentication_code"),
            )
            for parsed_entry in parsed.entries:
                entry = Entry(parsed_entry.values)
                for values in parsed_entry.addenda:
                    entry.add_addenda(EntryAddenda(values))
                batch.add_entry(entry)
            # keep the batch numbers found in the text
            nach_file._batch_sequence_number = int(parsed.header.get("batch_number") or 0)
            nach_file.add_batch(batch)
        logger.debug("Parsed %d batches", len(batches))
        return nach_file

    def __repr__(self) -> str:
        return (
            f"File(destination={self.get('immediate_destination')!r}, "
            f"origin={self.get('immediate_origin')!r}, batches={len(self._batches)})"
        )


def _current_batch(batches: list[_ParsedBatch], lineno: int, record: str) -> _ParsedBatch:
    if not batches:
        raise ParseError(f"{record} record outside of a batch on line {lineno}")
    return batches[-1]


def parse(text: str) -> File:
    return File.parse(text)


def parse_file(path: Path | str) -> File:
    """Read and parse a file from disk; ``OSError`` propagates unchanged."""
    text = Path(path).read_text(encoding="ascii")
    return File.parse(text)
