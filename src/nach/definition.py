"""File definitions: YAML/JSON documents describing a File tree to build."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from nach.addenda import EntryAddenda
from nach.batch import Batch
from nach.entry import Entry
from nach.file import File


@dataclass
class EntryDefinition:
    options: dict[str, Any]
    addenda: list[dict[str, Any]] = field(default_factory=list)

    @staticmethod
    def from_mapping(payload: dict[str, Any]) -> EntryDefinition:
        options = dict(payload)
        addenda = options.pop("addenda", None) or []
        return EntryDefinition(options=options, addenda=[dict(a) for a in addenda])


@dataclass
class BatchDefinition:
    options: dict[str, Any]
    entries: list[EntryDefinition] = field(default_factory=list)

    @staticmethod
    def from_mapping(payload: dict[str, Any]) -> BatchDefinition:
        options = dict(payload)
        entries = options.pop("entries", None) or []
        return BatchDefinition(
            options=options, entries=[EntryDefinition.from_mapping(e) for e in entries]
        )


@dataclass
class FileDefinition:
    file: dict[str, Any]
    batches: list[BatchDefinition] = field(default_factory=list)
    auto_validate: bool = True

    @staticmethod
    def from_mapping(payload: dict[str, Any]) -> FileDefinition:
        if "file" not in payload:
            raise ValueError("File definition needs a 'file' section")
        return FileDefinition(
            file=dict(payload["file"]),
            batches=[BatchDefinition.from_mapping(b) for b in payload.get("batches") or []],
            auto_validate=bool(payload.get("auto_validate", True)),
        )


def load_definition(path: Path) -> FileDefinition:
    if path.suffix.lower() in {".yml", ".yaml"}:
        payload = yaml.safe_load(path.read_text())
    else:
        payload = json.loads(path.read_text())
    return FileDefinition.from_mapping(payload)


def build_file(definition: FileDefinition) -> File:
    """Construct the File tree described by ``definition``."""
    validate = definition.auto_validate
    nach_file = File(definition.file, auto_validate=validate)
    for batch_def in definition.batches:
        batch = Batch(batch_def.options, auto_validate=validate)
        for entry_def in batch_def.entries:
            entry = Entry(entry_def.options, auto_validate=validate)
            for addenda_options in entry_def.addenda:
                entry.add_addenda(EntryAddenda(addenda_options, auto_validate=validate))
            batch.add_entry(entry)
        nach_file.add_batch(batch)
    return nach_file


def sample_definition() -> dict[str, Any]:
    return {
        "file": {
            "immediate_destination": "081000032",
            "immediate_origin": "123456789",
            "immediate_destination_name": "Some Bank",
            "immediate_origin_name": "Your Company Inc",
            "reference_code": "#A000001",
        },
        "batches": [
            {
                "service_class_code": "220",
                "company_name": "Your Company Inc",
                "standard_entry_class_code": "WEB",
                "company_identification": "123456789",
                "company_entry_description": "Trans Description",
                "company_descriptive_date": "Oct 26",
                "effective_entry_date": "261020",
                "originating_dfi": "081000032",
                "entries": [
                    {
                        "receiving_dfi": "081000210",
                        "dfi_account": "12345678901234567",
                        "amount": 3521,
                        "transaction_code": "22",
                        "id_number": "RAj##23920rjf31",
                        "individual_name": "Jane Doe",
                        "discretionary_data": "A1",
                        "addenda": [{"payment_related_information": "Invoice 1001"}],
                    }
                ],
            }
        ],
    }
