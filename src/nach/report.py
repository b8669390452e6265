"""Flatten File trees into rows for CSV, JSONL and Arrow consumers."""

from __future__ import annotations

import csv
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import orjson
import pyarrow as pa

from nach.file import File

ENTRY_COLUMNS = (
    "batch_number",
    "transaction_code",
    "receiving_dfi",
    "check_digit",
    "dfi_account",
    "amount",
    "id_number",
    "individual_name",
    "trace_number",
    "addenda_count",
    "return_code",
)


def summary_to_row(nach_file: File, source: str, tag: str | None = None) -> dict[str, Any]:
    """Control aggregates of ``nach_file`` as one flat row.

    Aggregates are refreshed first, so parsed and hand-built files report the
    same way.
    """
    nach_file.generate_batches()
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "source": source,
        "tag": tag or "",
        "immediate_destination": nach_file.get("immediate_destination"),
        "immediate_origin": nach_file.get("immediate_origin"),
        "file_creation_date": nach_file.get("file_creation_date"),
        "batch_count": int(nach_file.get("batch_count")),
        "block_count": int(nach_file.get("block_count")),
        "entry_count": int(nach_file.get("addenda_count")),
        "entry_hash": str(nach_file.get("entry_hash")).zfill(10),
        "total_debit": int(nach_file.get("total_debit")),
        "total_credit": int(nach_file.get("total_credit")),
    }


def entries_to_rows(nach_file: File) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for batch in nach_file.get_batches():
        for entry in batch.get_entries():
            addendas = entry.get_addendas()
            return_code = addendas[0].get_return_code() if addendas else False
            rows.append(
                {
                    "batch_number": int(batch.get("batch_number")),
                    "transaction_code": str(entry.get("transaction_code")),
                    "receiving_dfi": str(entry.get("receiving_dfi")),
                    "check_digit": str(entry.get("check_digit")),
                    "dfi_account": str(entry.get("dfi_account")),
                    "amount": int(entry.get("amount") or 0),
                    "id_number": str(entry.get("id_number")),
                    "individual_name": str(entry.get("individual_name")),
                    "trace_number": str(entry.get("trace_number")),
                    "addenda_count": len(addendas),
                    "return_code": return_code or "",
                }
            )
    return rows


def append_csv(path: Path, row: dict[str, Any]) -> None:
    """Append one summary row; the header is written only for a new or empty log."""
    path.parent.mkdir(parents=True, exist_ok=True)
    write_header = not path.exists() or path.stat().st_size == 0
    with path.open("a", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(row), extrasaction="ignore")
        if write_header:
            writer.writeheader()
        writer.writerow(row)


def write_csv(path: Path, rows: list[dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(ENTRY_COLUMNS))
        writer.writeheader()
        writer.writerows(rows)


def append_jsonl(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("ab") as f:
        f.write(orjson.dumps(payload, option=orjson.OPT_APPEND_NEWLINE))


def entries_to_arrow(rows: list[dict[str, Any]], path: Path) -> None:
    """Write entry rows to Arrow IPC for analytics-friendly consumption."""
    path.parent.mkdir(parents=True, exist_ok=True)
    table = pa.table({column: [row[column] for row in rows] for column in ENTRY_COLUMNS})
    with pa.OSFile(str(path), "wb") as sink:
        with pa.ipc.new_file(sink, table.schema) as writer:
            writer.write_table(table)
