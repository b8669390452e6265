import csv
import json
from pathlib import Path

import pyarrow as pa

from nach.report import (
    ENTRY_COLUMNS,
    append_csv,
    append_jsonl,
    entries_to_arrow,
    entries_to_rows,
    summary_to_row,
    write_csv,
)


def test_summary_row_reports_control_totals(sample_file) -> None:
    row = summary_to_row(sample_file, source="sample.ach", tag="unit")
    assert row["batch_count"] == 1
    assert row["entry_count"] == 2
    assert row["entry_hash"] == "0010200023"
    assert row["total_credit"] == 1500
    assert row["total_debit"] == 250
    assert row["tag"] == "unit"


def test_entry_rows_include_return_codes(sample_file_with_addenda) -> None:
    sample_file_with_addenda.generate_file()
    rows = entries_to_rows(sample_file_with_addenda)
    assert [r["transaction_code"] for r in rows] == ["22", "27"]
    assert rows[0]["return_code"] == ""
    assert rows[1]["return_code"] == "R14"
    assert rows[1]["addenda_count"] == 1
    assert rows[1]["trace_number"] == "123456780000002"
    assert set(rows[0]) == set(ENTRY_COLUMNS)


def test_csv_and_jsonl_helpers(tmp_path: Path, sample_file) -> None:
    summary_path = tmp_path / "logs" / "summary.csv"
    row = summary_to_row(sample_file, source="a.ach")
    append_csv(summary_path, row)
    append_csv(summary_path, row)
    with summary_path.open() as f:
        assert len(list(csv.DictReader(f))) == 2

    entries_path = tmp_path / "entries.csv"
    write_csv(entries_path, entries_to_rows(sample_file))
    with entries_path.open() as f:
        read = list(csv.DictReader(f))
    assert [r["individual_name"] for r in read] == ["ALEX SMITH", "SAM LEE"]

    log_path = tmp_path / "logs" / "runs.jsonl"
    append_jsonl(log_path, row)
    assert json.loads(log_path.read_text().splitlines()[0])["source"] == "a.ach"


def test_entries_to_arrow(tmp_path: Path, sample_file) -> None:
    out = tmp_path / "entries.arrow"
    entries_to_arrow(entries_to_rows(sample_file), out)
    with pa.OSFile(str(out), "rb") as source:
        table = pa.ipc.open_file(source).read_all()
    assert table.num_rows == 2
    assert table.column("amount").to_pylist() == [1500, 250]
