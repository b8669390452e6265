from pathlib import Path

import orjson
import typer
from rich.console import Console
from rich.table import Table

from nach.data.generator import SyntheticConfig, generate_synthetic_file
from nach.definition import build_file, load_definition
from nach.errors import NachError
from nach.file import File, parse_file
from nach.logging_setup import configure_logging
from nach.report import (
    append_csv,
    append_jsonl,
    entries_to_arrow,
    entries_to_rows,
    summary_to_row,
    write_csv,
)

app = typer.Typer(help="Generate, parse and validate NACH/ACH batch payment files.")
dataset_app = typer.Typer(help="Dataset helpers (synthetic fixtures).")
console = Console()
SUPPORTED_FORMATS = {"json", "csv", "arrow"}

app.add_typer(dataset_app, name="dataset")


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (defaults to NACH_LOG_LEVEL or WARNING)."
    ),
) -> None:
    configure_logging(log_level)


def _load(path: Path) -> File:
    if not path.is_file():
        raise typer.BadParameter(f"Input file not found: {path}")
    try:
        return parse_file(path)
    except NachError as exc:
        console.print(f"[bold red]Parse failed:[/] {exc}")
        raise typer.Exit(code=1) from exc


@app.command()
def generate(
    definition: Path = typer.Argument(..., help="YAML or JSON file definition."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Optional path to write the NACH file."
    ),
) -> None:
    """Build a NACH file from a definition document."""
    if not definition.is_file():
        raise typer.BadParameter(f"Definition not found: {definition}")
    try:
        nach_file = build_file(load_definition(definition))
        text = nach_file.generate_file()
    except (NachError, ValueError) as exc:
        console.print(f"[bold red]Generation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc

    if output:
        output.write_text(text, encoding="ascii")
        console.print(f"[bold green]Wrote[/] {len(text.splitlines())} records to {output}")
    else:
        typer.echo(text)


@app.command()
def parse(
    input: Path = typer.Argument(..., help="NACH file to parse."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Optional path to write structured output."
    ),
    format: str = typer.Option("json", "--format", "-f", help="Output format: json | csv | arrow."),
    log_csv: Path | None = typer.Option(
        None, "--log-csv", help="Append the control summary as a CSV row for trend tracking."
    ),
    log_jsonl: Path | None = typer.Option(
        None, "--log-jsonl", help="Append the full parsed payload as JSONL."
    ),
    tag: str | None = typer.Option(None, "--tag", help="Label stored with logged summaries."),
) -> None:
    """Parse a NACH file into entry rows plus a control summary."""
    fmt = format.lower()
    if fmt not in SUPPORTED_FORMATS:
        raise typer.BadParameter(f"Unsupported format '{format}'. Choose from {SUPPORTED_FORMATS}.")
    if fmt != "json" and not output:
        raise typer.BadParameter(f"--output is required for format '{fmt}'.")

    nach_file = _load(input)
    rows = entries_to_rows(nach_file)
    summary = summary_to_row(nach_file, source=str(input), tag=tag)
    payload = {"summary": summary, "entries": rows}

    if log_csv:
        append_csv(log_csv, summary)
        console.print(f"[bold green]Appended CSV log[/] to {log_csv}")
    if log_jsonl:
        append_jsonl(log_jsonl, payload)
        console.print(f"[bold green]Appended JSONL log[/] to {log_jsonl}")

    if fmt == "csv" and output:
        write_csv(output, rows)
        console.print(f"[bold green]Wrote[/] {len(rows)} entries to {output}")
    elif fmt == "arrow" and output:
        entries_to_arrow(rows, output)
        console.print(f"[bold green]Wrote[/] {len(rows)} entries to {output}")
    elif output:
        output.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
        console.print(f"[bold green]Wrote parsed output[/] to {output}")
    else:
        console.print(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode())


@app.command()
def validate(
    input: Path = typer.Argument(..., help="NACH file to check."),
) -> None:
    """Parse a file, regenerate it and report control totals and drift."""
    nach_file = _load(input)
    original = input.read_text(encoding="ascii").rstrip("\n").replace("\r\n", "\n")
    regenerated = nach_file.generate_file()
    summary = summary_to_row(nach_file, source=str(input))

    table = Table(title=f"NACH control totals: {input.name}")
    table.add_column("Field")
    table.add_column("Value", justify="right")
    for key in ("batch_count", "block_count", "entry_count", "entry_hash"):
        table.add_row(key, str(summary[key]))
    table.add_row("total_debit", f"{summary['total_debit'] / 100:,.2f}")
    table.add_row("total_credit", f"{summary['total_credit'] / 100:,.2f}")
    console.print(table)

    if regenerated == original:
        console.print("[bold green]OK[/] file round-trips byte for byte")
    else:
        console.print("[yellow]Control records or padding differ from recomputed values.[/]")
        raise typer.Exit(code=2)


@dataset_app.command("synthetic")
def dataset_synthetic(
    output: Path = typer.Argument(..., help="Path to write the synthetic NACH file."),
    batches: int = typer.Option(2, "--batches", "-b", help="Number of batches."),
    entries: int = typer.Option(4, "--entries", "-e", help="Entries per batch."),
    seed: int = typer.Option(1234, "--seed", help="Seed for reproducible generation."),
    addenda_ratio: float = typer.Option(
        0.25, "--addenda-ratio", help="Share of entries carrying an addenda record."
    ),
) -> None:
    """Generate a valid NACH file with random entries."""
    cfg = SyntheticConfig(
        batches=batches, entries_per_batch=entries, seed=seed, addenda_ratio=addenda_ratio
    )
    text = generate_synthetic_file(cfg).generate_file()
    output.write_text(text, encoding="ascii")
    console.print(
        f"[bold green]Wrote[/] {len(text.splitlines())} records to {output} "
        f"({batches} batches x {entries} entries)."
    )


if __name__ == "__main__":
    app()
