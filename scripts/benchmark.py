"""Micro-benchmarks for rendering and parsing synthetic NACH files."""

from __future__ import annotations

import time

from nach.data.generator import SyntheticConfig, generate_synthetic_file
from nach.file import File


def _best_of(runs: int, fn) -> float:
    best = None
    for _ in range(runs):
        start = time.perf_counter()
        fn()
        elapsed = time.perf_counter() - start
        best = elapsed if best is None or elapsed < best else best
    return best or 0.0


def benchmark_round_trip(
    batches: int = 20, entries_per_batch: int = 50, runs: int = 3
) -> dict[str, float]:
    nach_file = generate_synthetic_file(
        SyntheticConfig(batches=batches, entries_per_batch=entries_per_batch)
    )
    text = nach_file.generate_file()
    records = len(text.splitlines())
    generate_best = _best_of(runs, nach_file.generate_file)
    parse_best = _best_of(runs, lambda: File.parse(text))
    return {
        "records": records,
        "bytes": len(text),
        "generate_seconds": generate_best,
        "parse_seconds": parse_best,
        "parse_records_per_second": records / parse_best if parse_best else 0.0,
    }


if __name__ == "__main__":
    result = benchmark_round_trip()
    print(result)
