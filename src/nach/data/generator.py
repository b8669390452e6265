"""Synthetic NACH file builder.

Produces valid File trees with seeded randomness:
- one or more batches with mixed credit/debit entries
- optional addenda on a share of the entries
- fixed creation date/time so generated text is reproducible

Used for fixtures, benchmarks, and the ``dataset synthetic`` CLI command.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from nach.addenda import EntryAddenda
from nach.batch import Batch
from nach.codec import compute_check_digit
from nach.entry import Entry
from nach.file import File

ROUTING_PREFIXES: Sequence[str] = ("08100003", "02100002", "01100001", "06100015", "12100024")
NAMES: Sequence[str] = ("ALEX SMITH", "SAM LEE", "JORDAN PATEL", "RILEY CHEN", "CASEY NOVAK")
CREDIT_CODES: Sequence[str] = ("22", "32")
DEBIT_CODES: Sequence[str] = ("27", "37")


@dataclass
class SyntheticConfig:
    batches: int = 2
    entries_per_batch: int = 4
    seed: int = 1234
    addenda_ratio: float = 0.25
    immediate_destination: str = "081000032"
    immediate_origin: str = "123456789"
    creation_date: date = date(2026, 1, 2)


def generate_synthetic_file(config: SyntheticConfig | None = None) -> File:
    """Build a File with ``config.batches`` batches of random entries."""
    cfg = config or SyntheticConfig()
    rng = random.Random(cfg.seed)
    nach_file = File(
        immediate_destination=cfg.immediate_destination,
        immediate_origin=cfg.immediate_origin,
        immediate_destination_name="SYNTHETIC BANK",
        immediate_origin_name="SYNTHETIC ORIGINATOR",
        file_creation_date=cfg.creation_date,
        file_creation_time="0900",
    )

    for b in range(cfg.batches):
        service_class = rng.choice(("200", "220", "225"))
        batch = Batch(
            service_class_code=service_class,
            company_name=f"SYNTH CO {b:02d}",
            company_identification="1234567890",
            standard_entry_class_code="PPD",
            company_entry_description="PAYROLL",
            effective_entry_date=cfg.creation_date + timedelta(days=1),
            originating_dfi=cfg.immediate_destination[:8],
        )
        for i in range(cfg.entries_per_batch):
            if service_class == "220":
                code = rng.choice(CREDIT_CODES)
            elif service_class == "225":
                code = rng.choice(DEBIT_CODES)
            else:
                code = rng.choice((*CREDIT_CODES, *DEBIT_CODES))
            entry = Entry(
                transaction_code=code,
                receiving_dfi=compute_check_digit(rng.choice(ROUTING_PREFIXES)),
                dfi_account=f"{rng.randint(10**9, 10**12 - 1)}",
                amount=rng.randint(1_00, 5_000_00),
                id_number=f"ID{b:02d}{i:05d}",
                individual_name=rng.choice(NAMES),
            )
            if rng.random() < cfg.addenda_ratio:
                entry.add_addenda(
                    EntryAddenda(payment_related_information=f"INVOICE {b:02d}-{i:05d}")
                )
            batch.add_entry(entry)
        nach_file.add_batch(batch)
    return nach_file


def generate_synthetic_text(config: SyntheticConfig | None = None) -> str:
    return generate_synthetic_file(config).generate_file()
