"""Gateway types — one decoded input row.

TransactionRecord is what the decoder hands the engine. Field names follow
the CSV header: type, client, tx, amount.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import final

RECORD_FIELDS: tuple[str, ...] = ("type", "client", "tx", "amount")
SNAPSHOT_FIELDS: tuple[str, ...] = ("client", "available", "held", "total", "locked")


@final
@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """Decoded row. `operation` is validated later by the classifier."""

    operation: str
    client: int
    tx: int
    amount: Decimal | None = None
