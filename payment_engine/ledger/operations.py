"""Operation sum type (5 variants) and the classifier that builds it.

classify_operation is pure: it looks only at the record's type name and
amount, never at ledger state.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import final

from payment_engine.core.errors import MissingAmount, UnknownOperation
from payment_engine.core.result import Err, Ok


@final
@dataclass(frozen=True, slots=True)
class Deposit:
    """Credit to the client's available funds."""

    amount: Decimal


@final
@dataclass(frozen=True, slots=True)
class Withdraw:
    """Debit from the client's available funds."""

    amount: Decimal


@final
@dataclass(frozen=True, slots=True)
class Dispute:
    """Claim that a prior entry was erroneous; its amount is held."""


@final
@dataclass(frozen=True, slots=True)
class Resolve:
    """Closes a dispute without reversal; held funds return to available."""


@final
@dataclass(frozen=True, slots=True)
class Chargeback:
    """End of a dispute by reversal; held funds leave and the account locks."""


type Operation = Deposit | Withdraw | Dispute | Resolve | Chargeback

# "withdrawal" and "withdraw" both appear upstream; accept either.
DEPOSIT_NAMES: frozenset[str] = frozenset({"deposit"})
WITHDRAW_NAMES: frozenset[str] = frozenset({"withdraw", "withdrawal"})

_SOURCE = "ledger.operations.classify_operation"


def classify_operation(
    name: str, amount: Decimal | None,
) -> Ok[Operation] | Err[MissingAmount | UnknownOperation]:
    """Map a record type name (exact, case-sensitive) to an Operation.

    Deposit and withdraw require an amount; dispute, resolve and chargeback
    ignore whatever amount the record carries.
    """
    if name in DEPOSIT_NAMES or name in WITHDRAW_NAMES:
        if amount is None:
            return Err(MissingAmount.create(name, _SOURCE))
        if name in DEPOSIT_NAMES:
            return Ok(Deposit(amount=amount))
        return Ok(Withdraw(amount=amount))
    match name:
        case "dispute":
            return Ok(Dispute())
        case "resolve":
            return Ok(Resolve())
        case "chargeback":
            return Ok(Chargeback())
        case _:
            return Err(UnknownOperation.create(name, _SOURCE))
