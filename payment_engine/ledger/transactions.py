"""Ledger entry: one deposit or withdrawal and its dispute lifecycle.

State machine (status):

    NON_EXECUTED --execute--> EXECUTED --dispute--> DISPUTED
                                  ^                     |
                                  +--resolve/chargeback-+

A transition whose guard holds but whose account operation is refused leaves
the status unchanged and returns Ok(None). A transition from the wrong status
returns Err. Chargeback freezes the account, so later records for the entry
are refused by the account rather than by the entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import final

from payment_engine.core.errors import (
    AlreadyExecutedTransaction,
    ChargebackTransactionError,
    DisputeTransactionError,
    ResolveTransactionError,
)
from payment_engine.core.result import Err, Ok
from payment_engine.ledger.account import Account


class EntryKind(Enum):
    INPUT = "INPUT"  # deposit
    OUTPUT = "OUTPUT"  # withdrawal


class EntryStatus(Enum):
    NON_EXECUTED = "NON_EXECUTED"
    EXECUTED = "EXECUTED"
    DISPUTED = "DISPUTED"


@final
@dataclass(slots=True)
class LedgerEntry:
    """Mutable entry; status moves only through the methods below."""

    tx_id: int
    kind: EntryKind
    amount: Decimal
    status: EntryStatus = EntryStatus.NON_EXECUTED

    @staticmethod
    def new_input(tx_id: int, amount: Decimal) -> LedgerEntry:
        return LedgerEntry(tx_id=tx_id, kind=EntryKind.INPUT, amount=amount)

    @staticmethod
    def new_output(tx_id: int, amount: Decimal) -> LedgerEntry:
        return LedgerEntry(tx_id=tx_id, kind=EntryKind.OUTPUT, amount=amount)

    def execute(self, account: Account) -> Ok[None] | Err[AlreadyExecutedTransaction]:
        """Apply the deposit or withdrawal to account.

        Becomes EXECUTED only if the account accepted the movement.
        """
        if self.status is not EntryStatus.NON_EXECUTED:
            return Err(AlreadyExecutedTransaction.create(
                self.tx_id, "ledger.transactions.LedgerEntry.execute",
            ))
        match self.kind:
            case EntryKind.INPUT:
                applied = account.deposit(self.amount)
            case EntryKind.OUTPUT:
                applied = account.withdraw(self.amount)
        if applied:
            self.status = EntryStatus.EXECUTED
        return Ok(None)

    def dispute(self, account: Account) -> Ok[None] | Err[DisputeTransactionError]:
        if self.status is not EntryStatus.EXECUTED:
            return Err(DisputeTransactionError.create(
                self.tx_id, "ledger.transactions.LedgerEntry.dispute",
            ))
        if account.hold(self.amount):
            self.status = EntryStatus.DISPUTED
        return Ok(None)

    def resolve(self, account: Account) -> Ok[None] | Err[ResolveTransactionError]:
        if self.status is not EntryStatus.DISPUTED:
            return Err(ResolveTransactionError.create(
                self.tx_id, "ledger.transactions.LedgerEntry.resolve",
            ))
        if account.release(self.amount):
            self.status = EntryStatus.EXECUTED
        return Ok(None)

    def chargeback(self, account: Account) -> Ok[None] | Err[ChargebackTransactionError]:
        if self.status is not EntryStatus.DISPUTED:
            return Err(ChargebackTransactionError.create(
                self.tx_id, "ledger.transactions.LedgerEntry.chargeback",
            ))
        if account.chargeback(self.amount):
            self.status = EntryStatus.EXECUTED
        return Ok(None)
