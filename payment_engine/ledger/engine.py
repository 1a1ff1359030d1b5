"""Replay engine: applies decoded records to accounts and ledger entries.

PaymentEngine is @final but NOT a dataclass — it holds mutable internal state
for exactly one run. Build a fresh engine per input, call compute() (or
process() per record), then dump().

Failure policy: the first hard error (classification, duplicate id, illegal
state transition, or a decoding error fed through compute()) is returned as
Err and nothing after it is applied. Refused balance operations and disputes
of unknown entries are not errors.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import final

from payment_engine.core.errors import (
    ClassificationError,
    DuplicatedTransaction,
    EngineError,
    LedgerError,
)
from payment_engine.core.result import Err, Ok
from payment_engine.gateway.types import TransactionRecord
from payment_engine.ledger.account import Account, AccountSnapshot
from payment_engine.ledger.operations import (
    Chargeback,
    Deposit,
    Dispute,
    Resolve,
    Withdraw,
    classify_operation,
)
from payment_engine.ledger.transactions import EntryStatus, LedgerEntry

logger = logging.getLogger(__name__)

type RecordInput = TransactionRecord | Ok[TransactionRecord] | Err[EngineError]


@final
class PaymentEngine:
    """Owns every Account (by client id) and LedgerEntry (by tx id)."""

    def __init__(self) -> None:
        self._accounts: dict[int, Account] = {}
        self._entries: dict[int, LedgerEntry] = {}

    def process(
        self, record: TransactionRecord,
    ) -> Ok[None] | Err[ClassificationError | LedgerError]:
        """Apply one record.

        1. Look up or lazily create the client's account
        2. Classify the record; Err aborts
        3. Deposit/withdraw: reject a reused tx id, else create and execute
        4. Dispute/resolve/chargeback: unknown tx id is a no-op, else
           run the entry's transition
        """
        account = self._accounts.get(record.client)
        if account is None:
            account = Account(client_id=record.client)
            self._accounts[record.client] = account

        match classify_operation(record.operation, record.amount):
            case Err() as err:
                return err
            case Ok(operation):
                pass

        entry = self._entries.get(record.tx)

        match operation:
            case Deposit() | Withdraw() if entry is not None:
                return Err(DuplicatedTransaction.create(
                    record.tx, "ledger.engine.PaymentEngine.process",
                ))
            case Deposit(amount):
                return self._create(LedgerEntry.new_input(record.tx, amount), account)
            case Withdraw(amount):
                return self._create(LedgerEntry.new_output(record.tx, amount), account)
            case Dispute() | Resolve() | Chargeback() if entry is None:
                logger.debug(
                    "ignoring %s for unknown transaction %d (client %d)",
                    record.operation, record.tx, record.client,
                )
                return Ok(None)

        assert entry is not None
        before = entry.status
        match operation:
            case Dispute():
                result = entry.dispute(account)
            case Resolve():
                result = entry.resolve(account)
            case Chargeback():
                result = entry.chargeback(account)
        if isinstance(result, Ok) and entry.status is before:
            logger.debug(
                "%s of transaction %d refused for client %d",
                record.operation, record.tx, record.client,
            )
        return result

    def _create(
        self, entry: LedgerEntry, account: Account,
    ) -> Ok[None] | Err[LedgerError]:
        match entry.execute(account):
            case Err() as err:
                return err
            case Ok():
                pass
        # Refused entries are still recorded so their id cannot be reused.
        self._entries[entry.tx_id] = entry
        if entry.status is EntryStatus.NON_EXECUTED:
            logger.debug(
                "%s transaction %d of %s refused for client %d",
                entry.kind.value.lower(), entry.tx_id, entry.amount, account.client_id,
            )
        return Ok(None)

    def compute(self, records: Iterable[RecordInput]) -> Ok[int] | Err[EngineError]:
        """Apply records in order, stopping at the first Err.

        Accepts plain records or decoder Results; a decoder Err is returned
        unchanged. Returns the number of records applied.
        """
        count = 0
        for item in records:
            match item:
                case Err() as err:
                    return err
                case Ok(record):
                    pass
                case TransactionRecord() as record:
                    pass
            match self.process(record):
                case Err() as err:
                    logger.debug("aborting after %d records: %s", count, err.error.message)
                    return err
                case Ok():
                    count += 1
        logger.info(
            "applied %d records: %d accounts, %d transactions",
            count, len(self._accounts), len(self._entries),
        )
        return Ok(count)

    def dump(self) -> tuple[AccountSnapshot, ...]:
        """One snapshot per known account, in no particular order."""
        return tuple(account.snapshot() for account in self._accounts.values())

    def account(self, client_id: int) -> Account | None:
        return self._accounts.get(client_id)

    def entry(self, tx_id: int) -> LedgerEntry | None:
        return self._entries.get(tx_id)

    def account_count(self) -> int:
        return len(self._accounts)

    def entry_count(self) -> int:
        """Number of recorded deposit/withdrawal entries, refused ones included."""
        return len(self._entries)
