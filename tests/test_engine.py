"""Tests for payment_engine.ledger.engine — dispatch, failure policy, dump."""

from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from payment_engine.core.errors import (
    ChargebackTransactionError,
    DisputeTransactionError,
    DuplicatedTransaction,
    FieldViolation,
    MissingAmount,
    ResolveTransactionError,
    UnknownOperation,
    ValidationError,
)
from payment_engine.core.result import Err, Ok
from payment_engine.gateway.types import TransactionRecord
from payment_engine.ledger.account import AccountSnapshot
from payment_engine.ledger.engine import PaymentEngine
from payment_engine.ledger.transactions import EntryStatus


def _rec(op: str, tx: int, client: int = 1, amount: str | None = None) -> TransactionRecord:
    return TransactionRecord(
        operation=op, client=client, tx=tx,
        amount=None if amount is None else Decimal(amount),
    )


def _run(*records: TransactionRecord) -> PaymentEngine:
    engine = PaymentEngine()
    result = engine.compute(records)
    assert isinstance(result, Ok), result
    return engine


def _snap(engine: PaymentEngine, client: int = 1) -> AccountSnapshot:
    acct = engine.account(client)
    assert acct is not None
    return acct.snapshot()


# ---------------------------------------------------------------------------
# Reference scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_deposit_then_withdraw(self) -> None:
        engine = _run(_rec("deposit", 1, amount="5.0"), _rec("withdraw", 2, amount="3.0"))
        assert engine.dump() == (AccountSnapshot(
            client=1, available=Decimal("2.0"), held=Decimal(0),
            total=Decimal("2.0"), locked=False,
        ),)

    def test_deposit_dispute_chargeback(self) -> None:
        engine = _run(
            _rec("deposit", 1, amount="5.0"),
            _rec("dispute", 1),
            _rec("chargeback", 1),
        )
        assert engine.dump() == (AccountSnapshot(
            client=1, available=Decimal(0), held=Decimal(0), total=Decimal(0), locked=True,
        ),)

    def test_withdraw_from_empty_account(self) -> None:
        engine = _run(_rec("withdraw", 1, amount="10.0"))
        assert engine.dump() == (AccountSnapshot(
            client=1, available=Decimal(0), held=Decimal(0), total=Decimal(0), locked=False,
        ),)
        entry = engine.entry(1)
        assert entry is not None
        assert entry.status is EntryStatus.NON_EXECUTED

    def test_withdrawal_synonym(self) -> None:
        engine = _run(_rec("deposit", 1, amount="5"), _rec("withdrawal", 2, amount="1.5"))
        assert _snap(engine).available == Decimal("3.5")

    def test_two_clients(self) -> None:
        engine = _run(
            _rec("deposit", 1, client=1, amount="1.0"),
            _rec("deposit", 2, client=2, amount="2.0"),
            _rec("deposit", 3, client=1, amount="2.0"),
            _rec("withdrawal", 4, client=1, amount="1.5"),
            _rec("withdrawal", 5, client=2, amount="3.0"),
        )
        snaps = {s.client: s for s in engine.dump()}
        assert snaps[1].available == Decimal("1.5")
        assert snaps[2].available == Decimal("2.0")
        assert engine.account_count() == 2
        assert engine.entry_count() == 5


# ---------------------------------------------------------------------------
# Dispute lifecycle through the engine
# ---------------------------------------------------------------------------


class TestDisputeLifecycle:
    def test_dispute_moves_to_held(self) -> None:
        engine = _run(_rec("deposit", 1, amount="5"), _rec("dispute", 1))
        snap = _snap(engine)
        assert (snap.available, snap.held, snap.total) == (Decimal(0), Decimal(5), Decimal(5))

    def test_resolve_moves_back(self) -> None:
        engine = _run(_rec("deposit", 1, amount="5"), _rec("dispute", 1), _rec("resolve", 1))
        snap = _snap(engine)
        assert (snap.available, snap.held, snap.locked) == (Decimal(5), Decimal(0), False)

    def test_second_resolve_aborts(self, engine: PaymentEngine) -> None:
        result = engine.compute([
            _rec("deposit", 1, amount="5"),
            _rec("dispute", 1),
            _rec("resolve", 1),
            _rec("resolve", 1),
        ])
        assert isinstance(result, Err)
        assert isinstance(result.error, ResolveTransactionError)
        assert result.error.tx_id == 1

    def test_dispute_undisputed_twice_aborts(self, engine: PaymentEngine) -> None:
        result = engine.compute([_rec("deposit", 1, amount="5"), _rec("dispute", 1),
                                 _rec("dispute", 1)])
        assert isinstance(result, Err)
        assert isinstance(result.error, DisputeTransactionError)

    def test_chargeback_without_dispute_aborts(self, engine: PaymentEngine) -> None:
        result = engine.compute([_rec("deposit", 1, amount="5"), _rec("chargeback", 1)])
        assert isinstance(result, Err)
        assert isinstance(result.error, ChargebackTransactionError)

    def test_dispute_of_refused_withdrawal_aborts(self, engine: PaymentEngine) -> None:
        result = engine.compute([_rec("withdraw", 1, amount="5"), _rec("dispute", 1)])
        assert isinstance(result, Err)
        assert isinstance(result.error, DisputeTransactionError)

    @pytest.mark.parametrize("op", ["dispute", "resolve", "chargeback"])
    def test_unknown_target_is_noop(self, op: str) -> None:
        engine = _run(_rec("deposit", 1, amount="5"), _rec(op, 99))
        snap = _snap(engine)
        assert (snap.available, snap.held, snap.locked) == (Decimal(5), Decimal(0), False)
        assert engine.entry(99) is None

    def test_unknown_target_still_opens_account(self) -> None:
        engine = _run(_rec("dispute", 5, client=9))
        assert engine.dump() == (AccountSnapshot(
            client=9, available=Decimal(0), held=Decimal(0), total=Decimal(0), locked=False,
        ),)

    def test_dispute_refused_when_funds_gone(self) -> None:
        engine = _run(
            _rec("deposit", 1, amount="5"),
            _rec("withdraw", 2, amount="4"),
            _rec("dispute", 1),
        )
        entry = engine.entry(1)
        assert entry is not None
        assert entry.status is EntryStatus.EXECUTED
        assert _snap(engine).held == Decimal(0)

    def test_everything_after_chargeback_is_noop(self) -> None:
        engine = _run(
            _rec("deposit", 1, amount="5"),
            _rec("deposit", 2, amount="3"),
            _rec("dispute", 1),
            _rec("chargeback", 1),
            _rec("deposit", 3, amount="100"),
            _rec("withdraw", 4, amount="1"),
            _rec("dispute", 2),
            _rec("dispute", 1),
        )
        snap = _snap(engine)
        assert snap == AccountSnapshot(
            client=1, available=Decimal(3), held=Decimal(0), total=Decimal(3), locked=True,
        )

    @pytest.mark.parametrize(
        ("op", "error_type"),
        [("resolve", ResolveTransactionError), ("chargeback", ChargebackTransactionError)],
    )
    def test_charged_back_entry_cannot_close_again(
        self, op: str, error_type: type, engine: PaymentEngine,
    ) -> None:
        records = [_rec("deposit", 1, amount="5"), _rec("dispute", 1), _rec("chargeback", 1)]
        assert engine.compute(records) == Ok(3)
        before = _snap(engine)
        result = engine.process(_rec(op, 1))
        assert isinstance(result, Err)
        assert isinstance(result.error, error_type)
        assert result.error.tx_id == 1
        assert _snap(engine) == before

    @pytest.mark.parametrize("op", ["resolve", "chargeback"])
    def test_sibling_dispute_frozen_in_place(self, op: str) -> None:
        engine = _run(
            _rec("deposit", 1, amount="5"),
            _rec("deposit", 2, amount="3"),
            _rec("dispute", 1),
            _rec("dispute", 2),
            _rec("chargeback", 1),
        )
        before = _snap(engine)
        assert before == AccountSnapshot(
            client=1, available=Decimal(0), held=Decimal(3), total=Decimal(3), locked=True,
        )
        assert engine.process(_rec(op, 2)) == Ok(None)
        assert _snap(engine) == before
        entry = engine.entry(2)
        assert entry is not None
        assert entry.status is EntryStatus.DISPUTED

    def test_dispute_routes_to_record_client(self) -> None:
        """The account touched is the one named on the dispute record."""
        engine = _run(
            _rec("deposit", 1, client=1, amount="5"),
            _rec("deposit", 2, client=2, amount="5"),
            _rec("dispute", 1, client=2),
        )
        assert _snap(engine, 1).held == Decimal(0)
        assert _snap(engine, 2).held == Decimal(5)


# ---------------------------------------------------------------------------
# Duplicates
# ---------------------------------------------------------------------------


class TestDuplicates:
    @pytest.mark.parametrize(
        "first",
        [
            _rec("deposit", 1, amount="5"),
            _rec("withdraw", 1, amount="5"),  # refused, NON_EXECUTED
        ],
    )
    @pytest.mark.parametrize("second_op", ["deposit", "withdraw", "withdrawal"])
    def test_reused_id(self, first: TransactionRecord, second_op: str) -> None:
        engine = PaymentEngine()
        result = engine.compute([first, _rec(second_op, 1, amount="1")])
        assert isinstance(result, Err)
        assert isinstance(result.error, DuplicatedTransaction)
        assert result.error.tx_id == 1

    def test_reused_id_of_disputed_entry(self, engine: PaymentEngine) -> None:
        result = engine.compute([
            _rec("deposit", 1, amount="5"), _rec("dispute", 1), _rec("deposit", 1, amount="5"),
        ])
        assert isinstance(result, Err)
        assert isinstance(result.error, DuplicatedTransaction)

    def test_reused_id_across_clients(self, engine: PaymentEngine) -> None:
        result = engine.compute([
            _rec("deposit", 1, client=1, amount="5"), _rec("deposit", 1, client=2, amount="5"),
        ])
        assert isinstance(result, Err)
        assert isinstance(result.error, DuplicatedTransaction)

    def test_duplicate_leaves_first_entry_untouched(self, engine: PaymentEngine) -> None:
        engine.compute([_rec("deposit", 1, amount="5"), _rec("deposit", 1, amount="7")])
        assert _snap(engine).available == Decimal(5)


# ---------------------------------------------------------------------------
# Classification failures and fail-fast
# ---------------------------------------------------------------------------


class TestFailFast:
    def test_missing_amount(self, engine: PaymentEngine) -> None:
        result = engine.process(_rec("deposit", 1))
        assert isinstance(result, Err)
        assert isinstance(result.error, MissingAmount)

    def test_unknown_operation(self, engine: PaymentEngine) -> None:
        result = engine.process(_rec("refund", 1, amount="1"))
        assert isinstance(result, Err)
        assert isinstance(result.error, UnknownOperation)
        assert result.error.operation == "refund"

    def test_stops_at_first_error(self, engine: PaymentEngine) -> None:
        result = engine.compute([
            _rec("deposit", 1, amount="5"),
            _rec("bogus", 2),
            _rec("deposit", 3, amount="7"),
        ])
        assert isinstance(result, Err)
        assert _snap(engine).available == Decimal(5)
        assert engine.entry(3) is None

    def test_account_created_before_classification(self, engine: PaymentEngine) -> None:
        engine.process(_rec("bogus", 1, client=4))
        assert engine.account(4) is not None

    def test_decoder_err_passes_through(self, engine: PaymentEngine) -> None:
        decode_err = ValidationError(
            message="Invalid line 3: tx: required", code="INVALID_RECORD", source="test",
            fields=(FieldViolation("tx", "required", "None"),), line=3,
        )
        result = engine.compute([
            Ok(_rec("deposit", 1, amount="5")),
            Err(decode_err),
            Ok(_rec("deposit", 2, amount="5")),
        ])
        assert result == Err(decode_err)
        assert _snap(engine).available == Decimal(5)

    def test_compute_returns_count(self, engine: PaymentEngine) -> None:
        records = [_rec("deposit", i, amount="1") for i in range(5)]
        assert engine.compute(records) == Ok(5)

    def test_compute_empty(self, engine: PaymentEngine) -> None:
        assert engine.compute([]) == Ok(0)
        assert engine.dump() == ()


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class TestLogging:
    def test_noops_logged_at_debug_only(
        self, engine: PaymentEngine, caplog: pytest.LogCaptureFixture,
    ) -> None:
        caplog.set_level(logging.DEBUG, logger="payment_engine.ledger.engine")
        engine.compute([_rec("withdraw", 1, amount="5"), _rec("dispute", 42)])
        engine_records = [r for r in caplog.records if r.name == "payment_engine.ledger.engine"]
        assert engine_records
        assert all(r.levelno < logging.WARNING for r in engine_records)
        messages = " ".join(r.getMessage() for r in engine_records)
        assert "refused" in messages
        assert "unknown transaction 42" in messages

    def test_summary_logged_at_info(
        self, engine: PaymentEngine, caplog: pytest.LogCaptureFixture,
    ) -> None:
        caplog.set_level(logging.INFO, logger="payment_engine.ledger.engine")
        engine.compute([_rec("deposit", 1, amount="5")])
        assert "applied 1 records: 1 accounts, 1 transactions" in caplog.text
