"""Error value hierarchy — ledger code returns these inside Err, never raises.

Every error is a frozen dataclass value that can be pattern-matched and
rendered. Base class EngineError; every concrete error is @final.

Refused balance operations (insufficient funds, frozen account) and disputes
of unknown transactions are NOT errors and have no type here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final


@dataclass(frozen=True, slots=True)
class EngineError:
    """Base error value. NOT @final — has subclasses."""

    message: str
    code: str
    source: str  # "module.function" that produced this error

    def to_dict(self) -> dict[str, object]:
        return {
            "message": self.message,
            "code": self.code,
            "source": self.source,
        }

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Classification errors
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class MissingAmount(EngineError):
    """A deposit or withdrawal record carries no amount."""

    operation: str

    @staticmethod
    def create(operation: str, source: str) -> MissingAmount:
        return MissingAmount(
            message=f"Invalid transaction: missing amount for '{operation}'",
            code="MISSING_AMOUNT",
            source=source,
            operation=operation,
        )

    def to_dict(self) -> dict[str, object]:
        return {**EngineError.to_dict(self), "operation": self.operation}


@final
@dataclass(frozen=True, slots=True)
class UnknownOperation(EngineError):
    """The record type is not one of the recognised operation names."""

    operation: str

    @staticmethod
    def create(operation: str, source: str) -> UnknownOperation:
        return UnknownOperation(
            message=f"Unknown operation '{operation}'",
            code="UNKNOWN_OPERATION",
            source=source,
            operation=operation,
        )

    def to_dict(self) -> dict[str, object]:
        return {**EngineError.to_dict(self), "operation": self.operation}


# ---------------------------------------------------------------------------
# Ledger entry errors — all carry the offending transaction id
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TransactionError(EngineError):
    """Base for errors tied to one ledger entry. NOT @final."""

    tx_id: int

    def to_dict(self) -> dict[str, object]:
        return {**EngineError.to_dict(self), "tx_id": self.tx_id}


@final
@dataclass(frozen=True, slots=True)
class DuplicatedTransaction(TransactionError):
    """A deposit or withdrawal reuses an id already in the ledger."""

    @staticmethod
    def create(tx_id: int, source: str) -> DuplicatedTransaction:
        return DuplicatedTransaction(
            message=f"Duplicated transaction '{tx_id}'",
            code="DUPLICATED_TRANSACTION",
            source=source,
            tx_id=tx_id,
        )


@final
@dataclass(frozen=True, slots=True)
class AlreadyExecutedTransaction(TransactionError):
    """execute() was called on an entry that already left NON_EXECUTED."""

    @staticmethod
    def create(tx_id: int, source: str) -> AlreadyExecutedTransaction:
        return AlreadyExecutedTransaction(
            message=f"Transaction '{tx_id}' already executed",
            code="ALREADY_EXECUTED",
            source=source,
            tx_id=tx_id,
        )


@final
@dataclass(frozen=True, slots=True)
class DisputeTransactionError(TransactionError):
    """Dispute of an entry that is not EXECUTED."""

    @staticmethod
    def create(tx_id: int, source: str) -> DisputeTransactionError:
        return DisputeTransactionError(
            message=f"Could not dispute transaction '{tx_id}'",
            code="DISPUTE_FAILED",
            source=source,
            tx_id=tx_id,
        )


@final
@dataclass(frozen=True, slots=True)
class ResolveTransactionError(TransactionError):
    """Resolve of an entry that is not DISPUTED."""

    @staticmethod
    def create(tx_id: int, source: str) -> ResolveTransactionError:
        return ResolveTransactionError(
            message=f"Could not resolve transaction '{tx_id}'",
            code="RESOLVE_FAILED",
            source=source,
            tx_id=tx_id,
        )


@final
@dataclass(frozen=True, slots=True)
class ChargebackTransactionError(TransactionError):
    """Chargeback of an entry that is not DISPUTED."""

    @staticmethod
    def create(tx_id: int, source: str) -> ChargebackTransactionError:
        return ChargebackTransactionError(
            message=f"Could not chargeback transaction '{tx_id}'",
            code="CHARGEBACK_FAILED",
            source=source,
            tx_id=tx_id,
        )


# ---------------------------------------------------------------------------
# Decoding errors
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class FieldViolation:
    """Describes a single field validation failure."""

    path: str  # e.g. "tx"
    constraint: str  # e.g. "must fit in 32 bits"
    actual_value: str  # e.g. "-1"


@final
@dataclass(frozen=True, slots=True)
class ValidationError(EngineError):
    """An input row could not be decoded into a TransactionRecord."""

    fields: tuple[FieldViolation, ...]
    line: int | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            **EngineError.to_dict(self),
            "line": self.line,
            "fields": [
                {"path": f.path, "constraint": f.constraint, "actual_value": f.actual_value}
                for f in self.fields
            ],
        }


type ClassificationError = MissingAmount | UnknownOperation
type LedgerError = (
    DuplicatedTransaction
    | AlreadyExecutedTransaction
    | DisputeTransactionError
    | ResolveTransactionError
    | ChargebackTransactionError
)
