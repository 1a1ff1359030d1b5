"""Gateway parser — raw CSV row (dict) to TransactionRecord.

parse_record is the single entry point for external record data. It is
total: every row yields Ok or Err, never an exception. All field problems in
a row are reported together in one ValidationError.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal

from payment_engine.core.errors import FieldViolation, ValidationError
from payment_engine.core.identifiers import parse_client_id, parse_tx_id
from payment_engine.core.money import parse_amount
from payment_engine.core.result import Err, Ok
from payment_engine.gateway.types import RECORD_FIELDS, TransactionRecord

_SOURCE = "gateway.parser.parse_record"


def _text(raw: Mapping[str | None, object], key: str) -> str | None:
    val = raw.get(key)
    if isinstance(val, str):
        return val.strip()
    return None


def parse_record(
    raw: Mapping[str | None, object], line: int | None = None,
) -> Ok[TransactionRecord] | Err[ValidationError]:
    """Parse one row into a TransactionRecord.

    `raw` is a csv.DictReader row: surplus values land under the None key
    and short rows carry None for the missing columns.
    """
    violations: list[FieldViolation] = []

    for key in raw:
        if key not in RECORD_FIELDS:
            violations.append(FieldViolation(
                path=str(key) if key is not None else "<extra>",
                constraint="unknown field",
                actual_value=repr(raw[key]),
            ))

    operation = _text(raw, "type")
    if not operation:
        violations.append(FieldViolation(
            path="type", constraint="required non-empty string",
            actual_value=repr(raw.get("type")),
        ))
        operation = ""

    client = 0
    client_raw = _text(raw, "client")
    if client_raw is None:
        violations.append(FieldViolation(
            path="client", constraint="required", actual_value=repr(raw.get("client")),
        ))
    else:
        match parse_client_id(client_raw):
            case Ok(client):
                pass
            case Err(e):
                violations.append(FieldViolation(
                    path="client", constraint=e, actual_value=client_raw,
                ))

    tx = 0
    tx_raw = _text(raw, "tx")
    if tx_raw is None:
        violations.append(FieldViolation(
            path="tx", constraint="required", actual_value=repr(raw.get("tx")),
        ))
    else:
        match parse_tx_id(tx_raw):
            case Ok(tx):
                pass
            case Err(e):
                violations.append(FieldViolation(path="tx", constraint=e, actual_value=tx_raw))

    amount: Decimal | None = None
    amount_raw = _text(raw, "amount")
    if amount_raw:
        match parse_amount(amount_raw):
            case Ok(a):
                amount = a
            case Err(e):
                violations.append(FieldViolation(
                    path="amount", constraint=e, actual_value=amount_raw,
                ))

    if violations:
        where = f"line {line}" if line is not None else "record"
        return Err(ValidationError(
            message=f"Invalid {where}: " + "; ".join(
                f"{v.path}: {v.constraint}" for v in violations
            ),
            code="INVALID_RECORD",
            source=_SOURCE,
            fields=tuple(violations),
            line=line,
        ))

    return Ok(TransactionRecord(operation=operation, client=client, tx=tx, amount=amount))
