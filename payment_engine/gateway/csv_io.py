"""CSV adapter: stream TransactionRecords in, write AccountSnapshots out.

read_records never raises for bad content: a malformed header or row is
yielded as Err and the caller decides to stop. Streams; does not load the
entire file.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TextIO

from payment_engine.core.errors import FieldViolation, ValidationError
from payment_engine.core.money import format_amount
from payment_engine.core.result import Err, Ok
from payment_engine.gateway.parser import parse_record
from payment_engine.gateway.types import RECORD_FIELDS, SNAPSHOT_FIELDS, TransactionRecord
from payment_engine.infra.config import DEFAULT_CONFIG, EngineConfig
from payment_engine.ledger.account import AccountSnapshot

_REQUIRED_HEADERS: tuple[str, ...] = ("type", "client", "tx")


def _get_encoding(config: EngineConfig) -> str:
    if config.encoding.lower() in ("utf-8", "utf8"):
        return "utf-8-sig"  # Strip BOM if present
    return config.encoding


def _header_error(fieldnames: list[str]) -> ValidationError | None:
    violations = [
        FieldViolation(path=name, constraint="missing header", actual_value=repr(fieldnames))
        for name in _REQUIRED_HEADERS
        if name not in fieldnames
    ]
    violations.extend(
        FieldViolation(path=name, constraint="unknown header", actual_value=repr(fieldnames))
        for name in fieldnames
        if name not in RECORD_FIELDS
    )
    if not violations:
        return None
    return ValidationError(
        message="Invalid header: " + "; ".join(f"{v.path}: {v.constraint}" for v in violations),
        code="INVALID_HEADER",
        source="gateway.csv_io.read_records",
        fields=tuple(violations),
        line=1,
    )


def _malformed(e: csv.Error, line: int) -> ValidationError:
    return ValidationError(
        message=f"Malformed CSV at line {line}: {e}",
        code="MALFORMED_CSV",
        source="gateway.csv_io.read_records",
        fields=(),
        line=line,
    )


def read_records(
    stream: TextIO, config: EngineConfig = DEFAULT_CONFIG,
) -> Iterator[Ok[TransactionRecord] | Err[ValidationError]]:
    """Yield one Result per data row of a headed CSV stream.

    Headers and values are whitespace-trimmed. An empty stream yields nothing.
    After the first Err nothing more is yielded.
    """
    reader = csv.DictReader(stream, delimiter=config.delimiter)
    try:
        raw_fieldnames = reader.fieldnames
    except csv.Error as e:
        yield Err(_malformed(e, reader.line_num))
        return
    if raw_fieldnames is None:
        return
    fieldnames = [name.strip() for name in raw_fieldnames]
    reader.fieldnames = fieldnames

    error = _header_error(fieldnames)
    if error is not None:
        yield Err(error)
        return

    rows = iter(reader)
    while True:
        try:
            row = next(rows)
        except StopIteration:
            return
        except csv.Error as e:
            yield Err(_malformed(e, reader.line_num))
            return
        result = parse_record(row, line=reader.line_num)
        yield result
        if isinstance(result, Err):
            return


def iter_file(
    path: Path, config: EngineConfig = DEFAULT_CONFIG,
) -> Iterator[Ok[TransactionRecord] | Err[ValidationError]]:
    """Open path with the configured buffer and encoding, then read_records.

    OSError from opening or reading propagates to the caller.
    """
    with path.open(
        "r", buffering=config.buffer_capacity, encoding=_get_encoding(config), newline="",
    ) as f:
        yield from read_records(f, config)


def write_snapshots(
    stream: TextIO,
    snapshots: Iterable[AccountSnapshot],
    config: EngineConfig = DEFAULT_CONFIG,
) -> int:
    """Write the header and one row per snapshot. Returns the row count.

    Every row is rendered before the first byte is written.
    """
    ordered = sorted(snapshots, key=lambda s: s.client) if config.sort_output else snapshots
    rows = [
        [
            str(snap.client),
            format_amount(snap.available, config.output_places),
            format_amount(snap.held, config.output_places),
            format_amount(snap.total, config.output_places),
            str(snap.locked).lower(),
        ]
        for snap in ordered
    ]
    writer = csv.writer(stream, delimiter=config.delimiter, lineterminator="\n")
    writer.writerow(SNAPSHOT_FIELDS)
    writer.writerows(rows)
    return len(rows)


def write_records(
    stream: TextIO,
    records: Iterable[TransactionRecord],
    config: EngineConfig = DEFAULT_CONFIG,
) -> int:
    """Write records in input format (header type,client,tx,amount)."""
    writer = csv.writer(stream, delimiter=config.delimiter, lineterminator="\n")
    writer.writerow(RECORD_FIELDS)
    count = 0
    for record in records:
        writer.writerow([
            record.operation,
            record.client,
            record.tx,
            "" if record.amount is None else f"{record.amount:f}",
        ])
        count += 1
    return count
