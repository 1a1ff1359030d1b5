"""Command-line entry points.

payment-engine PATH            replay a transactions CSV, print balances
payment-engine-generate SIZE   print SIZE synthetic deposit rows

Exit status: 0 on success, 1 when the run aborts on a hard error or the
input cannot be read, 2 on bad configuration.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterator, Sequence
from decimal import Decimal
from pathlib import Path
from typing import TextIO

from payment_engine import __version__
from payment_engine.core.identifiers import CLIENT_ID_MAX, TX_ID_MAX
from payment_engine.core.money import parse_amount
from payment_engine.core.result import Err, Ok
from payment_engine.gateway.csv_io import iter_file, write_records, write_snapshots
from payment_engine.gateway.types import TransactionRecord
from payment_engine.infra.config import LOG_LEVELS, EngineConfig, load_config
from payment_engine.infra.logging_config import setup_logging
from payment_engine.ledger.engine import PaymentEngine

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="payment-engine",
        description="Replay a transactions CSV and print the final account balances.",
    )
    parser.add_argument("path", type=Path, help="input CSV (type,client,tx,amount)")
    parser.add_argument(
        "-b", "--buffer-capacity",
        type=int,
        default=None,
        help="read buffer size in bytes (default: 4096)",
    )
    parser.add_argument(
        "--sort",
        action="store_true",
        default=None,
        help="write accounts ordered by client id",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default=None,
        help="stderr log level (default: WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _resolve_config(args: argparse.Namespace) -> Ok[EngineConfig] | Err[str]:
    """Environment first, then explicit flags."""
    overrides: dict[str, object] = {}
    if args.buffer_capacity is not None:
        overrides["buffer_capacity"] = args.buffer_capacity
    if args.sort is not None:
        overrides["sort_output"] = args.sort
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    return load_config(**overrides)


def main(
    argv: Sequence[str] | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    out = stdout if stdout is not None else sys.stdout
    err_stream = stderr if stderr is not None else sys.stderr
    args = build_parser().parse_args(argv)

    match _resolve_config(args):
        case Err(message):
            print(f"error: {message}", file=err_stream)
            return 2
        case Ok(config):
            pass

    setup_logging(config.log_level, err_stream)

    engine = PaymentEngine()
    try:
        result = engine.compute(iter_file(args.path, config))
    except (OSError, UnicodeDecodeError) as e:
        print(f"error: cannot read {args.path}: {e}", file=err_stream)
        return 1

    match result:
        case Err(error):
            logger.debug("run aborted: %s", error.to_dict())
            print(f"error: {error.message}", file=err_stream)
            return 1
        case Ok(count):
            logger.info("replayed %d records from %s", count, args.path)

    write_snapshots(out, engine.dump(), config)
    out.flush()
    return 0


# ---------------------------------------------------------------------------
# Synthetic input generator
# ---------------------------------------------------------------------------


def generate_records(
    size: int, client: int = 1, amount: Decimal = Decimal("0.123"),
) -> Iterator[TransactionRecord]:
    """Deposit rows with tx ids 0..size-1, all for one client."""
    for index in range(size):
        yield TransactionRecord(operation="deposit", client=client, tx=index, amount=amount)


def _non_negative_int(raw: str) -> int:
    value = int(raw)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def _amount(raw: str) -> Decimal:
    match parse_amount(raw):
        case Ok(value):
            return value
        case Err(message):
            raise argparse.ArgumentTypeError(message)


def generate_main(argv: Sequence[str] | None = None, stdout: TextIO | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="payment-engine-generate",
        description="Write SIZE synthetic deposit rows to stdout.",
    )
    parser.add_argument("size", type=_non_negative_int, help="number of rows")
    parser.add_argument("--client", type=int, default=1, help="client id (default: 1)")
    parser.add_argument("--amount", type=_amount, default=Decimal("0.123"),
                        help="amount per deposit (default: 0.123)")
    args = parser.parse_args(argv)
    if not 0 <= args.client <= CLIENT_ID_MAX:
        parser.error(f"--client must be between 0 and {CLIENT_ID_MAX}")
    if args.size > TX_ID_MAX + 1:
        parser.error(f"size must be at most {TX_ID_MAX + 1}")

    out = stdout if stdout is not None else sys.stdout
    write_records(out, generate_records(args.size, args.client, args.amount))
    out.flush()
    return 0


def run() -> None:
    sys.exit(main())


def run_generate() -> None:
    sys.exit(generate_main())
