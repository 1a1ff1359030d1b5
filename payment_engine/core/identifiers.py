"""Bounded identifier parsing for client and transaction ids.

Ids travel through the engine as plain ints; these parsers enforce the wire
bounds at decode time. Clients are unsigned 16-bit, transactions unsigned
32-bit.
"""

from __future__ import annotations

from payment_engine.core.result import Err, Ok

CLIENT_ID_MAX = 2**16 - 1
TX_ID_MAX = 2**32 - 1


def _parse_bounded(raw: str | int, name: str, upper: int) -> Ok[int] | Err[str]:
    if isinstance(raw, bool):
        return Err(f"{name} must be an integer, got {raw!r}")
    if isinstance(raw, int):
        value = raw
    else:
        text = raw.strip()
        if not (text.isascii() and text.isdigit()):
            return Err(f"{name} must be an unsigned integer, got '{raw}'")
        value = int(text)
    if not 0 <= value <= upper:
        return Err(f"{name} must be between 0 and {upper}, got {value}")
    return Ok(value)


def parse_client_id(raw: str | int) -> Ok[int] | Err[str]:
    """Client (account) id, 0..65535."""
    return _parse_bounded(raw, "client", CLIENT_ID_MAX)


def parse_tx_id(raw: str | int) -> Ok[int] | Err[str]:
    """Transaction (ledger entry) id, 0..4294967295."""
    return _parse_bounded(raw, "tx", TX_ID_MAX)
