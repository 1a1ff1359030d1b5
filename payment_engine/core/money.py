"""Decimal context and amount helpers.

All balance arithmetic uses ENGINE_DECIMAL_CONTEXT with prec=28,
ROUND_HALF_EVEN, and traps for InvalidOperation/DivisionByZero/Overflow.
Amounts never pass through float.
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN as _ROUND_HALF_EVEN
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)

from payment_engine.core.result import Err, Ok

ENGINE_DECIMAL_CONTEXT = Context(
    prec=28,
    rounding=_ROUND_HALF_EVEN,
    Emin=-999999,
    Emax=999999,
    capitals=1,
    clamp=0,
    flags=[],
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

ZERO = Decimal(0)

DEFAULT_OUTPUT_PLACES = 4

# Largest finite single-precision float; upstream producers encode amounts as f32.
MAX_AMOUNT = Decimal("340282346638528859811704183484516925440")


def parse_amount(raw: str) -> Ok[Decimal] | Err[str]:
    """Parse a textual amount into a finite, non-negative Decimal."""
    text = raw.strip()
    if not text:
        return Err("amount must be non-empty")
    try:
        with localcontext(ENGINE_DECIMAL_CONTEXT):
            value = Decimal(text)
    except InvalidOperation:
        return Err(f"amount is not a decimal number: '{raw}'")
    if not value.is_finite():
        return Err(f"amount must be finite, got '{raw}'")
    if value < 0:
        return Err(f"amount must be non-negative, got '{raw}'")
    if value > MAX_AMOUNT:
        return Err(f"amount must not exceed {MAX_AMOUNT:.7e}, got '{raw}'")
    return Ok(value)


def format_amount(value: Decimal, places: int = DEFAULT_OUTPUT_PLACES) -> str:
    """Render value as a plain decimal string with exactly `places` digits.

    Precision grows with the value, so quantize never runs out of digits.

    >>> format_amount(Decimal("1.5"))
    '1.5000'
    """
    exponent = Decimal(1).scaleb(-places)
    with localcontext(ENGINE_DECIMAL_CONTEXT) as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        quantized = value.quantize(exponent)
    if quantized == 0:
        quantized = abs(quantized)  # never print "-0.0000"
    return f"{quantized:f}"
