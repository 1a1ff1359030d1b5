"""Client account: available/held funds and the frozen flag.

Balance-changing methods return bool and never raise. A False return is an
expected refusal (insufficient funds, frozen account), not an error; the
ledger entry decides what a refusal means for its own status.

Invariants:
  available >= 0 and held >= 0 after every call.
  Once frozen, every balance-changing call returns False.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import final

from payment_engine.core.money import ENGINE_DECIMAL_CONTEXT, ZERO


@final
@dataclass(frozen=True, slots=True)
class AccountSnapshot:
    """Point-in-time view of an account, as written to the output."""

    client: int
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool


@final
@dataclass(slots=True)
class Account:
    """Mutable account owned by the engine for the duration of a run."""

    client_id: int
    available: Decimal = ZERO
    held: Decimal = ZERO
    frozen: bool = False

    @property
    def total(self) -> Decimal:
        """Derived, never stored: available + held."""
        with localcontext(ENGINE_DECIMAL_CONTEXT):
            return self.available + self.held

    def deposit(self, amount: Decimal) -> bool:
        if self.frozen:
            return False
        with localcontext(ENGINE_DECIMAL_CONTEXT):
            self.available += amount
        return True

    def withdraw(self, amount: Decimal) -> bool:
        if self.frozen or amount > self.available:
            return False
        with localcontext(ENGINE_DECIMAL_CONTEXT):
            self.available -= amount
        return True

    def hold(self, amount: Decimal) -> bool:
        """Move amount from available to held (dispute)."""
        if self.frozen or amount > self.available:
            return False
        with localcontext(ENGINE_DECIMAL_CONTEXT):
            self.available -= amount
            self.held += amount
        return True

    def release(self, amount: Decimal) -> bool:
        """Move amount from held back to available (resolve)."""
        if self.frozen or amount > self.held:
            return False
        with localcontext(ENGINE_DECIMAL_CONTEXT):
            self.held -= amount
            self.available += amount
        return True

    def chargeback(self, amount: Decimal) -> bool:
        """Remove amount from held and lock the account for good."""
        if self.frozen or amount > self.held:
            return False
        with localcontext(ENGINE_DECIMAL_CONTEXT):
            self.held -= amount
        self.frozen = True
        return True

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            client=self.client_id,
            available=self.available,
            held=self.held,
            total=self.total,
            locked=self.frozen,
        )
