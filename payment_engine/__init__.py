"""payment_engine — replay a ledger of client transactions into account balances."""

__version__ = "0.1.0"
