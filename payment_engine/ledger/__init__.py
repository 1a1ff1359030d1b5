"""payment_engine.ledger — accounts, ledger entries, classifier and engine."""

from payment_engine.ledger.account import Account as Account
from payment_engine.ledger.account import AccountSnapshot as AccountSnapshot
from payment_engine.ledger.engine import PaymentEngine as PaymentEngine
from payment_engine.ledger.operations import Chargeback as Chargeback
from payment_engine.ledger.operations import Deposit as Deposit
from payment_engine.ledger.operations import Dispute as Dispute
from payment_engine.ledger.operations import Operation as Operation
from payment_engine.ledger.operations import Resolve as Resolve
from payment_engine.ledger.operations import Withdraw as Withdraw
from payment_engine.ledger.operations import classify_operation as classify_operation
from payment_engine.ledger.transactions import EntryKind as EntryKind
from payment_engine.ledger.transactions import EntryStatus as EntryStatus
from payment_engine.ledger.transactions import LedgerEntry as LedgerEntry
