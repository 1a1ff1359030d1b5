"""payment_engine.core — public API for result, error, amount and id types."""

from payment_engine.core.errors import (
    AlreadyExecutedTransaction as AlreadyExecutedTransaction,
)
from payment_engine.core.errors import (
    ChargebackTransactionError as ChargebackTransactionError,
)
from payment_engine.core.errors import (
    DisputeTransactionError as DisputeTransactionError,
)
from payment_engine.core.errors import (
    DuplicatedTransaction as DuplicatedTransaction,
)
from payment_engine.core.errors import (
    EngineError as EngineError,
)
from payment_engine.core.errors import (
    FieldViolation as FieldViolation,
)
from payment_engine.core.errors import (
    MissingAmount as MissingAmount,
)
from payment_engine.core.errors import (
    ResolveTransactionError as ResolveTransactionError,
)
from payment_engine.core.errors import (
    TransactionError as TransactionError,
)
from payment_engine.core.errors import (
    UnknownOperation as UnknownOperation,
)
from payment_engine.core.errors import (
    ValidationError as ValidationError,
)
from payment_engine.core.identifiers import (
    parse_client_id as parse_client_id,
)
from payment_engine.core.identifiers import (
    parse_tx_id as parse_tx_id,
)
from payment_engine.core.money import (
    ENGINE_DECIMAL_CONTEXT as ENGINE_DECIMAL_CONTEXT,
)
from payment_engine.core.money import (
    format_amount as format_amount,
)
from payment_engine.core.money import (
    parse_amount as parse_amount,
)
from payment_engine.core.result import (
    Err as Err,
)
from payment_engine.core.result import (
    Ok as Ok,
)
from payment_engine.core.result import (
    Result as Result,
)
from payment_engine.core.result import (
    unwrap as unwrap,
)
