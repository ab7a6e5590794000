from .errors import (
    LedgerError,
    NotFoundError,
    PersistenceError,
    UnknownCategoryError,
    UnknownDirectionError,
    ValidationError,
    ValidationReason,
)
from .ledger_io import (
    LedgerState,
    dump_export_csv,
    dump_state_json,
    dump_transactions_json,
    load_state_json,
    load_transactions_json,
)
from .transaction import Transaction
from .types import BudgetStatus, TransactionCategory, TransactionDirection

__all__ = [
    # models
    "BudgetStatus",
    "Transaction",
    "TransactionCategory",
    "TransactionDirection",
    # errors
    "LedgerError",
    "NotFoundError",
    "PersistenceError",
    "UnknownCategoryError",
    "UnknownDirectionError",
    "ValidationError",
    "ValidationReason",
    # IO helpers
    "LedgerState",
    "dump_export_csv",
    "dump_state_json",
    "dump_transactions_json",
    "load_state_json",
    "load_transactions_json",
]
