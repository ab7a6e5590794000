"""
Typed failures raised by the ledger engine.

Every mutator validates before touching state, so catching any of these
guarantees the ledger is unchanged.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path


class LedgerError(Exception):
    """Base class for all ledger failures."""


class ValidationReason(StrEnum):
    """Why a piece of user input was rejected."""

    EMPTY_FIELDS = "empty_fields"
    NON_POSITIVE_AMOUNT = "non_positive_amount"
    INVALID_AMOUNT = "invalid_amount"
    NEGATIVE_BUDGET = "negative_budget"
    UNBUDGETABLE_CATEGORY = "unbudgetable_category"
    UNKNOWN_ACCOUNT = "unknown_account"


class ValidationError(LedgerError):
    """User input violates a precondition. Nothing was mutated."""

    def __init__(self, reason: ValidationReason, message: str):
        super().__init__(message)
        self.reason = reason


class NotFoundError(LedgerError):
    """Referenced transaction id does not exist."""

    def __init__(self, txn_id: int):
        super().__init__(f"Transaction {txn_id} not found")
        self.txn_id = txn_id


class UnknownCategoryError(LedgerError, LookupError):
    def __init__(self, label: str):
        super().__init__(f"Unknown category: {label!r}")
        self.label = label


class UnknownDirectionError(LedgerError, LookupError):
    def __init__(self, label: str):
        super().__init__(f"Unknown transaction direction: {label!r}")
        self.label = label


class PersistenceError(LedgerError):
    """I/O failure while saving, loading or exporting."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


__all__ = [
    "LedgerError",
    "NotFoundError",
    "PersistenceError",
    "UnknownCategoryError",
    "UnknownDirectionError",
    "ValidationError",
    "ValidationReason",
]
