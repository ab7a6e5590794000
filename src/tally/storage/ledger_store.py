"""
Ledger store - the authoritative in-memory collections.

Owns the transaction list, the account balance map and the budget map, and is
the only place they are mutated. Every mutator validates all of its input
before touching state, so a raised error always leaves the store unchanged.

Balance effects are applied with two named steps:
- _revert_effect(txn): undo txn's effect on txn's account (direction reversed)
- _apply_effect(txn): apply txn's effect on txn's account

An edit is always revert (old fields, old account) -> mutate -> apply (new
fields, new account). Adjusting with post-edit fields against the pre-edit
account corrupts balances whenever the account changes.

Readers get snapshots (copies); references into the live collections are
never handed out.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Callable

from tally.config import DEFAULT_ACCOUNTS
from tally.model.errors import NotFoundError, ValidationError, ValidationReason
from tally.model.transaction import Transaction, signed_effect
from tally.model.types import TransactionCategory, TransactionDirection

log = logging.getLogger(__name__)

ZERO = Decimal("0")

AmountInput = Decimal | int | float | str


class IdCounter:
    """Source of transaction ids: strictly increasing, never reused in-process."""

    def __init__(self, next_id: int = 1):
        if next_id < 1:
            raise ValueError("next_id must be >= 1")
        self._next_id = next_id

    @property
    def next_id(self) -> int:
        return self._next_id

    def allocate(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def reseed(self, ids: Iterable[int]) -> None:
        """Reset from loaded data: max(existing ids) + 1, or 1 when empty."""
        self._next_id = max(ids, default=0) + 1


def parse_amount(raw: AmountInput) -> Decimal:
    """Parse user-entered amount text or number.

    Raises:
        ValidationError: empty_fields when blank, invalid_amount when not a
            finite number, non_positive_amount when <= 0
    """
    if isinstance(raw, str) and not raw.strip():
        raise ValidationError(ValidationReason.EMPTY_FIELDS, "Please fill in all fields")
    if isinstance(raw, bool):
        raise ValidationError(ValidationReason.INVALID_AMOUNT, f"Invalid amount: {raw!r}")
    try:
        amount = Decimal(str(raw).strip()) if not isinstance(raw, Decimal) else raw
    except InvalidOperation:
        raise ValidationError(
            ValidationReason.INVALID_AMOUNT, f"Invalid amount: {raw!r}; enter a number"
        ) from None
    if not amount.is_finite():
        raise ValidationError(ValidationReason.INVALID_AMOUNT, f"Invalid amount: {raw!r}")
    if amount <= 0:
        raise ValidationError(ValidationReason.NON_POSITIVE_AMOUNT, "Amount must be positive")
    return amount


def _coerce_direction(value: TransactionDirection | str) -> TransactionDirection:
    if isinstance(value, TransactionDirection):
        return value
    return TransactionDirection.from_label(value)


def _coerce_category(value: TransactionCategory | str) -> TransactionCategory:
    if isinstance(value, TransactionCategory):
        return value
    return TransactionCategory.from_label(value)


class LedgerStore:
    """Authoritative ledger collections and their consistent mutation."""

    def __init__(
        self,
        accounts: Iterable[str] = DEFAULT_ACCOUNTS,
        *,
        counter: IdCounter | None = None,
        today: Callable[[], date] = date.today,
    ):
        self._transactions: list[Transaction] = []
        self._balances: dict[str, Decimal] = {name: ZERO for name in accounts}
        self._budgets: dict[TransactionCategory, Decimal] = {
            c: ZERO for c in TransactionCategory.budgetable()
        }
        self._counter = counter or IdCounter()
        self._today = today

    # ---- Snapshots ----

    @property
    def transactions(self) -> list[Transaction]:
        return [t.model_copy() for t in self._transactions]

    @property
    def balances(self) -> dict[str, Decimal]:
        return dict(self._balances)

    @property
    def budgets(self) -> dict[TransactionCategory, Decimal]:
        return dict(self._budgets)

    @property
    def accounts(self) -> list[str]:
        return list(self._balances)

    @property
    def next_id(self) -> int:
        return self._counter.next_id

    def get(self, txn_id: int) -> Transaction:
        return self._find(txn_id).model_copy()

    def global_balance(self) -> Decimal:
        """Sum of all account balances."""
        return sum(self._balances.values(), ZERO)

    # ---- Mutators ----

    def add_transaction(
        self,
        account: str,
        direction: TransactionDirection | str,
        category: TransactionCategory | str,
        description: str,
        amount: AmountInput,
    ) -> Transaction:
        """Record a new transaction dated today and apply its balance effect.

        Raises:
            ValidationError: empty description, bad or non-positive amount,
                or an account missing from the balance map
            UnknownDirectionError / UnknownCategoryError: unparseable labels
        """
        account, direction, category, description, value = self._validate_entry(
            account, direction, category, description, amount
        )
        txn = Transaction(
            id=self._counter.allocate(),
            date=self._today(),
            account=account,
            direction=direction,
            category=category,
            description=description,
            amount=value,
        )
        self._transactions.append(txn)
        self._apply_effect(txn)
        log.debug("Added transaction %d on %s", txn.id, account)
        return txn.model_copy()

    def edit_transaction(
        self,
        txn_id: int,
        account: str,
        direction: TransactionDirection | str,
        category: TransactionCategory | str,
        description: str,
        amount: AmountInput,
    ) -> Transaction:
        """Replace every field except id and date, keeping balances consistent.

        Raises:
            NotFoundError: no transaction has txn_id
            ValidationError: same rules as add_transaction
        """
        txn = self._find(txn_id)
        account, direction, category, description, value = self._validate_entry(
            account, direction, category, description, amount
        )

        self._revert_effect(txn)
        txn.account = account
        txn.direction = direction
        txn.category = category
        txn.description = description
        txn.amount = value
        self._apply_effect(txn)

        log.debug("Edited transaction %d", txn_id)
        return txn.model_copy()

    def delete_transaction(self, txn_id: int) -> Transaction:
        """Undo a transaction's balance effect and remove it.

        Raises:
            NotFoundError: no transaction has txn_id
        """
        txn = self._find(txn_id)
        self._revert_effect(txn)
        self._transactions.remove(txn)
        log.debug("Deleted transaction %d", txn_id)
        return txn

    def set_budget(self, category: TransactionCategory | str, amount: AmountInput) -> Decimal:
        """Overwrite the monthly ceiling for a budgetable category.

        Raises:
            ValidationError: negative or unparseable amount, or Salary
        """
        category = _coerce_category(category)
        if not category.is_budgetable:
            raise ValidationError(
                ValidationReason.UNBUDGETABLE_CATEGORY,
                f"{category.label} is income and cannot have a budget",
            )
        if isinstance(amount, str) and not amount.strip():
            raise ValidationError(ValidationReason.EMPTY_FIELDS, "Please enter a budget amount")
        try:
            value = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
        except InvalidOperation:
            raise ValidationError(
                ValidationReason.INVALID_AMOUNT, f"Invalid budget: {amount!r}"
            ) from None
        if not value.is_finite():
            raise ValidationError(ValidationReason.INVALID_AMOUNT, f"Invalid budget: {amount!r}")
        if value < 0:
            raise ValidationError(ValidationReason.NEGATIVE_BUDGET, "Budget cannot be negative")
        self._budgets[category] = value
        return value

    def restore(
        self,
        transactions: Iterable[Transaction],
        balances: Mapping[str, Decimal],
        budgets: Mapping[TransactionCategory, Decimal],
        *,
        default_accounts: Iterable[str] = DEFAULT_ACCOUNTS,
    ) -> None:
        """Replace all collections with loaded data and reseed the id counter.

        Default accounts absent from `balances` are added at zero. A
        transaction whose account is missing gets that account created with a
        balance equal to the net effect of its transactions, so the global
        balance still matches the transaction list.
        """
        txns = [t.model_copy() for t in transactions]
        new_balances = dict(balances)
        for name in default_accounts:
            new_balances.setdefault(name, ZERO)

        orphans: dict[str, Decimal] = {}
        for t in txns:
            if t.account not in new_balances:
                orphans[t.account] = orphans.get(t.account, ZERO) + t.signed_amount
        for name, net in orphans.items():
            log.warning("Transactions reference unknown account %r; creating it with %s", name, net)
            new_balances[name] = net

        new_budgets = {c: ZERO for c in TransactionCategory.budgetable()}
        new_budgets.update({c: v for c, v in budgets.items() if c.is_budgetable})

        self._transactions = txns
        self._balances = new_balances
        self._budgets = new_budgets
        self._counter.reseed(t.id for t in txns)

    # ---- Internals ----

    def _find(self, txn_id: int) -> Transaction:
        for txn in self._transactions:
            if txn.id == txn_id:
                return txn
        raise NotFoundError(txn_id)

    def _validate_entry(
        self,
        account: str,
        direction: TransactionDirection | str,
        category: TransactionCategory | str,
        description: str,
        amount: AmountInput,
    ) -> tuple[str, TransactionDirection, TransactionCategory, str, Decimal]:
        description = (description or "").strip()
        if not description or amount is None:
            raise ValidationError(ValidationReason.EMPTY_FIELDS, "Please fill in all fields")
        value = parse_amount(amount)
        direction = _coerce_direction(direction)
        category = _coerce_category(category)
        if account not in self._balances:
            raise ValidationError(ValidationReason.UNKNOWN_ACCOUNT, f"Unknown account: {account!r}")
        return account, direction, category, description, value

    def _apply_effect(self, txn: Transaction) -> None:
        self._adjust(txn.account, txn.direction, txn.amount)

    def _revert_effect(self, txn: Transaction) -> None:
        self._adjust(txn.account, txn.direction.reverse(), txn.amount)

    def _adjust(self, account: str, direction: TransactionDirection, amount: Decimal) -> None:
        self._balances[account] = self._balances.get(account, ZERO) + signed_effect(
            direction, amount
        )


__all__ = ["IdCounter", "LedgerStore", "parse_amount"]
