"""
Query service - filtering, search and aggregation over ledger snapshots.

Pure functions over a sequence of transactions. Nothing here mutates its
input or keeps references to it after returning.

NO IMPORTS FROM:
- rich (console, table, prompt)
- typer
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from tally.config import FILTER_ALL, NEAR_LIMIT_RATIO
from tally.model.transaction import Transaction
from tally.model.types import BudgetStatus, TransactionCategory, TransactionDirection

ZERO = Decimal("0")

DirectionSelector = TransactionDirection | str | None
CategorySelector = TransactionCategory | str | None


@dataclass(frozen=True)
class DirectionTotals:
    """Sum of amounts partitioned by direction."""

    debit: Decimal = ZERO
    credit: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        return self.credit - self.debit


def parse_direction_selector(selector: DirectionSelector) -> TransactionDirection | None:
    """None or "all" means no filtering; anything else must resolve to a direction."""
    if selector is None or isinstance(selector, TransactionDirection):
        return selector
    if selector.strip().casefold() == FILTER_ALL:
        return None
    return TransactionDirection.from_label(selector)


def parse_category_selector(selector: CategorySelector) -> TransactionCategory | None:
    """None or "all" means no filtering; anything else must resolve to a category."""
    if selector is None or isinstance(selector, TransactionCategory):
        return selector
    if selector.strip().casefold() == FILTER_ALL:
        return None
    return TransactionCategory.from_label(selector)


def matches_search(txn: Transaction, needle: str) -> bool:
    """Case-insensitive substring match on description, account or category label."""
    return (
        needle in txn.description.casefold()
        or needle in txn.account.casefold()
        or needle in txn.category.label.casefold()
    )


def filter_transactions(
    transactions: Iterable[Transaction],
    direction: DirectionSelector = None,
    category: CategorySelector = None,
    search: str | None = None,
) -> list[Transaction]:
    """Select transactions matching every given criterion, in original order.

    Args:
        transactions: Snapshot to filter
        direction: Direction, its label, "all" or None
        category: Category, its label, "all" or None
        search: Substring looked up in description, account and category label

    Raises:
        UnknownDirectionError / UnknownCategoryError: unparseable selector
    """
    wanted_direction = parse_direction_selector(direction)
    wanted_category = parse_category_selector(category)
    needle = (search or "").strip().casefold()

    result: list[Transaction] = []
    for txn in transactions:
        if wanted_direction is not None and txn.direction is not wanted_direction:
            continue
        if wanted_category is not None and txn.category is not wanted_category:
            continue
        if needle and not matches_search(txn, needle):
            continue
        result.append(txn)
    return result


def totals_by_direction(transactions: Iterable[Transaction]) -> DirectionTotals:
    debit = ZERO
    credit = ZERO
    for txn in transactions:
        if txn.direction is TransactionDirection.CREDIT:
            credit += txn.amount
        else:
            debit += txn.amount
    return DirectionTotals(debit=debit, credit=credit)


def monthly_spend_by_category(
    transactions: Iterable[Transaction], year: int, month: int
) -> dict[TransactionCategory, Decimal]:
    """Debit totals per category for one calendar month.

    Categories without a matching debit are absent; callers default to zero.
    """
    spend: dict[TransactionCategory, Decimal] = {}
    for txn in transactions:
        if txn.direction is not TransactionDirection.DEBIT:
            continue
        if txn.date.year != year or txn.date.month != month:
            continue
        spend[txn.category] = spend.get(txn.category, ZERO) + txn.amount
    return spend


def budget_status(
    category: TransactionCategory, spent: Decimal, budgeted: Decimal
) -> BudgetStatus:
    """Classify spend against a budget ceiling.

    - EXCEEDED: a budget is set and spend is above it
    - OK: a budget is set and spend is at most 80% of it
    - NEUTRAL: no budget, the 80%-100% band, or an unbudgetable category
    """
    if not category.is_budgetable or budgeted <= 0:
        return BudgetStatus.NEUTRAL
    if spent > budgeted:
        return BudgetStatus.EXCEEDED
    if spent <= NEAR_LIMIT_RATIO * budgeted:
        return BudgetStatus.OK
    return BudgetStatus.NEUTRAL


def expense_shares_by_category(
    transactions: Iterable[Transaction],
) -> dict[TransactionCategory, Decimal]:
    """All-time debit totals per category, largest first.

    Ties keep the order in which categories were first encountered.
    """
    shares: dict[TransactionCategory, Decimal] = {}
    for txn in transactions:
        if txn.direction is TransactionDirection.DEBIT:
            shares[txn.category] = shares.get(txn.category, ZERO) + txn.amount
    # sorted() is stable, so equal totals keep encounter order
    return dict(sorted(shares.items(), key=lambda item: item[1], reverse=True))


def net_by_account(transactions: Iterable[Transaction]) -> dict[str, Decimal]:
    """Credits minus debits per account, in order of first appearance."""
    net: dict[str, Decimal] = {}
    for txn in transactions:
        net[txn.account] = net.get(txn.account, ZERO) + txn.signed_amount
    return net


def share_percentages(shares: dict[TransactionCategory, Decimal]) -> dict[TransactionCategory, Decimal]:
    """Convert category totals to percentages of their sum (0-100)."""
    total = sum(shares.values(), ZERO)
    if total <= 0:
        return {category: ZERO for category in shares}
    return {category: value * 100 / total for category, value in shares.items()}


__all__ = [
    "DirectionTotals",
    "budget_status",
    "expense_shares_by_category",
    "filter_transactions",
    "matches_search",
    "monthly_spend_by_category",
    "net_by_account",
    "parse_category_selector",
    "parse_direction_selector",
    "share_percentages",
    "totals_by_direction",
]
