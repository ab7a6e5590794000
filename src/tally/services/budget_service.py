from __future__ import annotations

"""
Budget Service - Business logic for budget calculations

Provides monthly budget vs actual lines per category with status
classification. Works on ledger snapshots; no I/O.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from tally.model.transaction import Transaction
from tally.model.types import BudgetStatus, TransactionCategory
from tally.services.query_service import budget_status, monthly_spend_by_category

ZERO = Decimal("0")


@dataclass
class BudgetLine:
    """A budgetable category with its actual spending comparison."""
    category: TransactionCategory
    budgeted: Decimal
    spent: Decimal
    remaining: Decimal
    percent_used: Optional[Decimal]  # None when no budget is set
    status: BudgetStatus


@dataclass
class BudgetReport:
    """Summary of budget vs actual for one month."""
    year: int
    month: int
    total_budgeted: Decimal
    total_spent: Decimal
    exceeded_count: int
    lines: List[BudgetLine]

    @property
    def total_remaining(self) -> Decimal:
        return self.total_budgeted - self.total_spent


def monthly_budget_report(
    transactions: Iterable[Transaction],
    budgets: Mapping[TransactionCategory, Decimal],
    year: int,
    month: int,
) -> BudgetReport:
    """
    Build the spend-vs-budget report for a month.

    Args:
        transactions: Ledger snapshot
        budgets: Budget ceilings per category (missing -> zero)
        year: Calendar year
        month: Month (1-12)

    Returns:
        BudgetReport with one line per budgetable category, in enum order
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")

    spending = monthly_spend_by_category(transactions, year, month)

    lines: List[BudgetLine] = []
    total_budgeted = ZERO
    total_spent = ZERO
    exceeded_count = 0

    for category in TransactionCategory.budgetable():
        budgeted = budgets.get(category, ZERO)
        spent = spending.get(category, ZERO)
        status = budget_status(category, spent, budgeted)

        percent_used = (spent / budgeted * 100) if budgeted > 0 else None
        if status is BudgetStatus.EXCEEDED:
            exceeded_count += 1

        total_budgeted += budgeted
        total_spent += spent

        lines.append(
            BudgetLine(
                category=category,
                budgeted=budgeted,
                spent=spent,
                remaining=budgeted - spent,
                percent_used=percent_used,
                status=status,
            )
        )

    return BudgetReport(
        year=year,
        month=month,
        total_budgeted=total_budgeted,
        total_spent=total_spent,
        exceeded_count=exceeded_count,
        lines=lines,
    )


__all__ = ["BudgetLine", "BudgetReport", "monthly_budget_report"]
