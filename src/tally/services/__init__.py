"""
Service layer for the tally ledger.

This module contains the functional core business logic separated from the
imperative shell (CLI). Query and budget services are pure functions over
ledger snapshots; the Ledger service composes them with the store and the
repository into the engine API.

Principles:
- No UI framework imports (Rich, Typer)
- All dependencies injected through constructors
- Functions return data structures, not void
"""

from tally.services.budget_service import (
    BudgetLine,
    BudgetReport,
    monthly_budget_report,
)
from tally.services.ledger_service import Ledger
from tally.services.query_service import DirectionTotals

__all__ = [
    "BudgetLine",
    "BudgetReport",
    "DirectionTotals",
    "Ledger",
    "monthly_budget_report",
]
