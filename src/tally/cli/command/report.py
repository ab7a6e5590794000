from __future__ import annotations

"""Summary report: totals by direction and all-time expense shares by category."""

from rich.table import Table

from tally.services.ledger_service import Ledger
from tally.services.query_service import share_percentages
from tally.workspace import Workspace

from .util import console, fmt_amount, fmt_money


def run(*, workspace: Workspace) -> int:
    ledger = Ledger.open(workspace)
    symbol = ledger.settings.currency_symbol
    totals = ledger.totals_by_direction()

    summary = Table(title="Account Summary", show_header=False)
    summary.add_column("Label", style="bold")
    summary.add_column("Value", justify="right")
    summary.add_row("Total credits", fmt_money(totals.credit, symbol))
    summary.add_row("Total debits", fmt_money(totals.debit, symbol))
    summary.add_row("Global balance", fmt_amount(ledger.global_balance(), symbol))
    console.print(summary)

    shares = ledger.expense_shares_by_category()
    if not shares:
        console.print("[yellow]No expenses recorded yet.[/]")
        return 0

    percents = share_percentages(shares)
    table = Table(title="Expenses by Category")
    table.add_column("Category", style="cyan")
    table.add_column("Spent", justify="right")
    table.add_column("Share", justify="right", style="magenta")
    for category, value in shares.items():
        table.add_row(category.label, fmt_money(value, symbol), f"{percents[category]:.1f}%")
    console.print(table)
    return 0
