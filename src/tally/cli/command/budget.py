from __future__ import annotations

"""
Budget reporting: compare a month's spending against category budgets,
or set a category's budget.
"""

from datetime import date
from typing import Optional

from rich.table import Table

from tally.model.errors import LedgerError
from tally.services.budget_service import BudgetLine, BudgetReport
from tally.services.ledger_service import Ledger
from tally.workspace import Workspace

from .util import STATUS_STYLES, console, fmt_money, report_error, save_or_report


def run(
    *,
    year: Optional[int] = None,
    month: Optional[int] = None,
    set_category: Optional[str] = None,
    amount: Optional[str] = None,
    workspace: Workspace,
) -> int:
    """Display the monthly budget report, or set a budget when set_category is given.

    Args:
        year: Report year (default: current year)
        month: Report month 1-12 (default: current month)
        set_category: Category whose budget to overwrite
        amount: New budget amount (required with set_category)
        workspace: Workspace providing data paths

    Returns:
        Exit code (0 = success, 1 = invalid input or failed save)
    """
    ledger = Ledger.open(workspace)

    if set_category is not None:
        if amount is None:
            console.print("[red]Error:[/] --set requires --amount")
            return 1
        try:
            value = ledger.set_budget(set_category, amount)
        except LedgerError as e:
            return report_error(e)
        console.print(
            f"[green]Budget for {set_category} set to[/] "
            f"{fmt_money(value, ledger.settings.currency_symbol)}"
        )
        return save_or_report(ledger)

    today = date.today()
    year = today.year if year is None else year
    month = today.month if month is None else month
    if month < 1 or month > 12:
        console.print("[red]Error:[/] --month must be between 1 and 12")
        return 1

    _display_budget_report(ledger.budget_report(year, month), ledger.settings.currency_symbol)
    return 0


def _display_budget_report(report: BudgetReport, symbol: str) -> None:
    table = Table(title=f"Budget Report ({report.year}-{report.month:02d})", show_lines=True)
    table.add_column("Category", style="cyan", no_wrap=True)
    table.add_column("Budget", style="green", justify="right")
    table.add_column("Spent", style="yellow", justify="right")
    table.add_column("Remaining", justify="right")
    table.add_column("% Used", justify="right")

    for line in report.lines:
        table.add_row(*_row_for(line, symbol))

    console.print(table)
    console.print(f"\n[bold]Total Budgeted:[/] {fmt_money(report.total_budgeted, symbol)}")
    console.print(f"[bold]Total Spent:[/] {fmt_money(report.total_spent, symbol)}")

    if report.exceeded_count > 0:
        plural = "y" if report.exceeded_count == 1 else "ies"
        console.print(f"\n[yellow]⚠ {report.exceeded_count} categor{plural} over budget[/]")


def _row_for(line: BudgetLine, symbol: str) -> tuple[str, str, str, str, str]:
    style = STATUS_STYLES[line.status]
    budget_str = fmt_money(line.budgeted, symbol) if line.budgeted > 0 else "—"
    spent_str = fmt_money(line.spent, symbol) if line.spent > 0 else "—"
    if line.budgeted > 0:
        remaining_str = f"[{style}]{fmt_money(line.remaining, symbol)}[/]"
    else:
        remaining_str = "—"
    if line.percent_used is not None:
        pct_str = f"[{style}]{line.percent_used:.1f}%[/]"
    else:
        pct_str = "—"
    return (f"[{style}]{line.category.label}[/]", budget_str, spent_str, remaining_str, pct_str)
