from __future__ import annotations

from decimal import Decimal

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from tally.model.errors import LedgerError
from tally.model.types import BudgetStatus, TransactionDirection
from tally.services.ledger_service import Ledger

console = Console()

STATUS_STYLES = {
    BudgetStatus.OK: "green",
    BudgetStatus.NEUTRAL: "yellow",
    BudgetStatus.EXCEEDED: "bold red",
}


def fmt_money(amt: Decimal, symbol: str) -> str:
    return f"{amt:,.2f} {symbol}"


def fmt_amount(amt: Decimal, symbol: str) -> Text:
    s = fmt_money(amt, symbol)
    if amt < 0:
        return Text(s, style="bold red")
    elif amt > 0:
        return Text(s, style="bold green")
    return Text(s)


def fmt_signed(amt: Decimal, direction: TransactionDirection, symbol: str) -> Text:
    """Positive magnitude styled by direction: credits green, debits red."""
    style = "green" if direction is TransactionDirection.CREDIT else "red"
    return Text(fmt_money(amt, symbol), style=style)


def report_error(e: LedgerError) -> int:
    console.print(f"[red]Error:[/] {escape(str(e))}")
    return 1


def save_or_report(ledger: Ledger) -> int:
    """Persist after a mutation; exit code 1 when the save failed."""
    if ledger.save():
        return 0
    console.print("[red]Error:[/] Changes could not be saved; see log for details")
    return 1
