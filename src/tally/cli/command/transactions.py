from __future__ import annotations

from typing import Optional

from rich.table import Table
from rich.text import Text

from tally.config import EXPORT_DATE_FORMAT
from tally.model.errors import LedgerError
from tally.services.ledger_service import Ledger
from tally.workspace import Workspace

from .util import console, fmt_amount, fmt_money, fmt_signed, report_error


def run(
    *,
    direction: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
    workspace: Workspace,
) -> int:
    """List transactions in insertion order, optionally filtered.

    Returns an exit code (0 for success, 1 for an unknown filter label).
    """
    ledger = Ledger.open(workspace)
    try:
        rows = ledger.filter_transactions(direction=direction, category=category, search=search)
    except LedgerError as e:
        return report_error(e)

    if not rows:
        console.print("[yellow]No matching transactions.[/]")
        return 0

    symbol = ledger.settings.currency_symbol
    table = Table(title=f"Transactions ({len(rows)})", show_lines=False)
    table.add_column("ID", style="dim", justify="right", no_wrap=True)
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Account", style="magenta")
    table.add_column("Type")
    table.add_column("Category", style="yellow")
    table.add_column("Description", style="white")
    table.add_column("Amount", justify="right")

    for t in rows:
        table.add_row(
            str(t.id),
            t.date.strftime(EXPORT_DATE_FORMAT),
            Text(t.account),
            t.direction.label,
            t.category.label,
            Text(t.description),
            fmt_signed(t.amount, t.direction, symbol),
        )

    console.print(table)
    totals = ledger.totals_by_direction()
    console.print(
        Text.assemble(
            ("Global balance: ", "bold"),
            fmt_amount(ledger.global_balance(), symbol),
            f"  (credits {fmt_money(totals.credit, symbol)}, debits {fmt_money(totals.debit, symbol)})",
        )
    )
    return 0
