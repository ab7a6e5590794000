from __future__ import annotations

from rich.table import Table
from rich.text import Text

from tally.services.ledger_service import Ledger
from tally.workspace import Workspace

from .util import console, fmt_amount


def run(*, workspace: Workspace) -> int:
    """Show each account balance and the global balance."""
    ledger = Ledger.open(workspace)
    symbol = ledger.settings.currency_symbol

    table = Table(title="Account Balances", show_lines=False)
    table.add_column("Account", style="cyan", no_wrap=True)
    table.add_column("Balance", justify="right")

    for name, balance in ledger.balances.items():
        table.add_row(Text(name), fmt_amount(balance, symbol))

    table.add_row("", Text(""))
    table.add_row(Text("Global", style="bold"), fmt_amount(ledger.global_balance(), symbol))

    console.print(table)
    return 0
