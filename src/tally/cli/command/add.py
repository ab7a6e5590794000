from __future__ import annotations

"""Record a new transaction and save the ledger."""

from rich.markup import escape

from tally.model.errors import LedgerError
from tally.services.ledger_service import Ledger
from tally.workspace import Workspace

from .util import console, fmt_money, report_error, save_or_report


def run(
    *,
    account: str,
    direction: str,
    category: str,
    description: str,
    amount: str,
    workspace: Workspace,
) -> int:
    """Add a transaction dated today.

    Returns:
        Exit code (0 = saved, 1 = rejected input or failed save)
    """
    ledger = Ledger.open(workspace)
    try:
        txn = ledger.add_transaction(account, direction, category, description, amount)
    except LedgerError as e:
        return report_error(e)

    symbol = ledger.settings.currency_symbol
    console.print(
        f"[green]Added[/] #{txn.id} {txn.direction.label} "
        f"{fmt_money(txn.amount, symbol)} on [bold]{escape(txn.account)}[/] ({txn.category.label})"
    )
    return save_or_report(ledger)
