from __future__ import annotations

"""Delete a transaction, undoing its balance effect."""

import typer

from tally.model.errors import LedgerError
from tally.services.ledger_service import Ledger
from tally.workspace import Workspace

from .util import console, report_error, save_or_report


def run(*, txn_id: int, assume_yes: bool = False, workspace: Workspace) -> int:
    """Delete one transaction after confirmation.

    Returns:
        Exit code (0 = deleted or cancelled, 1 = unknown id or failed save)
    """
    ledger = Ledger.open(workspace)
    try:
        txn = ledger.store.get(txn_id)
    except LedgerError as e:
        return report_error(e)

    if not assume_yes and not typer.confirm(
        f"Delete #{txn.id} '{txn.description}'?", default=False
    ):
        console.print("[yellow]Cancelled.[/]")
        return 0

    ledger.delete_transaction(txn_id)
    console.print(f"[green]Deleted[/] #{txn_id}")
    return save_or_report(ledger)
