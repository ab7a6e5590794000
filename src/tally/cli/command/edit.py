from __future__ import annotations

"""Edit an existing transaction and save the ledger."""

from typing import Optional

from rich.markup import escape

from tally.model.errors import LedgerError
from tally.services.ledger_service import Ledger
from tally.workspace import Workspace

from .util import console, report_error, save_or_report


def run(
    *,
    txn_id: int,
    account: Optional[str] = None,
    direction: Optional[str] = None,
    category: Optional[str] = None,
    description: Optional[str] = None,
    amount: Optional[str] = None,
    workspace: Workspace,
) -> int:
    """Replace the given fields of a transaction; omitted fields keep their value.

    Returns:
        Exit code (0 = saved, 1 = unknown id, rejected input or failed save)
    """
    ledger = Ledger.open(workspace)
    try:
        current = ledger.store.get(txn_id)
        txn = ledger.edit_transaction(
            txn_id,
            account if account is not None else current.account,
            direction if direction is not None else current.direction,
            category if category is not None else current.category,
            description if description is not None else current.description,
            amount if amount is not None else current.amount,
        )
    except LedgerError as e:
        return report_error(e)

    console.print(f"[green]Updated[/] #{txn.id}: {escape(txn.description)}")
    return save_or_report(ledger)
