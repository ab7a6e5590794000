from __future__ import annotations

"""Export all transactions to a CSV file."""

from pathlib import Path
from typing import Optional

from tally.model.errors import PersistenceError
from tally.services.ledger_service import Ledger
from tally.workspace import Workspace

from .util import console, report_error


def run(*, output: Optional[Path] = None, workspace: Workspace) -> int:
    """Write the 7-column CSV export.

    Args:
        output: Destination file (default: exports/transactions.csv in the workspace)
        workspace: Workspace providing data paths

    Returns:
        Exit code (0 = written, 1 = write failed)
    """
    ledger = Ledger.open(workspace)
    if output is None:
        workspace.exports_dir.mkdir(parents=True, exist_ok=True)
        output = workspace.exports_dir / "transactions.csv"

    try:
        written = ledger.export_csv(output)
    except PersistenceError as e:
        return report_error(e)

    console.print(f"[green]Exported {len(ledger.transactions)} transactions to[/] {written}")
    return 0
