"""
Ledger repository - durable storage for the ledger's two blobs.

Files (all under the workspace data/ directory):
- transactions.json: the transaction list
- ledger.json: account balances + budgets
- <name>.bak: copy of the previous primary, taken before each save
- transactions.csv / account_balances.txt: files written by the legacy
  desktop application, read only when no JSON blob or backup exists

Load order per blob: primary -> .bak -> legacy file -> None (caller uses
defaults). The state blob is read before the transactions blob because
transactions reference account names.

Save is best-effort: a failed backup copy is logged and the save goes on; a
failed write is logged and reported through the return value, never raised.

Privacy: local files only, no network I/O.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, TypeVar

from tally.model.errors import PersistenceError
from tally.model.ledger_io import (
    LedgerState,
    dump_state_json,
    dump_transactions_json,
    load_legacy_balances,
    load_legacy_transactions_csv,
    load_state_json,
    load_transactions_json,
)
from tally.model.transaction import Transaction
from tally.workspace import Workspace, backup_path_for

log = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class LoadResult:
    """What the repository could recover; None means "use defaults"."""

    state: LedgerState | None
    transactions: list[Transaction] | None
    state_source: Path | None = None
    transactions_source: Path | None = None


def write_text_atomic(path: Path, text: str) -> None:
    """Write via a temporary sibling and rename over the destination.

    Raises:
        OSError: if the directory cannot be created or the write fails
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, path)
    finally:
        if tmp.exists():
            tmp.unlink()


def backup_file(path: Path) -> Path | None:
    """Copy an existing primary file to its .bak sibling (best-effort).

    Returns:
        The backup path, or None when there was nothing to copy or the copy failed
    """
    if not path.exists():
        return None
    target = backup_path_for(path)
    try:
        shutil.copy2(path, target)
    except OSError as e:
        log.warning("Backup of %s failed, continuing with save: %s", path, e)
        return None
    return target


class LedgerRepository:
    """Reads and writes the ledger blobs inside a workspace."""

    def __init__(self, workspace: Workspace):
        self.workspace = workspace

    def save(self, transactions: list[Transaction], state: LedgerState) -> bool:
        """Back up then write both blobs.

        Returns:
            True when both blobs were written; False if either write failed
            (the failure is logged)
        """
        ws = self.workspace
        ok = True
        for path, text in (
            (ws.transactions_path, dump_transactions_json(transactions)),
            (ws.state_path, dump_state_json(state.balances, state.budgets)),
        ):
            backup_file(path)
            try:
                write_text_atomic(path, text)
            except OSError as e:
                log.error("Could not save %s: %s", path, e)
                ok = False
        if ok:
            log.info("Saved %d transactions to %s", len(transactions), ws.data_dir)
        return ok

    def load(self) -> LoadResult:
        """Read both blobs through the fallback chain."""
        ws = self.workspace
        state, state_source = self._read_first(
            [
                (ws.state_path, lambda p: load_state_json(_read(p))),
                (ws.state_backup_path, lambda p: load_state_json(_read(p))),
                (ws.legacy_balances_path, _read_legacy_state),
            ],
            "balances and budgets",
        )
        transactions, txn_source = self._read_first(
            [
                (ws.transactions_path, lambda p: load_transactions_json(_read(p))),
                (ws.transactions_backup_path, lambda p: load_transactions_json(_read(p))),
                (ws.legacy_transactions_path, lambda p: load_legacy_transactions_csv(_read(p))),
            ],
            "transactions",
        )
        return LoadResult(
            state=state,
            transactions=transactions,
            state_source=state_source,
            transactions_source=txn_source,
        )

    def _read_first(
        self, candidates: list[tuple[Path, Callable[[Path], T]]], what: str
    ) -> tuple[T | None, Path | None]:
        for path, reader in candidates:
            if not path.exists():
                continue
            try:
                value = reader(path)
            except (PersistenceError, ValueError) as e:
                log.warning("Could not read %s from %s: %s", what, path, e)
                continue
            log.info("Loaded %s from %s", what, path)
            return value, path
        log.warning("No readable %s found; using defaults", what)
        return None, None


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PersistenceError(path, str(e)) from e


def _read_legacy_state(path: Path) -> LedgerState:
    # The legacy desktop version never persisted budgets.
    return LedgerState(balances=load_legacy_balances(_read(path)), budgets={}, schema_version=1)


__all__ = ["LedgerRepository", "LoadResult", "backup_file", "write_text_atomic"]
