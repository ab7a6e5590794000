"""
Workspace - centralized data path resolution for the tally ledger.

A Workspace represents the root directory containing all ledger data.
All paths (JSON blobs, backups, legacy files, config, exports) are computed
relative to this root.

Resolution priority:
1. Explicit path (--data-dir CLI option)
2. TALLY_DATA environment variable
3. Current working directory
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from tally.config import BACKUP_SUFFIX


def backup_path_for(path: Path) -> Path:
    """Return the `.bak` sibling for a primary file (transactions.json -> transactions.json.bak)."""
    return path.with_name(path.name + BACKUP_SUFFIX)


@dataclass
class Workspace:
    """Root directory for all ledger data paths."""

    root: Path

    @classmethod
    def resolve(cls, explicit: Path | None = None) -> Workspace:
        """Resolve workspace root from explicit path, env var, or CWD.

        Args:
            explicit: Explicitly provided path (highest priority)

        Returns:
            Workspace with resolved root
        """
        if explicit is not None:
            return cls(root=explicit)
        env = os.environ.get("TALLY_DATA")
        if env:
            return cls(root=Path(env))
        return cls(root=Path.cwd())

    @property
    def data_dir(self) -> Path:
        return self.root / "data"

    @property
    def transactions_path(self) -> Path:
        return self.data_dir / "transactions.json"

    @property
    def state_path(self) -> Path:
        return self.data_dir / "ledger.json"

    @property
    def transactions_backup_path(self) -> Path:
        return backup_path_for(self.transactions_path)

    @property
    def state_backup_path(self) -> Path:
        return backup_path_for(self.state_path)

    @property
    def legacy_transactions_path(self) -> Path:
        return self.data_dir / "transactions.csv"

    @property
    def legacy_balances_path(self) -> Path:
        return self.data_dir / "account_balances.txt"

    @property
    def settings_config(self) -> Path:
        return self.root / "config" / "settings.yml"

    @property
    def exports_dir(self) -> Path:
        return self.root / "exports"


__all__ = ["Workspace", "backup_path_for"]
