"""Tests for init command."""

from __future__ import annotations

import json
from pathlib import Path
from tempfile import TemporaryDirectory

from tally.cli.command.init import run
from tally.model.settings_io import load_settings
from tally.workspace import Workspace


class DescribeInitCommand:
    """Tests for init command."""

    def it_should_create_directories_settings_and_empty_ledger(self):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            rc = run(workspace=workspace)

            assert rc == 0
            assert workspace.data_dir.is_dir()
            assert workspace.exports_dir.is_dir()
            assert workspace.settings_config.is_file()
            doc = json.loads(workspace.transactions_path.read_text(encoding="utf-8"))
            assert doc == {"schema_version": 2, "transactions": []}
            assert workspace.state_path.is_file()

    def it_should_be_safe_to_run_twice(self):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            assert run(workspace=workspace) == 0

            workspace.settings_config.write_text(
                "default_accounts: [Wallet]\ncurrency_symbol: $\n", encoding="utf-8"
            )

            assert run(workspace=workspace) == 0
            assert load_settings(workspace.settings_config).default_accounts == ["Wallet"]

    def it_should_import_legacy_files(self):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            workspace.data_dir.mkdir(parents=True)
            workspace.legacy_transactions_path.write_text(
                '"ID","Date","Compte","Type","Catégorie","Description","Montant"\n'
                '"4","02/03/2024","Cash","Débit","Loisirs","Concert","35"\n',
                encoding="utf-8",
            )
            workspace.legacy_balances_path.write_text("Cash=-35\n", encoding="utf-8")

            assert run(workspace=workspace) == 0

            doc = json.loads(workspace.transactions_path.read_text(encoding="utf-8"))
            assert [t["id"] for t in doc["transactions"]] == [4]
            assert doc["transactions"][0]["category"] == "leisure"
