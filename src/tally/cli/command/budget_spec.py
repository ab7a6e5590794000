from __future__ import annotations

"""
Tests for budget command.
"""

from datetime import date
from decimal import Decimal
from pathlib import Path
from tempfile import TemporaryDirectory

from tally.cli.command.budget import run
from tally.model.types import TransactionCategory
from tally.services.ledger_service import Ledger
from tally.workspace import Workspace


class DescribeBudgetCommand:
    def it_should_set_and_persist_a_budget(self):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))

            rc = run(set_category="Nourriture", amount="300", workspace=workspace)

            assert rc == 0
            assert Ledger.open(workspace).budgets[TransactionCategory.FOOD] == Decimal("300")

    def it_should_require_an_amount_with_set(self, capsys):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            assert run(set_category="food", workspace=workspace) == 1
            assert "--amount" in capsys.readouterr().out

    def it_should_refuse_a_salary_budget(self, capsys):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            assert run(set_category="salary", amount="10", workspace=workspace) == 1
            assert "cannot have a budget" in capsys.readouterr().out
            assert not workspace.state_path.exists()

    def it_should_show_the_monthly_report(self, capsys):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            ledger = Ledger.open(workspace)
            ledger.set_budget("food", "100")
            ledger.add_transaction("Cash", "debit", "food", "Market", "150")
            ledger.save()
            today = date.today()

            rc = run(year=today.year, month=today.month, workspace=workspace)

            assert rc == 0
            out = capsys.readouterr().out
            assert "Budget Report" in out
            assert "Nourriture" in out
            assert "1 category over budget" in out

    def it_should_reject_an_invalid_month(self):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            assert run(year=2025, month=13, workspace=workspace) == 1
            assert run(year=2025, month=0, workspace=workspace) == 1
