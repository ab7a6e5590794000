from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from tempfile import TemporaryDirectory

from tally.cli.command.edit import run
from tally.model.types import TransactionCategory
from tally.services.ledger_service import Ledger
from tally.workspace import Workspace


def _seed(workspace: Workspace) -> int:
    ledger = Ledger.open(workspace)
    txn = ledger.add_transaction("Cash", "debit", "food", "Lunch", "50")
    ledger.save()
    return txn.id


class DescribeEditCommand:
    def it_should_move_a_transaction_to_another_account(self):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            txn_id = _seed(workspace)

            rc = run(txn_id=txn_id, account="Bank", amount="30", workspace=workspace)

            assert rc == 0
            ledger = Ledger.open(workspace)
            assert ledger.balances["Cash"] == 0
            assert ledger.balances["Bank"] == Decimal("-30")

    def it_should_keep_fields_that_were_not_given(self):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            txn_id = _seed(workspace)

            assert run(txn_id=txn_id, description="Dinner", workspace=workspace) == 0

            txn = Ledger.open(workspace).store.get(txn_id)
            assert txn.description == "Dinner"
            assert txn.account == "Cash"
            assert txn.category is TransactionCategory.FOOD
            assert txn.amount == Decimal("50")

    def it_should_fail_for_an_unknown_id(self, capsys):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            _seed(workspace)

            assert run(txn_id=99, amount="1", workspace=workspace) == 1
            assert "99" in capsys.readouterr().out
