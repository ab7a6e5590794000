"""
Ledger service - the engine API consumed by user interfaces.

Composes the in-memory LedgerStore, the pure query functions and the
LedgerRepository behind one object. All methods are synchronous and either
return a result or raise a tally.model.errors.LedgerError subclass, except
save(), which is best-effort and reports failure through its return value.

Mutations go through the store only; queries run on snapshots.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path

from tally.model.errors import PersistenceError
from tally.model.ledger_io import LedgerState, dump_export_csv
from tally.model.settings import Settings
from tally.model.settings_io import load_settings
from tally.model.transaction import Transaction
from tally.model.types import BudgetStatus, TransactionCategory, TransactionDirection
from tally.services import query_service
from tally.services.budget_service import BudgetReport, monthly_budget_report
from tally.services.query_service import CategorySelector, DirectionSelector, DirectionTotals
from tally.storage.ledger_store import AmountInput, LedgerStore
from tally.storage.repository import LedgerRepository, LoadResult
from tally.workspace import Workspace

log = logging.getLogger(__name__)


class Ledger:
    """Personal finance ledger bound to a workspace."""

    def __init__(
        self,
        workspace: Workspace,
        *,
        settings: Settings | None = None,
        store: LedgerStore | None = None,
        repository: LedgerRepository | None = None,
    ):
        self.workspace = workspace
        self.settings = settings or Settings()
        self.store = store or LedgerStore(self.settings.default_accounts)
        self.repository = repository or LedgerRepository(workspace)

    @classmethod
    def open(cls, workspace: Workspace) -> Ledger:
        """Read settings and load persisted data from a workspace."""
        ledger = cls(workspace, settings=load_settings(workspace.settings_config))
        ledger.load()
        return ledger

    # ---- Mutations ----

    def add_transaction(
        self,
        account: str,
        direction: TransactionDirection | str,
        category: TransactionCategory | str,
        description: str,
        amount: AmountInput,
    ) -> Transaction:
        return self.store.add_transaction(account, direction, category, description, amount)

    def edit_transaction(
        self,
        txn_id: int,
        account: str,
        direction: TransactionDirection | str,
        category: TransactionCategory | str,
        description: str,
        amount: AmountInput,
    ) -> Transaction:
        return self.store.edit_transaction(
            txn_id, account, direction, category, description, amount
        )

    def delete_transaction(self, txn_id: int) -> Transaction:
        return self.store.delete_transaction(txn_id)

    def set_budget(self, category: TransactionCategory | str, amount: AmountInput) -> Decimal:
        return self.store.set_budget(category, amount)

    # ---- Queries ----

    @property
    def transactions(self) -> list[Transaction]:
        return self.store.transactions

    @property
    def balances(self) -> dict[str, Decimal]:
        return self.store.balances

    @property
    def budgets(self) -> dict[TransactionCategory, Decimal]:
        return self.store.budgets

    def global_balance(self) -> Decimal:
        return self.store.global_balance()

    def filter_transactions(
        self,
        direction: DirectionSelector = None,
        category: CategorySelector = None,
        search: str | None = None,
    ) -> list[Transaction]:
        return query_service.filter_transactions(
            self.store.transactions, direction, category, search
        )

    def totals_by_direction(self) -> DirectionTotals:
        return query_service.totals_by_direction(self.store.transactions)

    def monthly_spend_by_category(self, year: int, month: int) -> dict[TransactionCategory, Decimal]:
        return query_service.monthly_spend_by_category(self.store.transactions, year, month)

    def expense_shares_by_category(self) -> dict[TransactionCategory, Decimal]:
        return query_service.expense_shares_by_category(self.store.transactions)

    def budget_status(
        self, category: TransactionCategory, spent: Decimal, budgeted: Decimal
    ) -> BudgetStatus:
        return query_service.budget_status(category, spent, budgeted)

    def budget_report(self, year: int, month: int) -> BudgetReport:
        return monthly_budget_report(self.store.transactions, self.store.budgets, year, month)

    # ---- Persistence ----

    def save(self) -> bool:
        """Persist both blobs. Failures are logged; in-memory state stays authoritative."""
        state = LedgerState(balances=self.store.balances, budgets=self.store.budgets)
        return self.repository.save(self.store.transactions, state)

    def load(self) -> LoadResult:
        """Replace in-memory state with persisted data (or defaults).

        When no balances could be read but transactions were, balances are
        rebuilt from the transactions so the global balance stays consistent.
        """
        result = self.repository.load()
        transactions = result.transactions or []
        if result.state is None:
            balances = query_service.net_by_account(transactions)
            budgets: dict[TransactionCategory, Decimal] = {}
        else:
            balances = result.state.balances
            budgets = result.state.budgets
            if result.transactions is None and any(v != 0 for v in balances.values()):
                log.warning(
                    "Balances loaded without transactions; global balance no longer "
                    "matches credits minus debits"
                )
        self.store.restore(
            transactions,
            balances,
            budgets,
            default_accounts=self.settings.default_accounts,
        )
        log.info(
            "Ledger loaded: %d transactions, %d accounts, next id %d",
            len(transactions),
            len(self.store.accounts),
            self.store.next_id,
        )
        return result

    def export_csv(self, path: Path | str) -> Path:
        """Write every transaction to a CSV file, appending .csv when missing.

        Raises:
            PersistenceError: the destination could not be written
        """
        target = Path(path)
        if target.suffix.lower() != ".csv":
            target = target.with_name(target.name + ".csv")
        text = dump_export_csv(self.store.transactions)
        try:
            target.write_text(text, encoding="utf-8")
        except OSError as e:
            raise PersistenceError(target, f"export failed: {e}") from e
        log.info("Exported %d transactions to %s", len(self.store.transactions), target)
        return target


__all__ = ["Ledger"]
