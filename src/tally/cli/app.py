from __future__ import annotations

"""
tally CLI Wrapper (Typer + Rich)

Local-only CLI for a personal finance ledger: accounts, transactions,
category budgets and reports.

All paths are resolved from a single workspace root:
  --data-dir / TALLY_DATA env var / current working directory
"""

from pathlib import Path
from typing import Optional

import typer

from tally.logging_setup import configure_logging
from tally.workspace import Workspace

APP_HELP = "tally personal ledger (local-only)"
HELP_ACCOUNT = "Account name (e.g., Cash, Bank, Savings)"
HELP_DIRECTION = "debit or credit (display labels Débit/Crédit also accepted)"
HELP_CATEGORY = "general, food, transport, leisure, salary or other (labels accepted)"

app = typer.Typer(no_args_is_help=True, add_completion=False, help=APP_HELP)


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Optional[Path] = typer.Option(
        None,
        "--data-dir",
        envvar="TALLY_DATA",
        help="Workspace root directory (default: current directory)",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (default: TALLY_LOG_LEVEL or WARNING)",
    ),
):
    """tally CLI: all paths resolved from a single workspace root."""
    configure_logging(log_level)
    ctx.ensure_object(dict)
    ctx.obj["workspace"] = Workspace.resolve(data_dir)


def _ws(ctx: typer.Context) -> Workspace:
    return ctx.obj["workspace"]


@app.command()
def init(ctx: typer.Context):
    """Initialize a workspace with data/config directories and an empty ledger.

    Safe to run on an existing workspace; anything that already exists is skipped.
    Legacy transactions.csv / account_balances.txt in data/ are imported.

    Examples:
      tally --data-dir ~/finances init
    """
    from tally.cli.command import init as cmd_init

    code = cmd_init.run(workspace=_ws(ctx))
    raise typer.Exit(code=code)


@app.command()
def add(
    ctx: typer.Context,
    account: str = typer.Option(..., "--account", "-a", help=HELP_ACCOUNT),
    direction: str = typer.Option("debit", "--type", "-t", help=HELP_DIRECTION),
    category: str = typer.Option("general", "--category", "-c", help=HELP_CATEGORY),
    description: str = typer.Option(..., "--description", "-d", help="What the transaction was"),
    amount: str = typer.Option(..., "--amount", "-m", help="Positive amount (e.g., 12.50)"),
):
    """Record a transaction dated today and update the account balance.

    Examples:
      tally add -a Bank -t credit -c salary -d "Paycheck" -m 1000
      tally add -a Cash -c food -d "Groceries" -m 42.10
    """
    from tally.cli.command import add as cmd_add

    code = cmd_add.run(
        account=account,
        direction=direction,
        category=category,
        description=description,
        amount=amount,
        workspace=_ws(ctx),
    )
    raise typer.Exit(code=code)


@app.command()
def edit(
    ctx: typer.Context,
    txn_id: int = typer.Argument(..., help="Transaction ID"),
    account: Optional[str] = typer.Option(None, "--account", "-a", help=HELP_ACCOUNT),
    direction: Optional[str] = typer.Option(None, "--type", "-t", help=HELP_DIRECTION),
    category: Optional[str] = typer.Option(None, "--category", "-c", help=HELP_CATEGORY),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="New description"),
    amount: Optional[str] = typer.Option(None, "--amount", "-m", help="New positive amount"),
):
    """Edit a transaction; omitted options keep their current value.

    Balances are corrected even when the transaction moves to another account.

    Examples:
      tally edit 7 --account Bank --amount 30
    """
    from tally.cli.command import edit as cmd_edit

    code = cmd_edit.run(
        txn_id=txn_id,
        account=account,
        direction=direction,
        category=category,
        description=description,
        amount=amount,
        workspace=_ws(ctx),
    )
    raise typer.Exit(code=code)


@app.command()
def delete(
    ctx: typer.Context,
    txn_id: int = typer.Argument(..., help="Transaction ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Delete a transaction and undo its effect on the account balance."""
    from tally.cli.command import delete as cmd_delete

    code = cmd_delete.run(txn_id=txn_id, assume_yes=yes, workspace=_ws(ctx))
    raise typer.Exit(code=code)


@app.command("list")
def list_transactions(
    ctx: typer.Context,
    direction: Optional[str] = typer.Option(None, "--type", "-t", help="Filter by type ('all' for any)"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Filter by category ('all' for any)"),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Text in description, account or category"),
):
    """List transactions as a Rich table, in the order they were recorded.

    Examples:
      tally list --type debit --category food
      tally list --search bank
    """
    from tally.cli.command import transactions as cmd_transactions

    code = cmd_transactions.run(
        direction=direction,
        category=category,
        search=search,
        workspace=_ws(ctx),
    )
    raise typer.Exit(code=code)


@app.command()
def balances(ctx: typer.Context):
    """Show per-account balances and the global balance."""
    from tally.cli.command import balances as cmd_balances

    code = cmd_balances.run(workspace=_ws(ctx))
    raise typer.Exit(code=code)


@app.command()
def budget(
    ctx: typer.Context,
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Year (default: current year)"),
    month: Optional[int] = typer.Option(None, "--month", "-m", help="Month 1-12 (default: current month)"),
    set_category: Optional[str] = typer.Option(None, "--set", help="Category whose budget to set"),
    amount: Optional[str] = typer.Option(None, "--amount", help="Budget amount for --set"),
):
    """Show the monthly spend-vs-budget report, or set a category budget.

    Examples:
      tally budget --year 2025 --month 3
      tally budget --set food --amount 400
    """
    from tally.cli.command import budget as cmd_budget

    code = cmd_budget.run(
        year=year,
        month=month,
        set_category=set_category,
        amount=amount,
        workspace=_ws(ctx),
    )
    raise typer.Exit(code=code)


@app.command()
def report(ctx: typer.Context):
    """Show total credits/debits and all-time expense shares by category."""
    from tally.cli.command import report as cmd_report

    code = cmd_report.run(workspace=_ws(ctx))
    raise typer.Exit(code=code)


@app.command()
def export(
    ctx: typer.Context,
    output: Optional[Path] = typer.Argument(None, help="Destination CSV (default: exports/transactions.csv)"),
):
    """Export all transactions to a quoted 7-column CSV file."""
    from tally.cli.command import export as cmd_export

    code = cmd_export.run(output=output, workspace=_ws(ctx))
    raise typer.Exit(code=code)


if __name__ == "__main__":
    app()
