"""Initialize a new tally workspace directory."""

from __future__ import annotations

from tally.model.settings import Settings
from tally.model.settings_io import save_settings
from tally.services.ledger_service import Ledger
from tally.workspace import Workspace

from .util import console


def run(*, workspace: Workspace) -> int:
    """Create the workspace directories, starter settings and an empty ledger.

    Skips anything that already exists (safe to run on an existing workspace).
    If legacy files from the legacy desktop version are present, they are
    imported into the JSON blobs.

    Args:
        workspace: Workspace to initialize

    Returns:
        Exit code (0 = success, 1 = ledger could not be written)
    """
    root = workspace.root
    console.print(f"[bold cyan]Initializing workspace:[/] {root}\n")

    created = []
    skipped = []

    for directory in [workspace.data_dir, workspace.exports_dir, workspace.settings_config.parent]:
        if directory.exists():
            skipped.append(str(directory.relative_to(root)) + "/")
        else:
            directory.mkdir(parents=True, exist_ok=True)
            created.append(str(directory.relative_to(root)) + "/")

    if workspace.settings_config.exists():
        skipped.append(str(workspace.settings_config.relative_to(root)))
    else:
        save_settings(workspace.settings_config, Settings())
        created.append(str(workspace.settings_config.relative_to(root)))

    if workspace.transactions_path.exists() and workspace.state_path.exists():
        skipped.append(str(workspace.transactions_path.relative_to(root)))
        skipped.append(str(workspace.state_path.relative_to(root)))
    else:
        ledger = Ledger.open(workspace)
        if not ledger.save():
            console.print("[red]Error:[/] Could not write the ledger files")
            return 1
        created.append(str(workspace.transactions_path.relative_to(root)))
        created.append(str(workspace.state_path.relative_to(root)))

    if created:
        console.print("[green]Created:[/]")
        for item in created:
            console.print(f"  {item}")

    if skipped:
        console.print("[dim]Already exists (skipped):[/dim]")
        for item in skipped:
            console.print(f"  [dim]{item}[/dim]")

    if not created:
        console.print("[green]Workspace already fully initialized.[/]")
    else:
        console.print(f"\n[green]Workspace ready at {root}[/]")
    return 0
