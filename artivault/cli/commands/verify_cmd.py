"""``artivault verify`` — check the operation journal's hash chain."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from artivault.cli.commands._vault import db_option, open_vault
from artivault.core.journal import JournalIntegrityError

console = Console()


def verify_cmd(
    tail: int = typer.Option(10, "--tail", "-n", help="How many recent entries to list."),
    ledger_db: Optional[str] = db_option(),
) -> None:
    """Verify journal integrity and list the most recent entries."""
    with open_vault(ledger_db, console) as vault:
        if not vault.journal_enabled:
            console.print("[yellow]Journal is disabled for this vault.[/yellow]")
            raise typer.Exit(code=1)

        try:
            vault.verify_journal()
        except JournalIntegrityError as exc:
            console.print(f"[bold red]Journal verification failed:[/bold red] {exc}")
            raise typer.Exit(code=1) from exc

        entries = vault.journal_entries()
        table = Table(title=f"Operation journal ({len(entries)} entries)")
        table.add_column("#", justify="right")
        table.add_column("Operation", style="cyan")
        table.add_column("Caller")
        table.add_column("Artifact", justify="right")
        table.add_column("Subject")
        table.add_column("Height", justify="right")
        table.add_column("Entry hash", style="dim")
        for entry in entries[-tail:] if tail > 0 else []:
            table.add_row(
                str(entry.position),
                entry.operation.value,
                entry.caller,
                str(entry.artifact_id),
                entry.subject,
                str(entry.height),
                entry.entry_hash[:16],
            )
        console.print(table)
        console.print("[bold green]Journal chain verified.[/bold green]")
