"""``artivault create / create-redundant / update / show`` — artifact records."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from artivault.cli.commands._vault import db_option, exit_on_failure, open_vault
from artivault.models.artifacts import Artifact

console = Console()


def _artifact_panel(artifact: Artifact, keyspace: str) -> Panel:
    return Panel(
        "\n".join([
            f"[bold]Sequence ID:[/bold]  {artifact.sequence_id}",
            f"[bold]Label:[/bold]        {artifact.label}",
            f"[bold]Owner:[/bold]        {artifact.owner}",
            f"[bold]Category:[/bold]     {artifact.category}",
            f"[bold]Tags:[/bold]         {', '.join(artifact.tags)}",
            f"[bold]Hash:[/bold]         {artifact.integrity_hash}",
            f"[bold]Created at:[/bold]   height {artifact.created_at}",
            f"[bold]Modified at:[/bold]  height {artifact.modified_at}",
            "",
            artifact.content,
        ]),
        title=f"[bold]Artifact {artifact.sequence_id}[/bold] [dim]({keyspace})[/dim]",
        border_style="cyan",
        padding=(1, 2),
    )


def _create(redundant: bool, caller: str, label: str, integrity_hash: str,
            content: str, category: str, tags: list[str], ledger_db: Optional[str]) -> None:
    with open_vault(ledger_db, console) as vault:
        op = vault.create_redundant if redundant else vault.create
        result = op(caller, label, integrity_hash, content, category, tags or [])
        exit_on_failure(result, console)
        where = "redundant keyspace" if redundant else "artifacts"
        console.print(f"[bold green]Created artifact {result.value}[/bold green] [dim]in {where}[/dim]")
        # Print the id plainly for scripting
        console.print(f"{result.value}")


def create_cmd(
    caller: str = typer.Option(..., "--as", help="Principal creating the artifact."),
    label: str = typer.Option(..., "--label", help="Label (1-50 characters)."),
    integrity_hash: str = typer.Option(..., "--hash", help="64-character integrity digest."),
    content: str = typer.Option(..., "--content", help="Content (1-200 characters)."),
    category: str = typer.Option(..., "--category", help="Category (1-20 characters)."),
    tags: list[str] = typer.Option(None, "--tag", "-t", help="Tag (repeat 1-5 times)."),
    ledger_db: Optional[str] = db_option(),
) -> None:
    """Create an artifact owned by the given principal."""
    _create(False, caller, label, integrity_hash, content, category, tags, ledger_db)


def create_redundant_cmd(
    caller: str = typer.Option(..., "--as", help="Principal creating the artifact."),
    label: str = typer.Option(..., "--label", help="Label (1-50 characters)."),
    integrity_hash: str = typer.Option(..., "--hash", help="64-character integrity digest."),
    content: str = typer.Option(..., "--content", help="Content (1-200 characters)."),
    category: str = typer.Option(..., "--category", help="Category (1-20 characters)."),
    tags: list[str] = typer.Option(None, "--tag", "-t", help="Tag (repeat 1-5 times)."),
    ledger_db: Optional[str] = db_option(),
) -> None:
    """Create an artifact in the redundant keyspace (never read by update or grant)."""
    _create(True, caller, label, integrity_hash, content, category, tags, ledger_db)


def update_cmd(
    artifact_id: int = typer.Argument(..., help="Sequence id of the artifact."),
    caller: str = typer.Option(..., "--as", help="Principal performing the update."),
    label: str = typer.Option(..., "--label", help="New label."),
    integrity_hash: str = typer.Option(..., "--hash", help="New 64-character digest."),
    content: str = typer.Option(..., "--content", help="New content."),
    tags: list[str] = typer.Option(None, "--tag", "-t", help="New tag (repeat 1-5 times)."),
    ledger_db: Optional[str] = db_option(),
) -> None:
    """Update an artifact you own.  Category, owner and creation height never change."""
    with open_vault(ledger_db, console) as vault:
        result = vault.update(caller, artifact_id, label, integrity_hash, content, tags or [])
        exit_on_failure(result, console)
        console.print(f"[bold green]Updated artifact {artifact_id}[/bold green]")


def show_cmd(
    artifact_id: int = typer.Argument(..., help="Sequence id of the artifact."),
    redundant: bool = typer.Option(
        False, "--redundant", help="Read from the redundant keyspace instead."
    ),
    ledger_db: Optional[str] = db_option(),
) -> None:
    """Show one artifact record."""
    with open_vault(ledger_db, console) as vault:
        if redundant:
            artifact = vault.get_redundant_artifact(artifact_id)
        else:
            artifact = vault.get_artifact(artifact_id)
        if artifact is None:
            console.print(f"[bold red]NotFound:[/bold red] artifact {artifact_id}")
            raise typer.Exit(code=1)
        console.print(_artifact_panel(artifact, "redundant" if redundant else "primary"))
