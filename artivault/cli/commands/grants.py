"""``artivault grant / grant-show`` — the permission matrix."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from artivault.cli.commands._vault import db_option, exit_on_failure, open_vault
from artivault.models.permissions import MAX_GRANT_DURATION

console = Console()


def grant_cmd(
    artifact_id: int = typer.Argument(..., help="Sequence id of the artifact."),
    grantee: str = typer.Argument(..., help="Principal receiving access."),
    caller: str = typer.Option(..., "--as", help="Owner issuing the grant."),
    tier: str = typer.Option("viewer", "--tier", help="viewer, editor or manager."),
    duration: int = typer.Option(
        ..., "--duration", help=f"Lifetime in height units (1-{MAX_GRANT_DURATION})."
    ),
    can_modify: bool = typer.Option(
        False, "--can-modify/--read-only", help="Whether the grant allows modification."
    ),
    ledger_db: Optional[str] = db_option(),
) -> None:
    """Grant a principal time-bounded access to an artifact you own."""
    with open_vault(ledger_db, console) as vault:
        result = vault.grant(caller, artifact_id, grantee, tier, duration, can_modify)
        exit_on_failure(result, console)
        grant = vault.get_grant(artifact_id, grantee)
        expires = grant.expires_at if grant else "?"
        console.print(
            f"[bold green]Granted {tier} on artifact {artifact_id} to {grantee}[/bold green] "
            f"[dim](expires at height {expires})[/dim]"
        )


def grant_show_cmd(
    artifact_id: int = typer.Argument(..., help="Sequence id of the artifact."),
    grantee: str = typer.Argument(..., help="Principal holding the grant."),
    ledger_db: Optional[str] = db_option(),
) -> None:
    """Show the grant for an (artifact, grantee) pair and whether it is active."""
    with open_vault(ledger_db, console) as vault:
        grant = vault.get_grant(artifact_id, grantee)
        if grant is None:
            console.print(
                f"[bold red]NotFound:[/bold red] no grant on artifact {artifact_id} for {grantee}"
            )
            raise typer.Exit(code=1)
        height = vault.clock.now()
        status = "[green]active[/green]" if grant.is_active(height) else "[red]expired[/red]"
        console.print(
            Panel(
                "\n".join([
                    f"[bold]Artifact:[/bold]    {grant.artifact_id}",
                    f"[bold]Grantee:[/bold]     {grant.grantee}",
                    f"[bold]Granted by:[/bold]  {grant.granted_by}",
                    f"[bold]Tier:[/bold]        {grant.tier.value}",
                    f"[bold]Can modify:[/bold]  {'yes' if grant.can_modify else 'no'}",
                    f"[bold]Granted at:[/bold]  height {grant.granted_at}",
                    f"[bold]Expires at:[/bold]  height {grant.expires_at}",
                    f"[bold]Status:[/bold]      {status} (current height {height})",
                ]),
                title="[bold]Permission grant[/bold]",
                border_style="magenta",
                padding=(1, 2),
            )
        )
