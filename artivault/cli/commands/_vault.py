"""Shared helpers for CLI commands: opening the vault and reporting outcomes."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from artivault.config import VaultConfig
from artivault.core.production_guard import ProductionConfigError
from artivault.core.vault import Vault
from artivault.models.results import OperationResult


def db_option() -> Optional[str]:
    return typer.Option(
        None,
        "--db",
        "-d",
        help="Path to the vault SQLite database. Defaults to ARTIVAULT_DB_PATH.",
    )


def open_vault(db_path: Optional[str], console: Console) -> Vault:
    """Open a SQLite-backed vault using env-driven settings.

    *db_path* overrides ``VaultConfig.db_path`` only when given.
    """
    overrides: dict[str, object] = {"backend": "sqlite"}
    if db_path is not None:
        overrides["db_path"] = Path(db_path)
    settings = VaultConfig().model_copy(update=overrides)
    try:
        return Vault.from_config(settings)
    except ProductionConfigError as exc:
        console.print(f"[bold red]Refusing to start:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc


def exit_on_failure(result: OperationResult, console: Console) -> None:
    """Print the error kind and exit 1 if *result* is a failure."""
    if result.ok:
        return
    kind = result.error.value if result.error else "Error"
    console.print(f"[bold red]{kind}:[/bold red] {result.message}")
    raise typer.Exit(code=1)
