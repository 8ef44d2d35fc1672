"""Main Typer application — imports and registers all CLI commands.

Entry point: ``artivault`` (configured via pyproject.toml console scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from artivault.cli.commands.grants import grant_cmd, grant_show_cmd
from artivault.cli.commands.records import (
    create_cmd,
    create_redundant_cmd,
    show_cmd,
    update_cmd,
)
from artivault.cli.commands.verify_cmd import verify_cmd
from artivault.config import config

app = typer.Typer(
    name="artivault",
    help="Artivault: ledger-backed artifact records with tiered, time-bounded grants.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def _configure_logging() -> None:
    """Route library logging through Rich at the configured level."""
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


# Register subcommands
app.command(name="create", help="Create an artifact.")(create_cmd)
app.command(name="create-redundant", help="Create an artifact in the redundant keyspace.")(
    create_redundant_cmd
)
app.command(name="update", help="Update an artifact you own.")(update_cmd)
app.command(name="show", help="Show an artifact.")(show_cmd)
app.command(name="grant", help="Grant time-bounded access to an artifact.")(grant_cmd)
app.command(name="grant-show", help="Show a permission grant.")(grant_show_cmd)
app.command(name="verify", help="Verify the operation journal.")(verify_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
