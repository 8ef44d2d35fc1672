"""Artivault CLI — Typer-based command-line interface.

Provides the ``artivault`` command with subcommands for creating and
updating artifacts, issuing grants, inspecting records, and verifying the
operation journal.

All output uses Rich for formatted terminal display.
"""
