"""Unit tests for the CLI — command registration and end-to-end behaviour.

Exercises the Typer app via typer.testing.CliRunner against a temporary
SQLite vault.
"""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from artivault.cli.app import app

runner = CliRunner()

HASH = "ab" * 32


def _create(db: Path, caller: str = "alice", *extra: str):
    return runner.invoke(app, [
        "create", "--as", caller, "--label", "L", "--hash", HASH,
        "--content", "c", "--category", "cat", "--tag", "t1", "--db", str(db), *extra,
    ])


class TestCliApp:
    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()

    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for name in ("create", "create-redundant", "update", "show", "grant", "grant-show", "verify"):
            assert name in result.output


class TestCliFlows:
    def test_create_and_show(self, tmp_path: Path):
        db = tmp_path / "vault.db"
        result = _create(db)
        assert result.exit_code == 0, result.output
        assert "Created artifact 1" in result.output

        shown = runner.invoke(app, ["show", "1", "--db", str(db)])
        assert shown.exit_code == 0
        assert "alice" in shown.output
        assert "cat" in shown.output

    def test_invalid_create_exits_nonzero(self, tmp_path: Path):
        db = tmp_path / "vault.db"
        result = runner.invoke(app, [
            "create", "--as", "alice", "--label", "L", "--hash", "short",
            "--content", "c", "--category", "cat", "--tag", "t1", "--db", str(db),
        ])
        assert result.exit_code == 1
        assert "InvalidInput" in result.output

    def test_update_by_non_owner_denied(self, tmp_path: Path):
        db = tmp_path / "vault.db"
        _create(db)
        result = runner.invoke(app, [
            "update", "1", "--as", "bob", "--label", "X", "--hash", HASH,
            "--content", "c2", "--tag", "t2", "--db", str(db),
        ])
        assert result.exit_code == 1
        assert "AccessDenied" in result.output

    def test_owner_update(self, tmp_path: Path):
        db = tmp_path / "vault.db"
        _create(db)
        result = runner.invoke(app, [
            "update", "1", "--as", "alice", "--label", "X", "--hash", HASH,
            "--content", "c2", "--tag", "t2", "--db", str(db),
        ])
        assert result.exit_code == 0, result.output
        shown = runner.invoke(app, ["show", "1", "--db", str(db)])
        assert "X" in shown.output

    def test_grant_and_show(self, tmp_path: Path):
        db = tmp_path / "vault.db"
        _create(db)
        result = runner.invoke(app, [
            "grant", "1", "bob", "--as", "alice", "--tier", "editor",
            "--duration", "100", "--can-modify", "--db", str(db),
        ])
        assert result.exit_code == 0, result.output
        assert "Granted editor" in result.output

        shown = runner.invoke(app, ["grant-show", "1", "bob", "--db", str(db)])
        assert shown.exit_code == 0
        assert "active" in shown.output

    def test_grant_duration_too_long(self, tmp_path: Path):
        db = tmp_path / "vault.db"
        _create(db)
        result = runner.invoke(app, [
            "grant", "1", "bob", "--as", "alice", "--duration", "52561", "--db", str(db),
        ])
        assert result.exit_code == 1
        assert "TemporalBoundaryExceeded" in result.output

    def test_show_missing(self, tmp_path: Path):
        result = runner.invoke(app, ["show", "9", "--db", str(tmp_path / "vault.db")])
        assert result.exit_code == 1
        assert "NotFound" in result.output

    def test_redundant_create_and_show(self, tmp_path: Path):
        db = tmp_path / "vault.db"
        result = runner.invoke(app, [
            "create-redundant", "--as", "alice", "--label", "L", "--hash", HASH,
            "--content", "c", "--category", "cat", "--tag", "t1", "--db", str(db),
        ])
        assert result.exit_code == 0, result.output
        assert runner.invoke(app, ["show", "1", "--db", str(db)]).exit_code == 1
        assert runner.invoke(app, ["show", "1", "--redundant", "--db", str(db)]).exit_code == 0

    def test_verify(self, tmp_path: Path):
        db = tmp_path / "vault.db"
        _create(db)
        _create(db, "bob")
        result = runner.invoke(app, ["verify", "--db", str(db)])
        assert result.exit_code == 0, result.output
        assert "Journal chain verified" in result.output
        assert "2 entries" in result.output

    def test_db_path_from_environment(self, tmp_path: Path):
        configured = tmp_path / "configured.db"
        env = {"ARTIVAULT_DB_PATH": str(configured)}
        result = runner.invoke(app, [
            "create", "--as", "alice", "--label", "L", "--hash", HASH,
            "--content", "c", "--category", "cat", "--tag", "t1",
        ], env=env)
        assert result.exit_code == 0, result.output
        assert configured.exists()

        shown = runner.invoke(app, ["show", "1"], env=env)
        assert shown.exit_code == 0
        assert "alice" in shown.output

    def test_db_option_overrides_environment(self, tmp_path: Path):
        env = {"ARTIVAULT_DB_PATH": str(tmp_path / "configured.db")}
        explicit = tmp_path / "explicit.db"
        result = runner.invoke(app, [
            "create", "--as", "alice", "--label", "L", "--hash", HASH,
            "--content", "c", "--category", "cat", "--tag", "t1", "--db", str(explicit),
        ], env=env)
        assert result.exit_code == 0, result.output
        assert explicit.exists()
        assert not (tmp_path / "configured.db").exists()
