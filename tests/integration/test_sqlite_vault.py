"""Integration tests — the full record and grant lifecycle on persistent state.

Exercises a SQLite-backed vault end-to-end, including reopening the
database to confirm that the counter, records, grants and journal all
survive a restart.
"""

from __future__ import annotations

from pathlib import Path

from artivault.core.backend import SQLiteBackend
from artivault.core.clock import ManualClock
from artivault.core.vault import Vault
from artivault.models.permissions import AccessTier
from artivault.models.results import ErrorKind


class TestPersistentLifecycle:
    def test_full_lifecycle_survives_reopen(self, tmp_path: Path, artifact_fields, revision_fields):
        db_path = tmp_path / "vault.db"
        clock = ManualClock(1000)

        with Vault(SQLiteBackend(db_path), clock) as vault:
            assert vault.create("A", **artifact_fields()).value == 1
            assert vault.update("B", 1, **revision_fields()).error is ErrorKind.ACCESS_DENIED
            clock.advance(2)
            assert vault.update("A", 1, **revision_fields(label="X")).ok
            assert vault.grant("A", 1, "B", "editor", 100, True).ok
            assert vault.create_redundant("A", **artifact_fields()).value == 2
            anchor = vault.export_journal_anchor()

        with Vault(SQLiteBackend(db_path), clock) as reopened:
            artifact = reopened.get_artifact(1)
            assert artifact.label == "X"
            assert artifact.owner == "A"
            assert artifact.created_at == 1000
            assert artifact.modified_at == 1002
            assert reopened.get_redundant_artifact(2) is not None
            assert reopened.get_grant(1, "B").expires_at == 1102
            assert reopened.has_access(1, "B", AccessTier.EDITOR) is True

            # Counter continues after restart; ids are never reused.
            assert reopened.current_counter() == 2
            assert reopened.create("C", **artifact_fields()).value == 3

            assert reopened.verify_journal() is True
            assert reopened.verify_journal_anchor(anchor) is True

    def test_failed_create_leaves_database_untouched(self, tmp_path: Path, artifact_fields):
        db_path = tmp_path / "vault.db"
        with Vault(SQLiteBackend(db_path), ManualClock()) as vault:
            vault.create("A", **artifact_fields())
            result = vault.create("A", **artifact_fields(integrity_hash="h" * 65))
            assert result.error is ErrorKind.INVALID_INPUT

        with Vault(SQLiteBackend(db_path), ManualClock()) as reopened:
            assert reopened.current_counter() == 1
            assert reopened.get_artifact(2) is None
            assert len(reopened.journal_entries()) == 1

    def test_grant_lapses_over_time(self, tmp_path: Path, artifact_fields):
        clock = ManualClock(0)
        with Vault(SQLiteBackend(tmp_path / "vault.db"), clock) as vault:
            vault.create("A", **artifact_fields())
            vault.grant("A", 1, "B", "viewer", 6)
            clock.advance(6)
            assert vault.has_access(1, "B") is True
            clock.advance(1)
            assert vault.has_access(1, "B") is False
            # Re-granting after expiry restores access from the new height.
            vault.grant("A", 1, "B", "viewer", 6)
            assert vault.get_grant(1, "B").expires_at == 13
            assert vault.has_access(1, "B") is True
