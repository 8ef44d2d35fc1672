"""Adversarial tests — attempts to bypass ownership and grant rules.

Callers are untrusted; every one of these must be rejected without any
state change.
"""

from __future__ import annotations

import pytest

from artivault.core.vault import Vault
from artivault.models.results import ErrorKind


@pytest.fixture
def seeded(vault: Vault, artifact_fields) -> Vault:
    assert vault.create("owner", **artifact_fields()).value == 1
    return vault


class TestOwnershipBypass:
    @pytest.mark.parametrize("attacker", ["mallory", "Owner", "owner ", " owner"])
    def test_lookalike_principals_denied(self, seeded: Vault, revision_fields, attacker):
        result = seeded.update(attacker, 1, **revision_fields())
        assert result.error is ErrorKind.ACCESS_DENIED
        assert seeded.get_artifact(1).label == "L"

    def test_grantee_cannot_update_even_with_modify_flag(self, seeded: Vault, revision_fields):
        assert seeded.grant("owner", 1, "bob", "manager", 100, True).ok
        result = seeded.update("bob", 1, **revision_fields())
        assert result.error is ErrorKind.ACCESS_DENIED

    def test_grantee_cannot_regrant(self, seeded: Vault):
        seeded.grant("owner", 1, "bob", "manager", 100, True)
        result = seeded.grant("bob", 1, "carol", "viewer", 10)
        assert result.error is ErrorKind.ACCESS_DENIED
        assert seeded.get_grant(1, "carol") is None

    def test_non_owner_cannot_overwrite_grant(self, seeded: Vault):
        seeded.grant("owner", 1, "bob", "viewer", 10)
        seeded.grant("bob", 1, "bob", "manager", 52560)
        grant = seeded.get_grant(1, "bob")
        assert grant.tier.value == "viewer"
        assert grant.granted_by == "owner"

    def test_owner_self_grant_rejected(self, seeded: Vault):
        assert seeded.grant("owner", 1, "owner", "manager", 10).error is ErrorKind.INVALID_INPUT
        assert seeded.get_grant(1, "owner") is None

    def test_redundant_copy_confers_no_authority(self, seeded: Vault, artifact_fields, revision_fields):
        # mallory writes a redundant record; ids are shared but keyspaces are not.
        sid = seeded.create_redundant("mallory", **artifact_fields()).value
        assert seeded.update("mallory", sid, **revision_fields()).error is ErrorKind.NOT_FOUND
        assert seeded.update("mallory", 1, **revision_fields()).error is ErrorKind.ACCESS_DENIED

    @pytest.mark.parametrize("artifact_id", [0, -1, True, "1", 1.0, None])
    def test_malformed_ids_not_found(self, seeded: Vault, revision_fields, artifact_id):
        result = seeded.update("owner", artifact_id, **revision_fields())
        assert result.error is ErrorKind.NOT_FOUND
        assert seeded.get_artifact(1).label == "L"

    def test_counter_unchanged_by_rejected_calls(self, seeded: Vault, artifact_fields, revision_fields):
        seeded.create("x", **artifact_fields(tags="not-a-list"))
        seeded.create("x", **artifact_fields(tags=[]))
        seeded.update("mallory", 1, **revision_fields())
        seeded.grant("mallory", 1, "x", "viewer", 10)
        assert seeded.current_counter() == 1
        assert len(seeded.journal_entries()) == 1
