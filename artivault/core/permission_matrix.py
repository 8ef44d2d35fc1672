"""Permission matrix — owner-issued, tiered, time-bounded grants.

Grants are keyed by ``(artifact_id, grantee)``.  Only the artifact's
current owner may write one; a later grant to the same pair replaces the
earlier one.  There is no revoke: a grant lapses once the clock passes
its ``expires_at`` height, after which it confers no access.
"""

from __future__ import annotations

import logging
from typing import Any

from artivault.core.backend import GRANTS, StateBackend
from artivault.core.clock import Clock
from artivault.core.hasher import record_hash
from artivault.core.journal import OperationJournal
from artivault.core.ownership import OwnershipGuard
from artivault.core.validators import ValidationPolicy
from artivault.models.journal import JournalOperation
from artivault.models.permissions import AccessTier, PermissionGrant

logger = logging.getLogger(__name__)


def _grant_key(artifact_id: int, grantee: str) -> str:
    # artifact_id is numeric, so the first "/" always splits the pair.
    return f"{artifact_id}/{grantee}"


class PermissionMatrix:
    """Writes and reads grants, and answers access questions.

    Parameters
    ----------
    backend:
        Shared state backend.
    guard:
        Ownership guard over the primary artifact keyspace.
    clock:
        Source of the current block height.
    policy:
        Validation strictness.
    journal:
        Optional operation journal appended to inside each commit.
    """

    def __init__(
        self,
        backend: StateBackend,
        guard: OwnershipGuard,
        clock: Clock,
        *,
        policy: ValidationPolicy | None = None,
        journal: OperationJournal | None = None,
    ) -> None:
        self._backend = backend
        self._guard = guard
        self._clock = clock
        self._policy = policy or ValidationPolicy()
        self._journal = journal

    def grant(
        self,
        caller: str,
        artifact_id: int,
        grantee: str,
        tier: AccessTier | str,
        duration: int,
        can_modify: bool = False,
    ) -> bool:
        """Issue (or overwrite) a grant expiring ``duration`` heights from now.

        Checks run in order: existence, ownership, grantee, tier, duration.
        """
        self._guard.require_owner(artifact_id, caller)
        self._policy.check_grantee(caller, grantee)
        access_tier = self._policy.check_tier(tier)
        self._policy.check_duration(duration)

        with self._backend.atomic():
            now = self._clock.now()
            grant = PermissionGrant(
                artifact_id=artifact_id,
                grantee=grantee,
                granted_by=caller,
                tier=access_tier,
                granted_at=now,
                expires_at=now + duration,
                can_modify=bool(can_modify),
            )
            record = grant.model_dump(mode="json")
            self._backend.put(GRANTS, _grant_key(artifact_id, grantee), record)
            if self._journal is not None:
                self._journal.append(
                    JournalOperation.GRANT,
                    caller=caller,
                    artifact_id=artifact_id,
                    keyspace=GRANTS,
                    height=now,
                    payload_hash=record_hash(record),
                    subject=grantee,
                )

        logger.info(
            "Granted %s on artifact %d to %s until height %d (can_modify=%s).",
            access_tier.value, artifact_id, grantee, grant.expires_at, grant.can_modify,
        )
        return True

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def get_grant(self, artifact_id: int, grantee: str) -> PermissionGrant | None:
        raw: dict[str, Any] | None = self._backend.get(GRANTS, _grant_key(artifact_id, grantee))
        return PermissionGrant.model_validate(raw) if raw is not None else None

    def active_grant(self, artifact_id: int, principal: str) -> PermissionGrant | None:
        """The grant for the pair if it has not lapsed at the current height."""
        grant = self.get_grant(artifact_id, principal)
        if grant is None or not grant.is_active(self._clock.now()):
            return None
        return grant

    def has_access(
        self,
        artifact_id: int,
        principal: str,
        minimum_tier: AccessTier | str = AccessTier.VIEWER,
    ) -> bool:
        """Owner always has access; others need an unexpired grant of sufficient tier.

        Raises ``PermissionLevelMismatch`` if *minimum_tier* is not a known tier.
        """
        minimum_tier = self._policy.check_tier(minimum_tier)
        if self._guard.is_owner(artifact_id, principal):
            return True
        grant = self.active_grant(artifact_id, principal)
        return grant is not None and grant.tier.covers(minimum_tier)

    def can_modify(self, artifact_id: int, principal: str) -> bool:
        """Owner, or an unexpired grant flagged ``can_modify``.

        Informational: ``ArtifactStore.update`` remains owner-only.
        """
        if self._guard.is_owner(artifact_id, principal):
            return True
        grant = self.active_grant(artifact_id, principal)
        return grant is not None and grant.can_modify
