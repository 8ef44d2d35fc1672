"""Ownership guard — read-only owner checks against the primary keyspace."""

from __future__ import annotations

import logging

from artivault.core.errors import AccessDenied, NotFound
from artivault.core.record_store import RecordStore

logger = logging.getLogger(__name__)


class OwnershipGuard:
    """Answers "does this artifact exist" and "is this principal its owner".

    Only the primary store is consulted; records in the redundant keyspace
    have no owner authority anywhere.
    """

    def __init__(self, records: RecordStore) -> None:
        self._records = records

    def exists(self, artifact_id: int) -> bool:
        return self._records.exists(artifact_id)

    def is_owner(self, artifact_id: int, principal: str) -> bool:
        artifact = self._records.get(artifact_id)
        if artifact is None:
            return False
        return artifact.owner == principal

    def require_owner(self, artifact_id: int, principal: str) -> None:
        """Raise ``NotFound`` or ``AccessDenied`` unless *principal* owns the artifact."""
        if not self.exists(artifact_id):
            logger.warning("Artifact %s not found (caller=%s).", artifact_id, principal)
            raise NotFound(f"artifact {artifact_id} does not exist")
        if not self.is_owner(artifact_id, principal):
            logger.warning(
                "Denied %s on artifact %s: not the owner.", principal, artifact_id
            )
            raise AccessDenied(f"{principal} is not the owner of artifact {artifact_id}")
