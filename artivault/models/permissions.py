"""Permission matrix models — tiered, time-bounded grants."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

MAX_GRANT_DURATION = 52560  # ~1 year at one height unit per ~10 minutes


class AccessTier(str, Enum):
    """Access classification carried by a grant, ordered viewer < editor < manager."""

    VIEWER = "viewer"
    EDITOR = "editor"
    MANAGER = "manager"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]

    def covers(self, other: AccessTier) -> bool:
        """Whether this tier is at least as strong as *other*."""
        return self.rank >= other.rank


_TIER_RANK = {
    AccessTier.VIEWER: 0,
    AccessTier.EDITOR: 1,
    AccessTier.MANAGER: 2,
}


class PermissionGrant(BaseModel):
    """A grant of *tier* access on one artifact to one grantee.

    Keyed by ``(artifact_id, grantee)``.  A later grant to the same pair
    replaces this one.  Grants are never revoked; they lapse once the
    current height passes ``expires_at``.
    """

    model_config = ConfigDict(frozen=True)

    artifact_id: int
    grantee: str
    granted_by: str
    tier: AccessTier
    granted_at: int  # block height
    expires_at: int  # granted_at + duration
    can_modify: bool = False

    def is_active(self, height: int) -> bool:
        """True while *height* has not passed ``expires_at``."""
        return height <= self.expires_at
