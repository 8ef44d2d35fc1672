"""Artivault data models — all Pydantic v2, all frozen (immutable)."""

from artivault.models.artifacts import Artifact
from artivault.models.journal import JournalEntry, JournalOperation
from artivault.models.permissions import (
    MAX_GRANT_DURATION,
    AccessTier,
    PermissionGrant,
)
from artivault.models.results import ErrorKind, OperationResult

__all__ = [
    # artifacts
    "Artifact",
    # permissions
    "AccessTier",
    "PermissionGrant",
    "MAX_GRANT_DURATION",
    # journal
    "JournalEntry",
    "JournalOperation",
    # results
    "ErrorKind",
    "OperationResult",
]
