"""Domain errors raised inside the core and converted at the vault boundary.

Each class is bound to exactly one ``ErrorKind``.  Code inside
``artivault.core`` raises these; ``Vault`` catches ``VaultError`` and turns
it into an ``OperationResult`` so callers see the kind, never a traceback.
"""

from __future__ import annotations

from typing import ClassVar

from artivault.models.results import ErrorKind


class VaultError(RuntimeError):
    """Base class for every domain failure."""

    kind: ClassVar[ErrorKind]


class AccessDenied(VaultError):
    """Caller is not the artifact's owner on an owner-restricted operation."""

    kind = ErrorKind.ACCESS_DENIED


class InvalidInput(VaultError):
    """A text field failed its validator, or a grantee equals the caller."""

    kind = ErrorKind.INVALID_INPUT


class NotFound(VaultError):
    """The referenced artifact id has no record."""

    kind = ErrorKind.NOT_FOUND


class DuplicateResource(VaultError):
    """A creation collided with an existing record."""

    kind = ErrorKind.DUPLICATE_RESOURCE


class ContentValidationFailed(VaultError):
    kind = ErrorKind.CONTENT_VALIDATION_FAILED


class InsufficientPrivileges(VaultError):
    kind = ErrorKind.INSUFFICIENT_PRIVILEGES


class TemporalBoundaryExceeded(VaultError):
    """Requested grant duration is zero or beyond the maximum window."""

    kind = ErrorKind.TEMPORAL_BOUNDARY_EXCEEDED


class PermissionLevelMismatch(VaultError):
    """Requested tier is not a recognised ``AccessTier``."""

    kind = ErrorKind.PERMISSION_LEVEL_MISMATCH


class MetadataStructureInvalid(VaultError):
    """Category or tag collection has an invalid shape."""

    kind = ErrorKind.METADATA_STRUCTURE_INVALID
