"""Operation outcomes surfaced at the vault boundary."""

from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Every domain failure a public operation can report."""

    ACCESS_DENIED = "AccessDenied"
    INVALID_INPUT = "InvalidInput"
    NOT_FOUND = "NotFound"
    DUPLICATE_RESOURCE = "DuplicateResource"  # reserved
    CONTENT_VALIDATION_FAILED = "ContentValidationFailed"
    INSUFFICIENT_PRIVILEGES = "InsufficientPrivileges"  # reserved
    TEMPORAL_BOUNDARY_EXCEEDED = "TemporalBoundaryExceeded"
    PERMISSION_LEVEL_MISMATCH = "PermissionLevelMismatch"
    METADATA_STRUCTURE_INVALID = "MetadataStructureInvalid"


class OperationResult(BaseModel, Generic[T]):
    """Outcome of one public operation: either a value or an error kind.

    Domain failures never escape a ``Vault`` call as exceptions; they come
    back here with ``ok=False`` and the ``ErrorKind`` of the first failing
    check.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    value: T | None = None
    error: ErrorKind | None = None
    message: str = ""

    @classmethod
    def success(cls, value: T) -> OperationResult[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ErrorKind, message: str = "") -> OperationResult[T]:
        return cls(ok=False, error=error, message=message)

    def unwrap(self) -> T:
        """Return the value, raising ``ValueError`` if the operation failed."""
        if not self.ok:
            raise ValueError(f"{self.error.value if self.error else 'Error'}: {self.message}")
        return self.value  # type: ignore[return-value]
