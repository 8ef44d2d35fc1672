"""Vault — the public boundary over artifact stores and the permission matrix.

The Vault wires together the state backend, sequence allocator, primary
and redundant artifact stores, ownership guard, permission matrix and
operation journal.  Every public operation:

- takes the caller principal explicitly as its first argument,
- runs under a single re-entrant write lock, so operations from any
  number of threads execute strictly one after another,
- returns an ``OperationResult``; domain failures come back as an
  ``ErrorKind`` and never escape as exceptions.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from artivault.config import VaultConfig
from artivault.core.artifact_store import ArtifactStore
from artivault.core.backend import (
    ARTIFACTS,
    ARTIFACTS_REDUNDANT,
    MemoryBackend,
    SQLiteBackend,
    StateBackend,
)
from artivault.core.clock import Clock, ManualClock, WallClock
from artivault.core.errors import InvalidInput, VaultError
from artivault.core.journal import OperationJournal
from artivault.core.ownership import OwnershipGuard
from artivault.core.permission_matrix import PermissionMatrix
from artivault.core.production_guard import enforce_production_constraints
from artivault.core.record_store import RecordStore, SequenceAllocator
from artivault.core.validators import ValidationPolicy
from artivault.models.artifacts import Artifact
from artivault.models.journal import JournalEntry, JournalOperation
from artivault.models.permissions import AccessTier, PermissionGrant
from artivault.models.results import OperationResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Vault:
    """Ledger-backed artifact records with an owner-issued permission matrix.

    Parameters
    ----------
    backend:
        State backend.  Defaults to a fresh ``MemoryBackend``.
    clock:
        Block-height clock.  Defaults to ``ManualClock(0)``.
    policy:
        Validation strictness applied to every operation.
    journal_enabled:
        Append every committed operation to the hash-chained journal.
    """

    def __init__(
        self,
        backend: StateBackend | None = None,
        clock: Clock | None = None,
        *,
        policy: ValidationPolicy | None = None,
        journal_enabled: bool = True,
    ) -> None:
        self._backend = backend if backend is not None else MemoryBackend()
        self._clock = clock if clock is not None else ManualClock()
        self._policy = policy or ValidationPolicy()
        self._lock = threading.RLock()

        self._journal: OperationJournal | None = (
            OperationJournal(self._backend) if journal_enabled else None
        )
        self._allocator = SequenceAllocator(self._backend)
        primary = RecordStore(self._backend, ARTIFACTS)
        self._guard = OwnershipGuard(primary)

        self._artifacts = ArtifactStore(
            self._backend, primary, self._allocator, self._clock,
            guard=self._guard, policy=self._policy, journal=self._journal,
        )
        # Independent keyspace sharing the counter; never reconciled with primary.
        self._redundant = ArtifactStore(
            self._backend, RecordStore(self._backend, ARTIFACTS_REDUNDANT),
            self._allocator, self._clock,
            policy=self._policy, journal=self._journal,
            journal_operation=JournalOperation.CREATE_REDUNDANT,
        )
        self._permissions = PermissionMatrix(
            self._backend, self._guard, self._clock,
            policy=self._policy, journal=self._journal,
        )

    @classmethod
    def from_config(cls, config: VaultConfig, *, clock: Clock | None = None) -> Vault:
        """Build a vault from configuration, enforcing production constraints."""
        enforce_production_constraints(config)
        backend: StateBackend
        if config.backend == "sqlite":
            backend = SQLiteBackend(config.db_path)
        else:
            backend = MemoryBackend()
        if clock is None:
            clock = WallClock(config.height_interval_seconds, config.genesis)
        logger.debug("Vault built from config: backend=%r clock=%r", backend, clock)
        return cls(
            backend,
            clock,
            policy=config.validation_policy(),
            journal_enabled=config.journal_enabled,
        )

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def policy(self) -> ValidationPolicy:
        return self._policy

    # ------------------------------------------------------------------
    # Boundary plumbing
    # ------------------------------------------------------------------

    def _run(self, operation: str, fn: Callable[[], T]) -> OperationResult[T]:
        with self._lock:
            try:
                return OperationResult.success(fn())
            except VaultError as exc:
                logger.debug("%s rejected: %s (%s)", operation, exc.kind.value, exc)
                return OperationResult.failure(exc.kind, str(exc))

    @staticmethod
    def _check_caller(caller: object) -> str:
        if not isinstance(caller, str) or not caller:
            raise InvalidInput("caller must be a non-empty principal")
        return caller

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def create(
        self,
        caller: str,
        label: str,
        integrity_hash: str,
        content: str,
        category: str,
        tags: Sequence[str],
    ) -> OperationResult[int]:
        """Create an artifact owned by *caller*; the value is its sequence id."""
        return self._run(
            "create",
            lambda: self._artifacts.create(
                self._check_caller(caller), label, integrity_hash, content, category, tags
            ),
        )

    def create_redundant(
        self,
        caller: str,
        label: str,
        integrity_hash: str,
        content: str,
        category: str,
        tags: Sequence[str],
    ) -> OperationResult[int]:
        """Same as ``create`` but writes into the redundant keyspace only."""
        return self._run(
            "create_redundant",
            lambda: self._redundant.create(
                self._check_caller(caller), label, integrity_hash, content, category, tags
            ),
        )

    def update(
        self,
        caller: str,
        artifact_id: int,
        label: str,
        integrity_hash: str,
        content: str,
        tags: Sequence[str],
    ) -> OperationResult[bool]:
        """Owner-only update of label, hash, content and tags."""
        return self._run(
            "update",
            lambda: self._artifacts.update(
                self._check_caller(caller), artifact_id, label, integrity_hash, content, tags
            ),
        )

    def grant(
        self,
        caller: str,
        artifact_id: int,
        grantee: str,
        tier: AccessTier | str,
        duration: int,
        can_modify: bool = False,
    ) -> OperationResult[bool]:
        """Owner-only grant of *tier* access to *grantee* for *duration* heights."""
        return self._run(
            "grant",
            lambda: self._permissions.grant(
                self._check_caller(caller), artifact_id, grantee, tier, duration, can_modify
            ),
        )

    # ------------------------------------------------------------------
    # Point lookups
    # ------------------------------------------------------------------

    def get_artifact(self, artifact_id: int) -> Artifact | None:
        with self._lock:
            return self._artifacts.get(artifact_id)

    def get_redundant_artifact(self, artifact_id: int) -> Artifact | None:
        with self._lock:
            return self._redundant.get(artifact_id)

    def get_grant(self, artifact_id: int, grantee: str) -> PermissionGrant | None:
        with self._lock:
            return self._permissions.get_grant(artifact_id, grantee)

    def has_access(
        self,
        artifact_id: int,
        principal: str,
        minimum_tier: AccessTier | str = AccessTier.VIEWER,
    ) -> bool:
        with self._lock:
            return self._permissions.has_access(artifact_id, principal, minimum_tier)

    def can_modify(self, artifact_id: int, principal: str) -> bool:
        with self._lock:
            return self._permissions.can_modify(artifact_id, principal)

    def is_owner(self, artifact_id: int, principal: str) -> bool:
        with self._lock:
            return self._guard.is_owner(artifact_id, principal)

    def current_counter(self) -> int:
        """The last sequence id allocated (0 before any creation)."""
        with self._lock:
            return self._allocator.current()

    # ------------------------------------------------------------------
    # Journal reads
    # ------------------------------------------------------------------

    @property
    def journal_enabled(self) -> bool:
        return self._journal is not None

    def _require_journal(self) -> OperationJournal:
        if self._journal is None:
            raise RuntimeError("Journal is disabled for this vault")
        return self._journal

    def journal_entries(self) -> list[JournalEntry]:
        """All journal entries in position order (empty when disabled)."""
        with self._lock:
            return self._journal.entries() if self._journal is not None else []

    def verify_journal(self) -> bool:
        """Verify the hash chain; raises ``JournalIntegrityError`` on tampering."""
        with self._lock:
            return self._require_journal().verify_chain()

    def export_journal_anchor(self) -> dict[str, Any]:
        with self._lock:
            return self._require_journal().export_anchor()

    def verify_journal_anchor(self, anchor: dict[str, Any]) -> bool:
        with self._lock:
            return self._require_journal().verify_against_anchor(anchor)

    def close(self) -> None:
        with self._lock:
            self._backend.close()

    def __enter__(self) -> Vault:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
