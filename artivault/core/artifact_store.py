"""Artifact store — create and update paths for owner-bound records.

There is exactly one create path and one update path.  The redundant
keyspace reuses the create path through a second ``ArtifactStore`` bound
to another ``RecordStore``; it shares the allocator but has no guard and
is never read by updates or grants.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from artivault.core.backend import StateBackend
from artivault.core.clock import Clock
from artivault.core.hasher import record_hash
from artivault.core.journal import OperationJournal
from artivault.core.ownership import OwnershipGuard
from artivault.core.record_store import RecordStore, SequenceAllocator
from artivault.core.validators import ValidationPolicy
from artivault.models.artifacts import Artifact
from artivault.models.journal import JournalOperation

logger = logging.getLogger(__name__)


class ArtifactStore:
    """Validates, numbers and writes artifact records into one keyspace.

    Parameters
    ----------
    backend:
        Shared state backend; every operation runs in one ``atomic()`` block.
    records:
        Destination keyspace for this store.
    allocator:
        Global sequence allocator (shared across keyspaces).
    clock:
        Source of the current block height.
    guard:
        Ownership guard for updates.  ``None`` for a write-only store.
    policy:
        Validation strictness.
    journal:
        Optional operation journal appended to inside each commit.
    """

    def __init__(
        self,
        backend: StateBackend,
        records: RecordStore,
        allocator: SequenceAllocator,
        clock: Clock,
        *,
        guard: OwnershipGuard | None = None,
        policy: ValidationPolicy | None = None,
        journal: OperationJournal | None = None,
        journal_operation: JournalOperation = JournalOperation.CREATE,
    ) -> None:
        self._backend = backend
        self._records = records
        self._allocator = allocator
        self._clock = clock
        self._guard = guard
        self._policy = policy or ValidationPolicy()
        self._journal = journal
        self._create_operation = journal_operation

    @property
    def keyspace(self) -> str:
        return self._records.keyspace

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(
        self,
        caller: str,
        label: str,
        integrity_hash: str,
        content: str,
        category: str,
        tags: Sequence[str],
    ) -> int:
        """Validate, allocate the next sequence id, and write a new record.

        Fields are checked in the order label, hash, content, category,
        tags; the first failure raises and nothing is written.
        """
        self._policy.check_label(label)
        self._policy.check_hash(integrity_hash)
        self._policy.check_content(content)
        self._policy.check_category(category)
        self._policy.check_tags(tags)

        with self._backend.atomic():
            now = self._clock.now()
            sequence_id = self._allocator.next_id()
            artifact = Artifact(
                sequence_id=sequence_id,
                label=label,
                owner=caller,
                integrity_hash=integrity_hash,
                content=content,
                created_at=now,
                modified_at=now,
                category=category,
                tags=tuple(tags),
            )
            self._records.put(artifact)
            self._record(self._create_operation, caller, artifact)

        logger.info(
            "Created artifact %d in '%s' for %s at height %d.",
            sequence_id, self.keyspace, caller, now,
        )
        return sequence_id

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update(
        self,
        caller: str,
        artifact_id: int,
        label: str,
        integrity_hash: str,
        content: str,
        tags: Sequence[str],
    ) -> bool:
        """Replace label, hash, content and tags on an owned artifact.

        ``owner``, ``created_at`` and ``category`` are carried over
        unchanged; ``modified_at`` moves to the current height.
        """
        if self._guard is None:
            raise RuntimeError(f"store for keyspace '{self.keyspace}' does not accept updates")
        self._guard.require_owner(artifact_id, caller)

        self._policy.check_label(label)
        self._policy.check_hash(integrity_hash)
        self._policy.check_content(content)
        self._policy.check_tags(tags)

        with self._backend.atomic():
            existing = self._records.get(artifact_id)
            if existing is None:  # pragma: no cover - guarded above under the vault lock
                raise RuntimeError(f"artifact {artifact_id} vanished during update")
            now = max(self._clock.now(), existing.modified_at)
            updated = existing.model_copy(
                update={
                    "label": label,
                    "integrity_hash": integrity_hash,
                    "content": content,
                    "tags": tuple(tags),
                    "modified_at": now,
                }
            )
            self._records.put(updated)
            self._record(JournalOperation.UPDATE, caller, updated)

        logger.info("Updated artifact %d by %s at height %d.", artifact_id, caller, now)
        return True

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get(self, artifact_id: int) -> Artifact | None:
        return self._records.get(artifact_id)

    def _record(self, operation: JournalOperation, caller: str, artifact: Artifact) -> None:
        if self._journal is None:
            return
        self._journal.append(
            operation,
            caller=caller,
            artifact_id=artifact.sequence_id,
            keyspace=self.keyspace,
            height=artifact.modified_at,
            payload_hash=record_hash(artifact.model_dump(mode="json")),
        )
