"""Append-only, hash-chained operation journal.

Every committed vault operation appends one entry inside the same atomic
block as the state it wrote, so the journal and the keyspaces cannot
disagree about what happened.  Failed operations leave no entry.

Design:
- Append-only: only ``append()`` writes; there is no update or delete.
- Hash-chained: each entry includes SHA-256 of the previous entry.
- Head pointer in the ``meta`` keyspace gives O(1) appends.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from artivault.core.backend import JOURNAL, META, StateBackend
from artivault.core.hasher import canonical_json_bytes, compute_entry_hash, sha256_hex
from artivault.models.journal import JournalEntry, JournalOperation

logger = logging.getLogger(__name__)

_HEAD_KEY = "journal_head"


class JournalIntegrityError(RuntimeError):
    """Raised when the hash chain is broken."""


def _position_key(position: int) -> str:
    # Zero-padded so backend key order equals append order.
    return f"{position:012d}"


class OperationJournal:
    """Tamper-evident audit trail of committed operations.

    Parameters
    ----------
    backend:
        The state backend shared with the record stores.
    """

    def __init__(self, backend: StateBackend) -> None:
        self._backend = backend

    # ------------------------------------------------------------------
    # Core: append-only write
    # ------------------------------------------------------------------

    def append(
        self,
        operation: JournalOperation,
        *,
        caller: str,
        artifact_id: int,
        keyspace: str,
        height: int,
        payload_hash: str,
        subject: str = "",
    ) -> JournalEntry:
        """Seal and store a new entry; the caller holds the atomic block."""
        head = self._backend.get(META, _HEAD_KEY) or {"position": 0, "entry_hash": ""}
        entry = JournalEntry(
            position=head["position"] + 1,
            operation=operation,
            caller=caller,
            artifact_id=artifact_id,
            keyspace=keyspace,
            height=height,
            subject=subject,
            payload_hash=payload_hash,
            previous_entry_hash=head["entry_hash"],
        )
        sealed = entry.model_copy(
            update={"entry_hash": compute_entry_hash(entry.model_dump(mode="json"))}
        )
        self._backend.put(JOURNAL, _position_key(sealed.position), sealed.model_dump(mode="json"))
        self._backend.put(
            META, _HEAD_KEY, {"position": sealed.position, "entry_hash": sealed.entry_hash}
        )
        logger.debug(
            "Journal entry %d: %s by %s on %s/%s",
            sealed.position, operation.value, caller, keyspace, artifact_id,
        )
        return sealed

    # ------------------------------------------------------------------
    # Query methods (read-only)
    # ------------------------------------------------------------------

    def entries(self) -> list[JournalEntry]:
        """All entries in append order."""
        return [JournalEntry.model_validate(raw) for _key, raw in self._backend.scan(JOURNAL)]

    def head(self) -> JournalEntry | None:
        raw = self._backend.get(META, _HEAD_KEY)
        if not raw:
            return None
        entry = self._backend.get(JOURNAL, _position_key(raw["position"]))
        return JournalEntry.model_validate(entry) if entry else None

    def __len__(self) -> int:
        raw = self._backend.get(META, _HEAD_KEY)
        return int(raw["position"]) if raw else 0

    # ------------------------------------------------------------------
    # Chain verification
    # ------------------------------------------------------------------

    def verify_chain(self) -> bool:
        """Walk every entry, recompute its hash, and check the links.

        Returns True if the chain is valid, raises JournalIntegrityError otherwise.
        """
        prev_hash = ""
        for expected_position, entry in enumerate(self.entries(), start=1):
            if entry.position != expected_position:
                raise JournalIntegrityError(
                    f"Gap in journal: expected position {expected_position}, "
                    f"found {entry.position}"
                )
            if entry.previous_entry_hash != prev_hash:
                raise JournalIntegrityError(
                    f"Chain broken at entry {entry.position}: "
                    f"expected previous_hash={prev_hash!r}, "
                    f"got {entry.previous_entry_hash!r}"
                )
            expected_hash = compute_entry_hash(entry.model_dump(mode="json"))
            if entry.entry_hash != expected_hash:
                raise JournalIntegrityError(
                    f"Tampered entry {entry.position}: "
                    f"expected hash={expected_hash!r}, got {entry.entry_hash!r}"
                )
            prev_hash = entry.entry_hash
        return True

    # ------------------------------------------------------------------
    # External anchoring
    # ------------------------------------------------------------------

    def export_anchor(self) -> dict[str, Any]:
        """Export the current chain state for storage outside the vault.

        Comparing a previously-exported anchor against the live chain
        detects retroactive rewrites.

        Returns
        -------
        dict[str, Any]
            Keys: ``entry_count``, ``root_hash`` (hash of the last entry),
            ``first_entry_hash``, ``timestamp_utc``, ``anchor_hash``.
        """
        entries = self.entries()
        payload: dict[str, Any] = {
            "entry_count": len(entries),
            "root_hash": entries[-1].entry_hash if entries else "",
            "first_entry_hash": entries[0].entry_hash if entries else "",
            "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        }
        payload["anchor_hash"] = sha256_hex(canonical_json_bytes(payload)) if entries else ""
        return payload

    def verify_against_anchor(self, anchor: dict[str, Any]) -> bool:
        """Verify the live chain still contains the anchored prefix.

        Returns ``True`` on match, raises ``JournalIntegrityError`` if the
        chain was shortened or rewritten.
        """
        entries = self.entries()
        expected_count = anchor.get("entry_count", 0)
        if len(entries) < expected_count:
            raise JournalIntegrityError(
                f"Journal has {len(entries)} entries but anchor expects "
                f"at least {expected_count}."
            )
        if expected_count == 0:
            return True

        if entries[0].entry_hash != anchor.get("first_entry_hash", ""):
            raise JournalIntegrityError(
                "First entry hash mismatch: journal may have been rewritten "
                "from the beginning."
            )
        if entries[expected_count - 1].entry_hash != anchor.get("root_hash", ""):
            raise JournalIntegrityError(
                f"Root hash mismatch at entry {expected_count}: journal may "
                f"have been retroactively modified."
            )
        self.verify_chain()
        return True
