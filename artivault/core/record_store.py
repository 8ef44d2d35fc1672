"""Keyed artifact record stores and the global sequence allocator.

The primary and redundant artifact mappings are two ``RecordStore``
instances over the same backend, bound to different keyspaces.  They are
never cross-synchronised: a record written to one is invisible to the
other.  Any real redundancy guarantee would need dual writes plus
reconciliation, which this layer does not provide.
"""

from __future__ import annotations

from artivault.core.backend import META, StateBackend
from artivault.models.artifacts import Artifact

_COUNTER_KEY = "counter"


def _is_sequence_id(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class RecordStore:
    """Point-lookup mapping ``sequence_id -> Artifact`` in one keyspace.

    Parameters
    ----------
    backend:
        The shared state backend.
    keyspace:
        Destination keyspace for this store.
    """

    def __init__(self, backend: StateBackend, keyspace: str) -> None:
        self._backend = backend
        self._keyspace = keyspace

    @property
    def keyspace(self) -> str:
        return self._keyspace

    def get(self, sequence_id: int) -> Artifact | None:
        if not _is_sequence_id(sequence_id):
            return None
        raw = self._backend.get(self._keyspace, str(sequence_id))
        return Artifact.model_validate(raw) if raw is not None else None

    def exists(self, sequence_id: int) -> bool:
        if not _is_sequence_id(sequence_id):
            return False
        return self._backend.get(self._keyspace, str(sequence_id)) is not None

    def put(self, artifact: Artifact) -> None:
        """Write (or overwrite) a record.  Callers hold the backend's atomic block."""
        self._backend.put(
            self._keyspace, str(artifact.sequence_id), artifact.model_dump(mode="json")
        )

    def __repr__(self) -> str:
        return f"RecordStore(keyspace={self._keyspace!r})"


class SequenceAllocator:
    """Sole owner of the process-wide artifact counter.

    The counter only moves through ``next_id()``, an increment-and-fetch
    that must run inside the same atomic block as the record write it
    numbers, so an aborted creation leaves the counter unchanged.
    """

    def __init__(self, backend: StateBackend) -> None:
        self._backend = backend

    def current(self) -> int:
        """The last id handed out (0 before the first creation)."""
        raw = self._backend.get(META, _COUNTER_KEY)
        return int(raw["value"]) if raw else 0

    def next_id(self) -> int:
        """Advance the counter by one and return the new value."""
        value = self.current() + 1
        self._backend.put(META, _COUNTER_KEY, {"value": value})
        return value
