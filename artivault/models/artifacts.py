"""Artifact record models (owner-bound, sequence-addressed)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Artifact(BaseModel):
    """A versioned artifact record as stored in a keyspace.

    The ``sequence_id`` is assigned by the allocator at creation and never
    changes.  ``owner``, ``created_at`` and ``category`` are fixed at
    creation; updates only touch label, hash, content, tags and
    ``modified_at``.  There is no delete.
    """

    model_config = ConfigDict(frozen=True)

    sequence_id: int
    label: str
    owner: str
    integrity_hash: str  # 64-char digest text
    content: str
    created_at: int  # block height
    modified_at: int  # block height, >= created_at
    category: str
    tags: tuple[str, ...]
