"""Operation journal entry model (append-only, hash-chained).

The journal is the audit trail of every committed operation:
- Append-only (no update, no delete)
- Hash-chained (each entry links to the previous via SHA-256)
- Height-stamped (entries record the block height at commit)
- Failed operations leave no entry
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class JournalOperation(str, Enum):
    CREATE = "create"
    CREATE_REDUNDANT = "create_redundant"
    UPDATE = "update"
    GRANT = "grant"


class JournalEntry(BaseModel):
    """A single committed operation in the journal."""

    model_config = ConfigDict(frozen=True)

    position: int  # 1-based, dense
    operation: JournalOperation
    caller: str
    artifact_id: int
    keyspace: str
    height: int
    subject: str = ""  # grantee, for grant entries
    payload_hash: str = ""  # SHA-256 of the canonical record written
    previous_entry_hash: str = ""
    entry_hash: str = ""  # computed after construction, seals this entry
