"""Key-value state backends: the narrow interface the vault persists through.

A backend stores JSON-object records in named keyspaces.  Callers group
writes with ``atomic()``: every ``put`` inside the block commits together
or, if the block raises, none of them do.

Two implementations:

1. ``MemoryBackend``: dict of dicts, snapshot/restore on failure.  Volatile,
   suitable for tests and embedding.
2. ``SQLiteBackend``: single ``records`` table in WAL mode, one SQLite
   transaction per ``atomic()`` block.  Persistent.
"""

from __future__ import annotations

import copy
import json
import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

# Keyspaces used by the vault
ARTIFACTS = "artifacts"
ARTIFACTS_REDUNDANT = "artifacts_redundant"
GRANTS = "grants"
META = "meta"
JOURNAL = "journal"


class StateBackend(Protocol):
    """Minimal keyed-record persistence contract."""

    def get(self, keyspace: str, key: str) -> dict[str, Any] | None: ...

    def put(self, keyspace: str, key: str, value: dict[str, Any]) -> None: ...

    def scan(self, keyspace: str) -> list[tuple[str, dict[str, Any]]]: ...

    def atomic(self) -> Any: ...

    def close(self) -> None: ...


# ---------------------------------------------------------------------------
# In-memory
# ---------------------------------------------------------------------------


class MemoryBackend:
    """Volatile backend keeping ``keyspace -> key -> record`` in dicts."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, dict[str, Any]]] = {}
        self._depth = 0

    def get(self, keyspace: str, key: str) -> dict[str, Any] | None:
        record = self._data.get(keyspace, {}).get(key)
        return copy.deepcopy(record) if record is not None else None

    def put(self, keyspace: str, key: str, value: dict[str, Any]) -> None:
        self._data.setdefault(keyspace, {})[key] = copy.deepcopy(value)

    def scan(self, keyspace: str) -> list[tuple[str, dict[str, Any]]]:
        space = self._data.get(keyspace, {})
        return [(k, copy.deepcopy(space[k])) for k in sorted(space)]

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Snapshot on the outermost block; restore it if the block raises."""
        snapshot = copy.deepcopy(self._data) if self._depth == 0 else None
        self._depth += 1
        try:
            yield
        except BaseException:
            if snapshot is not None:
                self._data = snapshot
            raise
        finally:
            self._depth -= 1

    def close(self) -> None:
        self._data.clear()

    def __repr__(self) -> str:
        return f"MemoryBackend(keyspaces={sorted(self._data)})"


# ---------------------------------------------------------------------------
# SQLite
# ---------------------------------------------------------------------------

_CREATE_RECORDS = """
CREATE TABLE IF NOT EXISTS records (
    keyspace    TEXT NOT NULL,
    key         TEXT NOT NULL,
    value_json  TEXT NOT NULL,
    PRIMARY KEY (keyspace, key)
);
"""


class SQLiteBackend:
    """Persistent backend over a single SQLite ``records`` table.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.  Created (with parents) if it
        does not exist.
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        # Autocommit mode; transactions are opened explicitly in atomic().
        self._conn: sqlite3.Connection | None = sqlite3.connect(
            str(self._db_path), check_same_thread=False, isolation_level=None
        )
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute(_CREATE_RECORDS)
        self._depth = 0
        logger.debug("SQLiteBackend opened at %s", self._db_path)

    @property
    def db_path(self) -> Path:
        return self._db_path

    def _db(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError(f"SQLiteBackend at {self._db_path} is closed")
        return self._conn

    def get(self, keyspace: str, key: str) -> dict[str, Any] | None:
        row = self._db().execute(
            "SELECT value_json FROM records WHERE keyspace = ? AND key = ?",
            (keyspace, key),
        ).fetchone()
        return json.loads(row[0]) if row else None

    def put(self, keyspace: str, key: str, value: dict[str, Any]) -> None:
        self._db().execute(
            "INSERT INTO records (keyspace, key, value_json) VALUES (?, ?, ?) "
            "ON CONFLICT(keyspace, key) DO UPDATE SET value_json = excluded.value_json",
            (keyspace, key, json.dumps(value, sort_keys=True)),
        )

    def scan(self, keyspace: str) -> list[tuple[str, dict[str, Any]]]:
        rows = self._db().execute(
            "SELECT key, value_json FROM records WHERE keyspace = ? ORDER BY key ASC",
            (keyspace,),
        ).fetchall()
        return [(key, json.loads(value_json)) for key, value_json in rows]

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Run the block in one SQLite transaction (nested blocks join it)."""
        conn = self._db()
        outermost = self._depth == 0
        if outermost:
            conn.execute("BEGIN IMMEDIATE")
        self._depth += 1
        try:
            yield
        except BaseException:
            self._depth -= 1
            if outermost:
                conn.execute("ROLLBACK")
            raise
        else:
            self._depth -= 1
            if outermost:
                conn.execute("COMMIT")

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> SQLiteBackend:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"SQLiteBackend(db_path={str(self._db_path)!r})"
