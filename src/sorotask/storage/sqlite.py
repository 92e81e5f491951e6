"""SQLite storage implementation.

Durable key-value storage: the ID counter and task records survive process
restarts. Keys are stored in their text encoding, values pickled.

The schema is intentionally simple:
- one ``entries`` table, created if missing
- no expiry or eviction; rows live forever

Usage:
    storage = SQLiteStorage(".local/sorotask/ledger.sqlite3")
    registry = TaskRegistry(storage)
"""

from __future__ import annotations

import contextlib
import logging
import pickle  # nosec B403 - Values are written by this process only
import sqlite3
import time
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from sorotask.storage.keys import DataKey, decode_key

logger = logging.getLogger(__name__)


class SQLiteStorage:
    """SQLite-backed storage.

    One connection is held for the store's lifetime so a transaction can span
    several ``get``/``set`` calls. Outside ``transaction()`` every write
    commits immediately. Nested transactions use savepoints.

    Thread-safety:
    - the connection is shared across threads; callers must serialize
      access (the host environment holds its operation lock around every
      contract call)
    """

    def __init__(self, db_path: str | Path = "sorotask.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(
            str(self._db_path),
            timeout=30.0,
            isolation_level=None,
            check_same_thread=False,
        )
        self._depth = 0
        self._configure_conn(self._conn)
        self._ensure_schema()
        logger.info("SQLiteStorage ready db=%s entries=%s", self._db_path, len(self))

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.DatabaseError):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS entries (
                key TEXT PRIMARY KEY,
                value BLOB NOT NULL,
                updated_at REAL NOT NULL
            )
            """
        )

    # ---- public API ----

    def get(self, key: DataKey, default: Any = None) -> Any:
        row = self._conn.execute(
            "SELECT value FROM entries WHERE key = ?", (key.encode(),)
        ).fetchone()
        if row is None:
            return default
        return pickle.loads(row[0])  # nosec B301 - Only reads rows written by set()

    def set(self, key: DataKey, value: Any) -> None:
        self._conn.execute(
            """
            INSERT INTO entries(key, value, updated_at) VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value,
                                           updated_at = excluded.updated_at
            """,
            (key.encode(), pickle.dumps(value), time.time()),
        )

    def has(self, key: DataKey) -> bool:
        row = self._conn.execute("SELECT 1 FROM entries WHERE key = ?", (key.encode(),)).fetchone()
        return row is not None

    def keys(self) -> Iterator[DataKey]:
        """Iterate stored keys."""
        rows = self._conn.execute("SELECT key FROM entries ORDER BY key").fetchall()
        for (raw,) in rows:
            yield decode_key(raw)

    def __len__(self) -> int:
        (n,) = self._conn.execute("SELECT COUNT(*) FROM entries").fetchone()
        return int(n)

    @contextlib.contextmanager
    def transaction(self) -> Iterator[None]:
        """Commit on success, roll back everything written inside on error."""
        savepoint = f"sp_{self._depth}"
        if self._depth == 0:
            self._conn.execute("BEGIN IMMEDIATE")
        else:
            self._conn.execute(f"SAVEPOINT {savepoint}")
        self._depth += 1
        try:
            yield
        except BaseException:
            self._depth -= 1
            if self._depth == 0:
                self._conn.execute("ROLLBACK")
            else:
                self._conn.execute(f"ROLLBACK TO SAVEPOINT {savepoint}")
                self._conn.execute(f"RELEASE SAVEPOINT {savepoint}")
            raise
        self._depth -= 1
        if self._depth == 0:
            self._conn.execute("COMMIT")
        else:
            self._conn.execute(f"RELEASE SAVEPOINT {savepoint}")

    def close(self) -> None:
        self._conn.close()
