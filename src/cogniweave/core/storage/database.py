"""SQLite storage for cognitive profiles.

One table of encrypted profile documents plus a schema version table.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

# Current schema version
SCHEMA_VERSION = 1

# ---------------------------------------------------------------------------
# Schema DDL
# ---------------------------------------------------------------------------

_SCHEMA_V1 = """
-- One row per user; the profile document is stored encrypted
CREATE TABLE IF NOT EXISTS cognitive_profiles (
    user_id      TEXT PRIMARY KEY,
    profile_enc  TEXT NOT NULL,
    generated_by TEXT,
    version      TEXT,
    created_at   TEXT NOT NULL,
    updated_at   TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE INDEX IF NOT EXISTS idx_profiles_updated ON cognitive_profiles(updated_at);
"""


class DatabaseError(Exception):
    """Raised when database operations fail."""


class ProfileDatabase:
    """Owns the SQLite connection behind the profile repository.

    ``db_path`` is a file path (``~`` is expanded and parent directories
    are created) or ``":memory:"`` for a store that lives only as long as
    the process, used by tests and when no encryption key is configured.

    Usage::

        with ProfileDatabase(":memory:") as db:
            with db.transaction() as conn:
                conn.execute(...)
    """

    def __init__(self, db_path: str = ":memory:") -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    @property
    def path(self) -> str:
        return self._db_path

    @property
    def in_memory(self) -> bool:
        return self._db_path == ":memory:"

    @property
    def connection(self) -> sqlite3.Connection:
        """The open connection.

        Raises:
            DatabaseError: If ``initialize()`` has not been called.
        """
        if self._conn is None:
            raise DatabaseError("Database not initialized. Call initialize() first.")
        return self._conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Yield the connection, committing on success and rolling back on error."""
        conn = self.connection
        try:
            yield conn
        except Exception:
            conn.rollback()
            raise
        conn.commit()

    def _connect(self) -> sqlite3.Connection:
        if self.in_memory:
            return sqlite3.connect(":memory:", check_same_thread=False)
        db_file = Path(self._db_path).expanduser()
        db_file.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(db_file), check_same_thread=False)
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def initialize(self) -> None:
        """Open the connection and create the schema. No-op when already open."""
        if self._conn is not None:
            return
        self._conn = self._connect()
        self._conn.row_factory = sqlite3.Row
        self._ensure_schema()
        logger.info("Profile database initialized: %s", self._db_path)

    def _ensure_schema(self) -> None:
        self.connection.executescript(_SCHEMA_V1)
        found = self.get_schema_version()
        if found >= SCHEMA_VERSION:
            return
        with self.transaction() as conn:
            conn.execute("INSERT INTO schema_version (version) VALUES (?)", (SCHEMA_VERSION,))
        logger.info("Profile schema at version %d (was %d)", SCHEMA_VERSION, found)

    def get_schema_version(self) -> int:
        """Highest applied schema version, 0 for a fresh database."""
        (version,) = self.connection.execute(
            "SELECT MAX(version) FROM schema_version"
        ).fetchone()
        return version or 0

    def close(self) -> None:
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None
        logger.info("Profile database closed: %s", self._db_path)

    def __enter__(self) -> ProfileDatabase:
        self.initialize()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
