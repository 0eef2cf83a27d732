"""Tests for ProfileDatabase: schema creation, versioning, transactions, lifecycle."""

from __future__ import annotations

import pytest

from cogniweave.core.storage.database import SCHEMA_VERSION, DatabaseError, ProfileDatabase


class TestInitialization:
    def test_in_memory_initialize(self):
        db = ProfileDatabase(":memory:")
        db.initialize()
        assert db.connection is not None
        db.close()

    def test_double_initialize_is_idempotent(self):
        db = ProfileDatabase(":memory:")
        db.initialize()
        conn1 = db.connection
        db.initialize()
        assert db.connection is conn1
        db.close()

    def test_connection_before_init_raises(self):
        db = ProfileDatabase(":memory:")
        with pytest.raises(DatabaseError, match="not initialized"):
            _ = db.connection

    def test_context_manager(self):
        with ProfileDatabase(":memory:") as db:
            assert db.connection is not None
        with pytest.raises(DatabaseError):
            _ = db.connection


class TestSchema:
    def test_schema_version_recorded(self):
        with ProfileDatabase(":memory:") as db:
            assert db.get_schema_version() == SCHEMA_VERSION

    def test_tables_created(self):
        with ProfileDatabase(":memory:") as db:
            cursor = db.connection.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            tables = {row[0] for row in cursor.fetchall()}
        assert {"cognitive_profiles", "schema_version"} <= tables

    def test_index_created(self):
        with ProfileDatabase(":memory:") as db:
            cursor = db.connection.execute("SELECT name FROM sqlite_master WHERE type='index'")
            indexes = {row[0] for row in cursor.fetchall()}
        assert "idx_profiles_updated" in indexes


class TestFileDatabase:
    def test_creates_parent_directories(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "profiles.db"
        db = ProfileDatabase(str(db_path))
        db.initialize()
        assert db_path.exists()
        assert db.get_schema_version() == SCHEMA_VERSION
        db.close()

    def test_reopen_keeps_single_version_row(self, tmp_path):
        db_path = str(tmp_path / "profiles.db")
        with ProfileDatabase(db_path):
            pass
        with ProfileDatabase(db_path) as db:
            rows = db.connection.execute("SELECT COUNT(*) FROM schema_version").fetchone()
            assert rows[0] == 1

    def test_file_store_uses_wal(self, tmp_path):
        with ProfileDatabase(str(tmp_path / "profiles.db")) as db:
            (mode,) = db.connection.execute("PRAGMA journal_mode").fetchone()
            assert mode.lower() == "wal"
            assert not db.in_memory


class TestTransaction:
    _INSERT = (
        "INSERT INTO cognitive_profiles (user_id, profile_enc, created_at, updated_at) "
        "VALUES (?, 'x', 't', 't')"
    )

    def _count(self, db) -> int:
        return db.connection.execute("SELECT COUNT(*) FROM cognitive_profiles").fetchone()[0]

    def test_commits_on_success(self):
        with ProfileDatabase(":memory:") as db:
            with db.transaction() as conn:
                conn.execute(self._INSERT, ("u1",))
            assert self._count(db) == 1

    def test_rolls_back_on_error(self):
        with ProfileDatabase(":memory:") as db:
            with pytest.raises(RuntimeError):
                with db.transaction() as conn:
                    conn.execute(self._INSERT, ("u1",))
                    raise RuntimeError("boom")
            assert self._count(db) == 0

    def test_in_memory_flag(self, tmp_path):
        assert ProfileDatabase(":memory:").in_memory
        assert not ProfileDatabase(str(tmp_path / "p.db")).in_memory


class TestClose:
    def test_double_close_is_safe(self):
        db = ProfileDatabase(":memory:")
        db.initialize()
        db.close()
        db.close()
