"""Tests for the SQLite backend: URL parsing and database bootstrap."""
import sqlite3
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from diary.core.exceptions import ConfigurationError, DatabaseError
from diary.core.logging_manager import DiaryLogger
from diary.database.engines.sqlite import SQLiteEngine, parse_sqlite_url


class TestParseSqliteUrl:
    """Tests for sqlite URL interpretation."""

    def test_relative_path(self):
        assert parse_sqlite_url("sqlite://diary.db") == Path("diary.db")

    def test_absolute_path(self):
        assert parse_sqlite_url("sqlite:///tmp/x/diary.db") == Path("/tmp/x/diary.db")

    def test_bare_form(self):
        assert parse_sqlite_url("sqlite:notes.db") == Path("notes.db")

    def test_query_string_dropped(self):
        assert parse_sqlite_url("sqlite://diary.db?mode=rw") == Path("diary.db")

    @pytest.mark.parametrize("url", ["sqlite::memory:", "sqlite://:memory:", "sqlite://"])
    def test_memory(self, url):
        assert parse_sqlite_url(url) is None

    def test_wrong_scheme(self):
        with pytest.raises(ConfigurationError):
            parse_sqlite_url("postgres://localhost/diary")


class TestBootstrap:
    """Tests for creating or opening the database file."""

    def test_creates_missing_file(self, test_db_path, sqlite_url):
        assert not test_db_path.exists()

        engine = SQLiteEngine(sqlite_url)
        try:
            assert engine.created is True
            assert test_db_path.exists()
            assert engine.read_many() == []
        finally:
            engine.close()

    def test_creates_parent_directories(self, tmp_dir):
        nested = tmp_dir / "a" / "b" / "diary.db"

        engine = SQLiteEngine(f"sqlite://{nested}")
        try:
            assert nested.exists()
        finally:
            engine.close()

    def test_existing_file_is_reused(self, sqlite_url):
        first = SQLiteEngine(sqlite_url)
        entry = first.create("kept")
        first.close()

        second = SQLiteEngine(sqlite_url)
        try:
            assert second.created is False
            assert second.read_one(entry.id).content == "kept"
        finally:
            second.close()

    def test_schema_has_trigger(self, test_db_path, sqlite_url):
        SQLiteEngine(sqlite_url).close()

        conn = sqlite3.connect(test_db_path)
        try:
            names = {
                row[0]
                for row in conn.execute(
                    "SELECT name FROM sqlite_master WHERE type IN ('table', 'trigger')"
                )
            }
        finally:
            conn.close()

        assert {"entries", "update_entries_updated_at"} <= names

    def test_foreign_file_surfaces_database_error(self, test_db_path, sqlite_url):
        """An existing file without the entries table is not silently migrated."""
        conn = sqlite3.connect(test_db_path)
        conn.execute("CREATE TABLE unrelated (x INTEGER)")
        conn.commit()
        conn.close()

        engine = SQLiteEngine(sqlite_url)
        try:
            assert engine.created is False
            with pytest.raises(DatabaseError):
                engine.read_many()
        finally:
            engine.close()

    def test_memory_database_is_private(self):
        first = SQLiteEngine("sqlite::memory:")
        second = SQLiteEngine("sqlite::memory:")
        try:
            first.create("only here")
            assert len(first.read_many()) == 1
            assert second.read_many() == []
        finally:
            first.close()
            second.close()

    def test_memory_update_stamped_after_creation(self):
        """Back-to-back create/update lands in the same millisecond in memory."""
        engine = SQLiteEngine("sqlite::memory:")
        try:
            for i in range(300):
                entry = engine.create(f"draft {i}")
                updated = engine.update(entry.id, content=f"final {i}")
                assert updated.updated_at > updated.created_at
        finally:
            engine.close()

    def test_later_update_keeps_clock_time(self):
        engine = SQLiteEngine("sqlite::memory:")
        try:
            entry = engine.create("old")
            with engine.engine.begin() as conn:
                conn.exec_driver_sql(
                    "UPDATE entries SET created_at = '2020-01-01 00:00:00.000' WHERE id = ?",
                    (entry.id,),
                )
            updated = engine.update(entry.id, pinned=True)
            assert updated.updated_at.year > 2020
        finally:
            engine.close()

    def test_init_logged(self, sqlite_url):
        mock_logger = MagicMock(spec=DiaryLogger)

        engine = SQLiteEngine(sqlite_url, logger=mock_logger)
        engine.close()

        operations = [c[0][0] for c in mock_logger.log_operation.call_args_list]
        assert operations[0] == "database_init_start"
        assert "schema_created" in operations
        assert "database_init_complete" in operations
        assert operations[-1] == "database_closed"
