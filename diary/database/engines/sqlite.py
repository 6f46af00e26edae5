#!/usr/bin/env python3
"""
sqlite.py
--------------------
Embedded SQLite backend.

Accepted URLs:
    sqlite://diary.db          relative to the working directory
    sqlite:///home/me/diary.db absolute path
    sqlite:diary.db            bare form
    sqlite::memory:            private in-memory database

Timestamps are stored as UTC text with millisecond precision so that an
update issued right after an insert still sorts after it.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Optional

# --- Third party imports ---
from sqlalchemy import Engine, create_engine
from sqlalchemy.pool import StaticPool

# --- Local imports ---
from diary.core.exceptions import ConfigurationError
from diary.core.logging_manager import safe_logger
from ..query_builder import SQLITE
from .base import StorageEngine


MEMORY = ":memory:"
NOW = "strftime('%Y-%m-%d %H:%M:%f', 'now')"
# Millisecond clock: never stamp an update at or before the insert time
STAMP = f"MAX({NOW}, strftime('%Y-%m-%d %H:%M:%f', OLD.created_at, '+0.001 seconds'))"

SCHEMA = (
    f"""
    CREATE TABLE IF NOT EXISTS entries (
        id         INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
        content    TEXT NOT NULL,
        created_at DATETIME NOT NULL DEFAULT ({NOW}),
        updated_at DATETIME,
        pinned     BOOLEAN NOT NULL DEFAULT 0
    )
    """,
    f"""
    CREATE TRIGGER IF NOT EXISTS update_entries_updated_at
    AFTER UPDATE OF content, pinned ON entries
    FOR EACH ROW
    WHEN OLD.content IS NOT NEW.content OR OLD.pinned IS NOT NEW.pinned
    BEGIN
        UPDATE entries SET updated_at = {STAMP} WHERE id = OLD.id;
    END
    """,
)


def parse_sqlite_url(url: str) -> Optional[Path]:
    """
    Extract the database file path from a sqlite URL.

    Args:
        url: URL starting with 'sqlite:'

    Returns:
        Path of the database file, or None for an in-memory database

    Raises:
        ConfigurationError: If the URL does not use the sqlite scheme
    """
    if not url.lower().startswith("sqlite:"):
        raise ConfigurationError(f"Not a sqlite URL: {url}")

    rest = url[len("sqlite:"):]
    if rest.startswith("//"):
        rest = rest[2:]
    rest = rest.split("?", 1)[0]

    if rest in ("", MEMORY):
        return None
    return Path(rest).expanduser()


class SQLiteEngine(StorageEngine):
    """
    Storage engine for a local SQLite file.

    Attributes:
        path: Database file, or None when in memory
    """

    dialect = SQLITE
    schema = SCHEMA

    def _open(self) -> Engine:
        self.path = parse_sqlite_url(self.url)

        if self.path is None:
            engine = create_engine(
                "sqlite://",
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
            self._apply_schema(engine)
            return engine

        fresh = not self.path.exists()
        if fresh:
            self.path.parent.mkdir(parents=True, exist_ok=True)

        engine = create_engine(f"sqlite:///{self.path}", pool_pre_ping=True)

        if fresh:
            self._apply_schema(engine)
            safe_logger(self.logger).log_info(
                "Database created successfully", {"path": str(self.path)}
            )
        return engine
