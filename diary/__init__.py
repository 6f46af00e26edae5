"""
Diary
=====

A personal diary record-keeper: create, read, update and delete short
timestamped entries with a "pinned" flag, stored in SQLite or Postgres.

Main Components:
    - database: storage facade, backend engines, query builder, dump
    - core: logging, exceptions, configuration, validation
    - cli: click command-line interface (`diary`)

Example Usage:
    >>> from diary import DiaryDB
    >>> with DiaryDB("sqlite://diary.db") as db:
    ...     entry = db.create("First entry", pinned=True)
    ...     latest = db.read_many(per_page=5)
"""

__version__ = "1.0.0"

from diary.database.manager import DiaryDB
from diary.database.models import Entry, SortOrder

__all__ = ["DiaryDB", "Entry", "SortOrder"]
