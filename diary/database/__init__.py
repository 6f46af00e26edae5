#!/usr/bin/env python3
"""
Diary Database Package
----------------------
Data-access layer for the diary.

This package provides:
- DiaryDB: storage facade selecting a backend from the connection URL
- SQLiteEngine / PostgresEngine: the two interchangeable backends
- QueryBuilder: dialect-aware SQL for filtered, sorted, paginated reads
- Entry / SortOrder: value types returned to callers
- ExportManager: bulk dump of all entries
"""

from .manager import DiaryDB, engine_for_url
from .models import Entry, SortOrder
from .engines import StorageEngine, SQLiteEngine, PostgresEngine
from .query_builder import QueryBuilder, Query, Dialect, SQLITE, POSTGRES
from .export_manager import ExportManager
from .decorators import handle_db_errors, log_database_operation
from diary.core.exceptions import (
    ConfigurationError,
    DatabaseError,
    EntryNotFoundError,
    ExportError,
    ValidationError,
)

__all__ = [
    # Facade
    "DiaryDB",
    "engine_for_url",
    # Engines
    "StorageEngine",
    "SQLiteEngine",
    "PostgresEngine",
    # Query construction
    "QueryBuilder",
    "Query",
    "Dialect",
    "SQLITE",
    "POSTGRES",
    # Values
    "Entry",
    "SortOrder",
    # Export
    "ExportManager",
    # Exceptions
    "ConfigurationError",
    "DatabaseError",
    "EntryNotFoundError",
    "ExportError",
    "ValidationError",
    # Decorators
    "handle_db_errors",
    "log_database_operation",
]
