#!/usr/bin/env python3
"""
base.py
--------------------
Abstract storage engine shared by the SQLite and Postgres backends.

The operation set (create, read_one, read_many, exists, update, delete,
close) lives here; subclasses only supply their Dialect, their schema
script, and `_open()`, which resolves the URL, creates the physical
database on first run and returns a pooled SQLAlchemy Engine.

Key Features:
    - Positional, dialect-specific SQL from QueryBuilder
    - Explicit existence check before update/delete so a missing id is an
      EntryNotFoundError rather than "zero rows affected"
    - SQLAlchemy failures surfaced as DatabaseError via @handle_db_errors
    - Timing and outcome of every operation logged via @log_database_operation
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC, abstractmethod
from typing import ClassVar, List, Optional, Sequence, Union

# --- Third party imports ---
from sqlalchemy import Engine

# --- Local imports ---
from diary.core.exceptions import (
    ConfigurationError,
    DatabaseError,
    EntryNotFoundError,
)
from diary.core.logging_manager import DiaryLogger, safe_logger
from diary.core.validators import DataValidator
from ..decorators import handle_db_errors, log_database_operation
from ..models import Entry, SortOrder
from ..query_builder import (
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    Dialect,
    QueryBuilder,
)


class StorageEngine(ABC):
    """
    Base class for diary storage backends.

    Attributes:
        url: Connection URL the engine was built from
        logger: Optional DiaryLogger
        query_builder: QueryBuilder bound to the subclass dialect
        engine: Pooled SQLAlchemy Engine, owned until close()
        created: True when construction created the database
    """

    dialect: ClassVar[Dialect]
    schema: ClassVar[Sequence[str]] = ()

    def __init__(self, url: str, logger: Optional[DiaryLogger] = None) -> None:
        """
        Open (and on first run create) the target database.

        Args:
            url: Backend connection URL
            logger: Optional logger for operation tracking

        Raises:
            ConfigurationError: If the URL cannot be interpreted
            DatabaseError: If the database cannot be created or reached
        """
        self.url = url
        self.logger = logger
        self.query_builder = QueryBuilder(self.dialect)
        self.created = False

        safe_logger(self.logger).log_operation(
            "database_init_start", {"backend": self.dialect.name}
        )
        try:
            self.engine: Engine = self._open()
        except ConfigurationError:
            raise
        except Exception as e:
            safe_logger(self.logger).log_error(e, {"operation": "database_init"})
            raise DatabaseError(f"Database initialization failed: {e}") from e

        safe_logger(self.logger).log_operation(
            "database_init_complete",
            {"backend": self.dialect.name, "created": self.created},
        )

    # ---- Setup ----
    @abstractmethod
    def _open(self) -> Engine:
        """Resolve the URL, create the database if missing, return the Engine."""

    def _apply_schema(self, engine: Engine) -> None:
        """Run the idempotent schema script in a single transaction."""
        with engine.begin() as conn:
            for statement in self.schema:
                conn.exec_driver_sql(statement)
        self.created = True
        safe_logger(self.logger).log_operation(
            "schema_created", {"backend": self.dialect.name}
        )

    # ---- Operations ----
    @handle_db_errors
    @log_database_operation("create_entry")
    def create(self, content: str, pinned: bool = False) -> Entry:
        """
        Insert a new entry.

        Args:
            content: Entry body, must be non-empty
            pinned: Initial pinned flag

        Returns:
            The stored Entry with backend-assigned id and created_at

        Raises:
            ValidationError: If content is empty
            DatabaseError: If the insert fails
        """
        DataValidator.validate_content(content)
        query = self.query_builder.insert(content, bool(pinned))
        with self.engine.begin() as conn:
            row = conn.exec_driver_sql(query.sql, query.params).mappings().one()
        return Entry.from_row(row)

    @handle_db_errors
    @log_database_operation("read_entry")
    def read_one(self, entry_id: int) -> Entry:
        """
        Fetch a single entry by id.

        Raises:
            EntryNotFoundError: If no row has that id
        """
        query = self.query_builder.select_one(entry_id)
        with self.engine.connect() as conn:
            row = conn.exec_driver_sql(query.sql, query.params).mappings().first()
        if row is None:
            raise EntryNotFoundError(entry_id)
        return Entry.from_row(row)

    @handle_db_errors
    @log_database_operation("read_entries")
    def read_many(
        self,
        page: int = DEFAULT_PAGE,
        per_page: int = DEFAULT_PER_PAGE,
        sort: Union[SortOrder, str, None] = None,
        pinned: Optional[bool] = None,
        substring: Optional[str] = None,
    ) -> List[Entry]:
        """
        Fetch one page of entries ordered by (created_at, id).

        Args:
            page: 1-based page number (default 1)
            per_page: Rows per page (default 10)
            sort: 'asc' or 'desc' (default desc)
            pinned: Only entries with this pinned value
            substring: Only entries whose content contains this,
                case-insensitively

        Returns:
            Entries on the requested page; empty past the last page

        Raises:
            ValidationError: If page or per_page is lower than 1
        """
        query = self.query_builder.select_page(page, per_page, sort, pinned, substring)
        with self.engine.connect() as conn:
            rows = conn.exec_driver_sql(query.sql, query.params).mappings().all()
        return [Entry.from_row(row) for row in rows]

    @handle_db_errors
    def exists(self, entry_id: int) -> bool:
        """Check whether an entry with this id exists."""
        query = self.query_builder.exists(entry_id)
        with self.engine.connect() as conn:
            return conn.exec_driver_sql(query.sql, query.params).first() is not None

    @handle_db_errors
    @log_database_operation("update_entry")
    def update(
        self,
        entry_id: int,
        content: Optional[str] = None,
        pinned: Optional[bool] = None,
    ) -> Entry:
        """
        Change content and/or pinned on an existing entry.

        Args:
            entry_id: Target entry
            content: New body, or None to keep
            pinned: New flag, or None to keep

        Returns:
            The entry as stored after the update, including updated_at

        Raises:
            ValidationError: If neither field is supplied (checked first)
            EntryNotFoundError: If the id does not exist
        """
        query = self.query_builder.update(entry_id, content, pinned)

        if not self.exists(entry_id):
            raise EntryNotFoundError(entry_id)

        select = self.query_builder.select_one(entry_id)
        with self.engine.begin() as conn:
            conn.exec_driver_sql(query.sql, query.params)
            row = conn.exec_driver_sql(select.sql, select.params).mappings().one()
        return Entry.from_row(row)

    @handle_db_errors
    @log_database_operation("delete_entry")
    def delete(self, entry_id: int) -> None:
        """
        Permanently remove an entry.

        Raises:
            EntryNotFoundError: If the id does not exist
        """
        if not self.exists(entry_id):
            raise EntryNotFoundError(entry_id)

        query = self.query_builder.delete(entry_id)
        with self.engine.begin() as conn:
            conn.exec_driver_sql(query.sql, query.params)

    def close(self) -> None:
        """Dispose of the connection pool. Call once before exit."""
        self.engine.dispose()
        safe_logger(self.logger).log_operation(
            "database_closed", {"backend": self.dialect.name}
        )
