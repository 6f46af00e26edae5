#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the diary project.

Exception Hierarchy:
    Exception (built-in)
    ├── DatabaseError - Storage engine failures (connection, constraints, schema)
    │   └── ExportError - Bulk dump failures
    ├── EntryNotFoundError - Operation targets an id with no matching row
    ├── ValidationError - Bad arguments (paging, empty content, no-op update)
    └── ConfigurationError - Unsupported or unparseable connection settings

Usage:
    from diary.core.exceptions import DatabaseError, EntryNotFoundError

    try:
        db.read_one(42)
    except EntryNotFoundError as e:
        click.echo(f"Nothing there: {e}")
    except DatabaseError as e:
        logger.error(f"Database operation failed: {e}")
"""


class DatabaseError(Exception):
    """
    Base exception for storage-related errors.

    Raised when an engine cannot complete an operation because of the
    underlying database: connection loss, driver errors, integrity
    violations, or a stale schema left by an older database file.

    Examples:
        >>> raise DatabaseError("Connection to database failed")
        >>> raise DatabaseError("Data integrity violation: NOT NULL constraint failed")
    """

    pass


class ExportError(DatabaseError):
    """
    Exception for dump/export failures.

    Raised when writing entries to an output file fails:
    - Permission issues
    - Missing parent directory
    - Serialization errors

    Examples:
        >>> raise ExportError("Cannot write dump: permission denied")
    """

    pass


class EntryNotFoundError(Exception):
    """
    Exception for operations targeting a missing entry.

    Raised by read_one, update and delete when no row has the requested id.
    Engines check existence explicitly before mutating, since the SQL
    engines only report "zero rows affected" otherwise.

    Attributes:
        entry_id: The id that was looked up

    Examples:
        >>> raise EntryNotFoundError(42)
    """

    def __init__(self, entry_id: int) -> None:
        self.entry_id = entry_id
        super().__init__(f"Entry with id: {entry_id} doesn't exist")


class ValidationError(Exception):
    """
    Exception for invalid arguments.

    Raised when input fails validation before any SQL is issued:
    - page or per_page lower than 1
    - empty content on create or update
    - update called with neither content nor pinned

    Examples:
        >>> raise ValidationError("Page and per_page must be positive")
        >>> raise ValidationError("At least one field must be provided for update")
    """

    pass


class ConfigurationError(Exception):
    """
    Exception for configuration problems.

    Raised when the connection URL uses an unsupported scheme or cannot be
    parsed, and when a configuration file is missing or malformed.

    Examples:
        >>> raise ConfigurationError("Unsupported database URL: mysql://localhost/diary")
        >>> raise ConfigurationError("Database section not found in config.ini")
    """

    pass
