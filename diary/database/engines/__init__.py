"""
Storage engines
---------------
Backend implementations of the diary storage operation set.

- StorageEngine: abstract contract and shared implementation
- SQLiteEngine: embedded file database
- PostgresEngine: client-server database
"""
from .base import StorageEngine
from .postgres import PostgresEngine
from .sqlite import SQLiteEngine

__all__ = ["StorageEngine", "SQLiteEngine", "PostgresEngine"]
