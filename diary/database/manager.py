#!/usr/bin/env python3
"""
manager.py
--------------------
Storage facade for the diary.

Provides the DiaryDB class, the single entry point callers use. It reads the
scheme of the connection URL once, builds the matching StorageEngine, and
forwards every operation to it.

URL dispatch:
    sqlite:...                 -> SQLiteEngine
    postgres:// / postgresql:// -> PostgresEngine
    anything else              -> ConfigurationError

Usage:
    with DiaryDB("sqlite://diary.db") as db:
        entry = db.create("Went hiking", pinned=True)
        page = db.read_many(page=1, per_page=5, substring="hik")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Dict, List, Optional, Type, Union

# --- Local imports ---
from diary.core.exceptions import ConfigurationError
from diary.core.logging_manager import DiaryLogger, safe_logger
from .engines import PostgresEngine, SQLiteEngine, StorageEngine
from .models import Entry, SortOrder
from .query_builder import DEFAULT_PAGE, DEFAULT_PER_PAGE


ENGINES: Dict[str, Type[StorageEngine]] = {
    "sqlite": SQLiteEngine,
    "postgres": PostgresEngine,
    "postgresql": PostgresEngine,
}


def url_scheme(url: str) -> str:
    """Return the lower-cased scheme of a URL, without any '+driver' suffix."""
    scheme, sep, _ = url.partition(":")
    if not sep or not scheme:
        raise ConfigurationError(f"Unsupported database URL: {url}")
    return scheme.split("+", 1)[0].lower()


def engine_for_url(url: str) -> Type[StorageEngine]:
    """
    Pick the engine class for a connection URL.

    Raises:
        ConfigurationError: If the scheme is not supported
    """
    engine_cls = ENGINES.get(url_scheme(url))
    if engine_cls is None:
        raise ConfigurationError(f"Unsupported database URL: {url}")
    return engine_cls


# ----- Storage Facade -----
class DiaryDB:
    """
    Backend-agnostic diary store.

    Attributes:
        url: Connection URL
        logger: Optional DiaryLogger shared with the engine
        db: The StorageEngine chosen for the URL scheme
    """

    def __init__(self, url: str, logger: Optional[DiaryLogger] = None) -> None:
        """
        Select and construct the storage engine.

        Args:
            url: Backend connection URL
            logger: Optional logger

        Raises:
            ConfigurationError: Unsupported or malformed URL
            DatabaseError: Database could not be created or reached
        """
        self.url = url
        self.logger = logger
        engine_cls = engine_for_url(url)
        safe_logger(logger).log_debug(
            "Selected storage engine", {"engine": engine_cls.__name__}
        )
        self.db: StorageEngine = engine_cls(url, logger=logger)

    # ---- Entry operations ----
    def create(self, content: str, pinned: bool = False) -> Entry:
        return self.db.create(content, pinned)

    def read_one(self, entry_id: int) -> Entry:
        return self.db.read_one(entry_id)

    def read_many(
        self,
        page: int = DEFAULT_PAGE,
        per_page: int = DEFAULT_PER_PAGE,
        sort: Union[SortOrder, str, None] = None,
        pinned: Optional[bool] = None,
        substring: Optional[str] = None,
    ) -> List[Entry]:
        return self.db.read_many(
            page=page,
            per_page=per_page,
            sort=sort,
            pinned=pinned,
            substring=substring,
        )

    def exists(self, entry_id: int) -> bool:
        return self.db.exists(entry_id)

    def update(
        self,
        entry_id: int,
        content: Optional[str] = None,
        pinned: Optional[bool] = None,
    ) -> Entry:
        return self.db.update(entry_id, content=content, pinned=pinned)

    def delete(self, entry_id: int) -> None:
        self.db.delete(entry_id)

    def close(self) -> None:
        """Release pooled connections. Call exactly once."""
        self.db.close()

    # ----- Context Manager Support -----
    def __enter__(self) -> "DiaryDB":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        del exc_type, exc_val, exc_tb
        self.close()
