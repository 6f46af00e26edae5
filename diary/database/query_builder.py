#!/usr/bin/env python3
"""
query_builder.py
--------------------
SQL construction for the `entries` table.

Both storage engines issue the same logical statements; only the positional
placeholder and the case-insensitive match operator differ:

    Backend    Placeholder   Match
    sqlite     ?             LIKE    (case-insensitive for ASCII)
    postgres   %s            ILIKE

Statements are executed with ``Connection.exec_driver_sql`` so parameters
are passed straight to the DB-API driver in its native paramstyle.

Parameter order for paginated reads is fixed: pinned (if filtered), then the
substring pattern (if filtered), then LIMIT, then OFFSET. The substring is
wrapped in ``%`` wildcards and otherwise passed through untouched, so ``%``
and ``_`` typed by the user act as wildcards too.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

# --- Local imports ---
from diary.core.exceptions import ValidationError
from diary.core.validators import DataValidator
from .models import SortOrder


TABLE = "entries"
COLUMNS = "id, content, created_at, updated_at, pinned"

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10


@dataclass(frozen=True)
class Dialect:
    """Backend-specific SQL tokens."""

    name: str
    placeholder: str
    match_operator: str


SQLITE = Dialect(name="sqlite", placeholder="?", match_operator="LIKE")
POSTGRES = Dialect(name="postgresql", placeholder="%s", match_operator="ILIKE")


@dataclass(frozen=True)
class Query:
    """SQL text plus its positional parameters, in binding order."""

    sql: str
    params: Tuple[Any, ...] = ()


class QueryBuilder:
    """
    Builds parameterized statements for one dialect.

    Usage:
        builder = QueryBuilder(SQLITE)
        query = builder.select_page(page=2, per_page=5, pinned=True)
        conn.exec_driver_sql(query.sql, query.params)
    """

    def __init__(self, dialect: Dialect) -> None:
        self.dialect = dialect

    @property
    def ph(self) -> str:
        return self.dialect.placeholder

    def insert(self, content: str, pinned: bool) -> Query:
        return Query(
            f"INSERT INTO {TABLE} (content, pinned) VALUES ({self.ph}, {self.ph}) "
            f"RETURNING {COLUMNS}",
            (content, pinned),
        )

    def select_one(self, entry_id: int) -> Query:
        return Query(
            f"SELECT {COLUMNS} FROM {TABLE} WHERE id = {self.ph}",
            (entry_id,),
        )

    def exists(self, entry_id: int) -> Query:
        return Query(f"SELECT 1 FROM {TABLE} WHERE id = {self.ph}", (entry_id,))

    def select_page(
        self,
        page: int = DEFAULT_PAGE,
        per_page: int = DEFAULT_PER_PAGE,
        sort: Union[SortOrder, str, None] = None,
        pinned: Optional[bool] = None,
        substring: Optional[str] = None,
    ) -> Query:
        """
        Build a filtered, sorted, paginated SELECT.

        Args:
            page: 1-based page number
            per_page: Rows per page
            sort: Direction for (created_at, id); defaults to descending
            pinned: Restrict to rows with this pinned value
            substring: Restrict to rows whose content contains this text

        Returns:
            Query ready for exec_driver_sql

        Raises:
            ValidationError: If page or per_page is lower than 1
        """
        DataValidator.validate_page(page, per_page)
        order = SortOrder.parse(sort).sql

        conditions: List[str] = []
        params: List[Any] = []

        if pinned is not None:
            conditions.append(f"pinned = {self.ph}")
            params.append(pinned)

        if substring is not None:
            conditions.append(f"content {self.dialect.match_operator} {self.ph}")
            params.append(f"%{substring}%")

        sql = f"SELECT {COLUMNS} FROM {TABLE}"
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)

        sql += (
            f" ORDER BY created_at {order}, id {order}"
            f" LIMIT {self.ph} OFFSET {self.ph}"
        )
        params.extend([per_page, (page - 1) * per_page])

        return Query(sql, tuple(params))

    def update(
        self,
        entry_id: int,
        content: Optional[str] = None,
        pinned: Optional[bool] = None,
    ) -> Query:
        """
        Build an UPDATE touching only the supplied fields.

        No RETURNING clause: SQLite's RETURNING does not see changes made by
        AFTER triggers, so engines re-read the row to pick up updated_at.

        Raises:
            ValidationError: If neither content nor pinned is supplied,
                or content is blank
        """
        if content is None and pinned is None:
            raise ValidationError("At least one field must be provided for update")

        assignments: List[str] = []
        params: List[Any] = []

        if content is not None:
            assignments.append(f"content = {self.ph}")
            params.append(DataValidator.validate_content(content))

        if pinned is not None:
            assignments.append(f"pinned = {self.ph}")
            params.append(pinned)

        params.append(entry_id)
        return Query(
            f"UPDATE {TABLE} SET {', '.join(assignments)} WHERE id = {self.ph}",
            tuple(params),
        )

    def delete(self, entry_id: int) -> Query:
        return Query(f"DELETE FROM {TABLE} WHERE id = {self.ph}", (entry_id,))
