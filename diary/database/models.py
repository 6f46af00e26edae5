#!/usr/bin/env python3
"""
models.py
--------------------
Value types returned by the storage engines.

Models:
    - SortOrder: Direction of the (created_at, id) compound ordering
    - Entry: One diary record as read back from the `entries` table

Entries are immutable snapshots; mutating the diary goes through the
engine's update operation, which returns a fresh Entry.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

# --- Local imports ---
from diary.core.exceptions import ValidationError
from diary.core.validators import DataValidator


SEPARATOR = "-" * 43


class SortOrder(str, Enum):
    """Sort direction applied to both created_at and id."""

    ASC = "asc"
    DESC = "desc"

    @property
    def sql(self) -> str:
        return self.value.upper()

    @classmethod
    def parse(cls, value: Union[str, "SortOrder", None]) -> "SortOrder":
        """
        Accept 'asc'/'desc' in any case; None means the default (DESC).

        Raises:
            ValidationError: If the value names no sort order
        """
        if value is None:
            return cls.DESC
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValidationError(f"Unknown sort order: {value}")


def to_utc(value: Any) -> Optional[datetime]:
    """
    Normalize a driver timestamp to an aware UTC datetime.

    SQLite returns the stored text (``YYYY-MM-DD HH:MM:SS.SSS``, always UTC);
    psycopg2 returns aware datetimes for TIMESTAMPTZ columns.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_long(moment: datetime) -> str:
    """Render a timestamp as e.g. 'Monday, January 15, 2024 3:07 PM' in local time."""
    local = moment.astimezone()
    hour = local.hour % 12 or 12
    return f"{local:%A, %B} {local.day}, {local.year} {hour}:{local:%M %p}"


@dataclass(frozen=True)
class Entry:
    """
    A single diary entry.

    Attributes:
        id: Backend-assigned identifier, never reused
        content: Entry body (non-empty)
        created_at: Insertion time, stamped by the database
        updated_at: Last change time, stamped by the update trigger; None until
            the first change
        pinned: Favourite flag
    """

    id: int
    content: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    pinned: bool = False

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Entry:
        """Build an Entry from a result row mapping (``Row._mapping``)."""
        return cls(
            id=int(row["id"]),
            content=row["content"],
            created_at=to_utc(row["created_at"]),
            updated_at=to_utc(row["updated_at"]),
            pinned=bool(DataValidator.normalize_bool(row["pinned"])),
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation with ISO-8601 timestamps."""
        return {
            "id": self.id,
            "content": self.content,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "pinned": self.pinned,
        }

    def render(self) -> str:
        """Human-readable block used by `read -i` and text dumps."""
        lines = [
            format_long(self.created_at),
            SEPARATOR,
            self.content,
            SEPARATOR,
        ]
        if self.updated_at is not None:
            lines.append(f"Updated at: {format_long(self.updated_at)}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()
