#!/usr/bin/env python3
"""
validators.py
--------------------
Argument validation and normalization shared by the storage engines.

All checks run before any SQL is issued and raise ValidationError.
"""
from __future__ import annotations

from typing import Any, Optional

from .exceptions import ValidationError


class DataValidator:
    """Centralized argument validation for storage operations."""

    @staticmethod
    def validate_content(content: Any) -> str:
        """
        Validate an entry body.

        Args:
            content: Candidate entry content

        Returns:
            The content unchanged

        Raises:
            ValidationError: If content is not a string or is blank
        """
        if not isinstance(content, str) or not content.strip():
            raise ValidationError("Content must be provided and non-empty")
        return content

    @staticmethod
    def validate_page(page: int, per_page: int) -> None:
        """
        Validate pagination arguments.

        Raises:
            ValidationError: If either value is lower than 1
        """
        if page < 1 or per_page < 1:
            raise ValidationError(
                f"Page and per_page must be positive (got page={page}, per_page={per_page})"
            )

    @staticmethod
    def normalize_bool(value: Any) -> Optional[bool]:
        """
        Convert a driver BOOLEAN value to bool.

        SQLite hands back BOOLEAN columns as 0/1 integers; Postgres as bool.

        Raises:
            ValidationError: For any other value
        """
        if value is None or isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        raise ValidationError(f"Cannot convert '{value}' to boolean")
