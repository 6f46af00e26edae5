"""Tests for dialect-aware SQL construction."""
import pytest

from diary.core.exceptions import ValidationError
from diary.database.models import SortOrder
from diary.database.query_builder import (
    COLUMNS,
    POSTGRES,
    SQLITE,
    QueryBuilder,
)


@pytest.fixture
def sqlite_builder():
    return QueryBuilder(SQLITE)


@pytest.fixture
def pg_builder():
    return QueryBuilder(POSTGRES)


class TestSelectPage:
    """Tests for paginated SELECT construction."""

    def test_defaults_no_filters(self, sqlite_builder):
        """No filters: no WHERE, descending order, limit 10 offset 0."""
        query = sqlite_builder.select_page()

        assert query.sql == (
            f"SELECT {COLUMNS} FROM entries"
            " ORDER BY created_at DESC, id DESC LIMIT ? OFFSET ?"
        )
        assert query.params == (10, 0)

    def test_offset_from_page(self, sqlite_builder):
        """Offset is (page - 1) * per_page."""
        query = sqlite_builder.select_page(page=3, per_page=4)
        assert query.params == (4, 8)

    def test_ascending_applies_to_both_keys(self, sqlite_builder):
        query = sqlite_builder.select_page(sort=SortOrder.ASC)
        assert "ORDER BY created_at ASC, id ASC" in query.sql

    def test_sort_accepts_strings(self, sqlite_builder):
        query = sqlite_builder.select_page(sort="asc")
        assert "ORDER BY created_at ASC, id ASC" in query.sql

    def test_pinned_filter(self, sqlite_builder):
        query = sqlite_builder.select_page(pinned=False)

        assert " WHERE pinned = ? ORDER BY" in query.sql
        assert query.params == (False, 10, 0)

    def test_substring_filter_wraps_wildcards(self, sqlite_builder):
        query = sqlite_builder.select_page(substring="hike")

        assert " WHERE content LIKE ? ORDER BY" in query.sql
        assert query.params == ("%hike%", 10, 0)

    def test_filters_combined_in_fixed_order(self, sqlite_builder):
        """Pinned binds before pattern, both before LIMIT/OFFSET."""
        query = sqlite_builder.select_page(
            page=2, per_page=5, pinned=True, substring="X"
        )

        assert " WHERE pinned = ? AND content LIKE ? ORDER BY" in query.sql
        assert query.params == (True, "%X%", 5, 5)

    def test_substring_not_escaped(self, sqlite_builder):
        """Pattern characters typed by the user pass through untouched."""
        query = sqlite_builder.select_page(substring="50%_off")
        assert query.params[0] == "%50%_off%"

    def test_empty_substring_still_filters(self, sqlite_builder):
        """An empty string is a filter matching everything, not an absent one."""
        query = sqlite_builder.select_page(substring="")
        assert "WHERE content LIKE ?" in query.sql
        assert query.params == ("%%", 10, 0)

    def test_postgres_placeholders_and_ilike(self, pg_builder):
        query = pg_builder.select_page(pinned=True, substring="x")

        assert " WHERE pinned = %s AND content ILIKE %s" in query.sql
        assert query.sql.endswith("LIMIT %s OFFSET %s")
        assert query.params == (True, "%x%", 10, 0)

    @pytest.mark.parametrize("page,per_page", [(0, 10), (1, 0), (-1, 5), (2, -3)])
    def test_rejects_non_positive_paging(self, sqlite_builder, page, per_page):
        with pytest.raises(ValidationError):
            sqlite_builder.select_page(page=page, per_page=per_page)

    def test_rejects_unknown_sort(self, sqlite_builder):
        with pytest.raises(ValidationError, match="Unknown sort order"):
            sqlite_builder.select_page(sort="sideways")


class TestUpdate:
    """Tests for partial UPDATE construction."""

    def test_content_only(self, sqlite_builder):
        query = sqlite_builder.update(7, content="new")

        assert query.sql == "UPDATE entries SET content = ? WHERE id = ?"
        assert query.params == ("new", 7)

    def test_pinned_only(self, pg_builder):
        query = pg_builder.update(7, pinned=False)

        assert query.sql == "UPDATE entries SET pinned = %s WHERE id = %s"
        assert query.params == (False, 7)

    def test_both_fields(self, sqlite_builder):
        query = sqlite_builder.update(2, content="c", pinned=True)

        assert "SET content = ?, pinned = ? WHERE id = ?" in query.sql
        assert query.params == ("c", True, 2)

    def test_no_fields_rejected(self, sqlite_builder):
        with pytest.raises(ValidationError, match="At least one field"):
            sqlite_builder.update(1)

    def test_blank_content_rejected(self, sqlite_builder):
        with pytest.raises(ValidationError):
            sqlite_builder.update(1, content="   ")


class TestSimpleStatements:
    """Tests for single-row statements."""

    def test_insert_returns_all_columns(self, sqlite_builder):
        query = sqlite_builder.insert("hello", True)

        assert query.sql.startswith("INSERT INTO entries (content, pinned) VALUES (?, ?)")
        assert query.sql.endswith(f"RETURNING {COLUMNS}")
        assert query.params == ("hello", True)

    def test_select_one(self, pg_builder):
        query = pg_builder.select_one(5)
        assert query.sql == f"SELECT {COLUMNS} FROM entries WHERE id = %s"
        assert query.params == (5,)

    def test_exists_selects_constant(self, sqlite_builder):
        query = sqlite_builder.exists(5)
        assert query.sql == "SELECT 1 FROM entries WHERE id = ?"

    def test_delete(self, sqlite_builder):
        query = sqlite_builder.delete(9)
        assert query.sql == "DELETE FROM entries WHERE id = ?"
        assert query.params == (9,)
