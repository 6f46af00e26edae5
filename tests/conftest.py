"""
conftest.py
-----------
Shared pytest fixtures for diary tests.

Provides fixtures for:
- Temporary directories and SQLite URLs
- Open DiaryDB instances (torn down after each test)
- Sample entry data
"""
import pytest
from pathlib import Path
from tempfile import TemporaryDirectory


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_db_path(tmp_dir):
    """Path for a not-yet-existing SQLite database."""
    return tmp_dir / "diary.db"


@pytest.fixture
def sqlite_url(test_db_path):
    """sqlite URL pointing at test_db_path (absolute)."""
    return f"sqlite://{test_db_path}"


# ----- Sample Data -----

@pytest.fixture
def scenario_entries():
    """(content, pinned) pairs used by the filtering scenario."""
    return [
        ("First entry", True),
        ("Second entry", False),
        ("Third pinned entry", True),
    ]


# ----- Database Fixtures -----

@pytest.fixture
def test_db(sqlite_url):
    """
    Open DiaryDB on a fresh SQLite file.

    The database is closed after the test.
    """
    from diary.database.manager import DiaryDB

    db = DiaryDB(sqlite_url)
    yield db
    db.close()


@pytest.fixture
def populated_db(test_db, scenario_entries):
    """DiaryDB holding the three scenario entries."""
    for content, pinned in scenario_entries:
        test_db.create(content, pinned=pinned)
    return test_db
