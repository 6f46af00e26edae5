"""Tests for ExportManager dumps."""
import json
from unittest.mock import MagicMock, patch

import pytest

from diary.core.exceptions import ExportError, ValidationError
from diary.database.export_manager import ExportManager


@pytest.fixture
def export_manager():
    return ExportManager(batch_size=2)


class TestIterEntries:
    """Paging through the whole store."""

    def test_fetches_all_pages(self, populated_db, export_manager):
        contents = [e.content for e in export_manager.iter_entries(populated_db)]
        assert contents == ["First entry", "Second entry", "Third pinned entry"]

    def test_descending(self, populated_db, export_manager):
        entries = list(export_manager.iter_entries(populated_db, sort="desc"))
        assert entries[0].content == "Third pinned entry"

    def test_empty_store(self, test_db, export_manager):
        assert list(export_manager.iter_entries(test_db)) == []

    def test_stops_on_short_page(self, export_manager):
        db = MagicMock()
        db.read_many.side_effect = [["a", "b"], ["c"]]

        assert list(export_manager.iter_entries(db)) == ["a", "b", "c"]
        assert db.read_many.call_count == 2


class TestRender:
    """Serialization formats."""

    def test_json_payload(self, populated_db, export_manager):
        payload = json.loads(export_manager.dump(populated_db, fmt="json"))

        assert payload["total_entries"] == 3
        assert "export_timestamp" in payload
        first = payload["entries"][0]
        assert first["content"] == "First entry"
        assert first["pinned"] is True
        assert first["updated_at"] is None
        assert set(first) == {"id", "content", "created_at", "updated_at", "pinned"}

    def test_text_blocks(self, populated_db, export_manager):
        text = export_manager.dump(populated_db, fmt="text")

        blocks = text.split("\n\n")
        assert len(blocks) == 3
        assert "Second entry" in blocks[1]

    def test_unknown_format(self):
        with pytest.raises(ValidationError, match="Unknown dump format"):
            ExportManager.render([], "xml")


class TestExportToFile:
    """Writing dumps to disk."""

    def test_writes_file_and_returns_stats(self, populated_db, tmp_dir):
        output = tmp_dir / "out" / "dump.json"

        stats = ExportManager().export_to_file(populated_db, output, fmt="json")

        assert output.exists()
        assert json.loads(output.read_text(encoding="utf-8"))["total_entries"] == 3
        assert stats["total_entries"] == 3
        assert stats["format"] == "json"
        assert stats["output_path"] == str(output)

    def test_no_temp_files_left(self, populated_db, tmp_dir):
        ExportManager().export_to_file(populated_db, tmp_dir / "dump.txt")
        assert [p.name for p in tmp_dir.iterdir() if p.name != "diary.db"] == ["dump.txt"]

    def test_write_failure_becomes_export_error(self, populated_db, tmp_dir):
        mock_logger = MagicMock()
        manager = ExportManager(logger=mock_logger)

        with patch("diary.database.export_manager.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(ExportError, match="disk full"):
                manager.export_to_file(populated_db, tmp_dir / "dump.txt")

        mock_logger.log_error.assert_called_once()
        assert not (tmp_dir / "dump.txt").exists()
