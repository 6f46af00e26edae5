#!/usr/bin/env python3
"""
export_manager.py
-----------------
Bulk dump of every diary entry.

Entries are streamed from the store page by page through the regular
read_many operation, so dumps work identically on every backend and
never hold more than one batch of rows per query.

Formats:
    - text: the same rendering used by `diary read -i`, blank-line separated
    - json: {"export_timestamp", "total_entries", "entries": [...]}

Files are written to a temporary sibling and moved into place, so an
interrupted dump never leaves a truncated file behind.

Usage:
    exporter = ExportManager(logger)
    with DiaryDB(url) as db:
        stats = exporter.export_to_file(db, Path("dump.json"), fmt="json")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Union

# --- Local imports ---
from diary.core.exceptions import ExportError, ValidationError
from diary.core.logging_manager import DiaryLogger, safe_logger
from .models import Entry, SortOrder

if TYPE_CHECKING:
    from .manager import DiaryDB


FORMATS = ("text", "json")
DEFAULT_BATCH_SIZE = 100


class ExportManager:
    """
    Dumps all entries to text or JSON.

    Attributes:
        logger: Optional DiaryLogger
        batch_size: Rows fetched per read_many call
    """

    def __init__(
        self,
        logger: Optional[DiaryLogger] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        self.logger = logger
        self.batch_size = batch_size

    def iter_entries(
        self, db: DiaryDB, sort: Union[SortOrder, str, None] = SortOrder.ASC
    ) -> Iterator[Entry]:
        """Yield every entry, fetching one page at a time."""
        page = 1
        while True:
            batch = db.read_many(page=page, per_page=self.batch_size, sort=sort)
            yield from batch
            if len(batch) < self.batch_size:
                return
            page += 1

    @staticmethod
    def render(entries: List[Entry], fmt: str = "text") -> str:
        """
        Serialize entries in the requested format.

        Raises:
            ValidationError: If the format is unknown
        """
        if fmt == "text":
            return "\n\n".join(entry.render() for entry in entries)
        if fmt == "json":
            payload = {
                "export_timestamp": datetime.now(timezone.utc).isoformat(),
                "total_entries": len(entries),
                "entries": [entry.to_dict() for entry in entries],
            }
            return json.dumps(payload, ensure_ascii=False, indent=2)
        raise ValidationError(f"Unknown dump format: {fmt} (expected one of {FORMATS})")

    def dump(
        self,
        db: DiaryDB,
        fmt: str = "text",
        sort: Union[SortOrder, str, None] = SortOrder.ASC,
    ) -> str:
        """Return all entries serialized as a single string."""
        return self.render(list(self.iter_entries(db, sort)), fmt)

    def export_to_file(
        self,
        db: DiaryDB,
        output_file: Union[str, Path],
        fmt: str = "text",
        sort: Union[SortOrder, str, None] = SortOrder.ASC,
    ) -> Dict[str, Any]:
        """
        Write all entries to a file.

        Args:
            db: Open diary store
            output_file: Destination path
            fmt: 'text' or 'json'
            sort: Ordering of the dump (default oldest first)

        Returns:
            Statistics: total_entries, output_path, format, duration

        Raises:
            ExportError: If the file cannot be written
        """
        start = datetime.now()
        output_file = Path(output_file).expanduser()

        entries = list(self.iter_entries(db, sort))
        content = self.render(entries, fmt)

        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=output_file.parent, prefix=f".{output_file.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(content)
                    f.write("\n")
                os.replace(tmp_name, output_file)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            safe_logger(self.logger).log_error(
                e, {"operation": "export_to_file", "output_file": str(output_file)}
            )
            raise ExportError(f"Cannot write dump to {output_file}: {e}") from e

        stats = {
            "total_entries": len(entries),
            "output_path": str(output_file),
            "format": fmt,
            "duration": (datetime.now() - start).total_seconds(),
        }
        safe_logger(self.logger).log_operation("export_complete", stats)
        return stats
