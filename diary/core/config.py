#!/usr/bin/env python3
"""
config.py
--------------------
INI configuration loading for the diary CLI.

The configuration file holds a single setting, the database connection URL:

    [Database]
    url = sqlite://diary.db

Startup is a two-step sequence: try the file, and when it is missing or
malformed fall back to DEFAULT_DB_URL. The storage layer only ever sees
the resulting URL string.

Usage:
    from diary.core.config import load_config

    config = load_config(Path("config.ini"), logger=logger)
    db = DiaryDB(config.db_url)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import configparser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

# --- Local imports ---
from diary.core.exceptions import ConfigurationError
from diary.core.logging_manager import DiaryLogger, safe_logger
from diary.core.paths import DEFAULT_DB_URL


DATABASE_SECTION = "Database"
URL_KEY = "url"


@dataclass(frozen=True)
class Config:
    """
    Resolved runtime configuration.

    Attributes:
        db_url: Backend connection string (e.g. sqlite://diary.db)
        source: File the URL was read from, or None when defaulted
    """

    db_url: str
    source: Optional[Path] = None

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> Config:
        """
        Read the database URL from an INI file.

        Args:
            path: Path to the INI file

        Returns:
            Config with the URL from the [Database] section

        Raises:
            ConfigurationError: If the file is missing, unparsable,
                or lacks the section or key
        """
        path = Path(path).expanduser()
        if not path.is_file():
            raise ConfigurationError(f"Config file not found: {path}")

        parser = configparser.ConfigParser()
        try:
            parser.read(path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigurationError(f"Cannot parse config file {path}: {e}")

        if not parser.has_section(DATABASE_SECTION):
            raise ConfigurationError(f"{DATABASE_SECTION} section not found in {path}")

        db_url = parser.get(DATABASE_SECTION, URL_KEY, fallback="").strip()
        if not db_url:
            raise ConfigurationError(f"Database URL not found in {path}")

        return cls(db_url=db_url, source=path)

    @classmethod
    def default(cls) -> Config:
        """Configuration used when no usable file is available."""
        return cls(db_url=DEFAULT_DB_URL)


def load_config(
    path: Union[str, Path], logger: Optional[DiaryLogger] = None
) -> Config:
    """
    Load configuration, falling back to the default URL on any config error.

    Args:
        path: Path to the INI file
        logger: Optional logger; the fallback is reported as a warning

    Returns:
        Config from the file, or Config.default()
    """
    try:
        config = Config.from_file(path)
    except ConfigurationError as e:
        safe_logger(logger).log_warning(
            "Failed to load config file, using default",
            {"path": str(path), "error": str(e), "db_url": DEFAULT_DB_URL},
        )
        return Config.default()

    safe_logger(logger).log_debug("Config loaded", {"path": str(config.source)})
    return config
