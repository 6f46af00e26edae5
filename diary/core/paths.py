#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants and defaults for the diary tool.

Per-user state (logs) lives in the platform application directory reported
by click, so the tool behaves the same whether run from a checkout or an
installed wheel. The configuration file and the default SQLite database are
looked up relative to the current working directory.

    <app dir>/
    └── logs/          # Rotating operation and error logs
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path

# --- Third party imports ---
import click


APP_NAME = "diary"

# ---- User state ----
APP_DIR: Path = Path(click.get_app_dir(APP_NAME))
LOG_DIR = APP_DIR / "logs"

# ---- Configuration ----
CONFIG_PATH = Path("config.ini")
DEFAULT_DB_URL = "sqlite://diary.db"
