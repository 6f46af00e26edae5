#!/usr/bin/env python3
"""
Diary CLI
---------

Command-line interface for the diary.

This module provides the main CLI group and the shared context setup
(configuration, logging, lazily opened database) for all commands.

Command Structure:
    - create: Add an entry
    - read: Show one entry or a filtered page of entries
    - update: Change content and/or pinned flag
    - delete: Remove an entry
    - dump: Write every entry to a file or stdout

Usage:
    diary --help
    diary -c ~/diary.ini read --pinned true --substr hike
"""
import click
from pathlib import Path

from diary.core.cli_utils import setup_logger
from diary.core.config import load_config
from diary.core.exceptions import (
    ConfigurationError,
    DatabaseError,
    EntryNotFoundError,
    ValidationError,
)
from diary.core.paths import CONFIG_PATH, LOG_DIR
from diary.database import DiaryDB


# Every failure a command reports through handle_cli_error
DIARY_ERRORS = (ConfigurationError, DatabaseError, EntryNotFoundError, ValidationError)


@click.group()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=str(CONFIG_PATH),
    help="Path to INI config file with a [Database] url",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False),
    default=str(LOG_DIR),
    help="Path to log directory",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, config_path, log_dir, verbose):
    """Personal diary: create, read, update and delete entries."""
    ctx.ensure_object(dict)
    logger = setup_logger(Path(log_dir), "diary")
    ctx.call_on_close(logger.close)

    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = logger
    ctx.obj["config"] = load_config(config_path, logger=logger)


def get_db(ctx: click.Context) -> DiaryDB:
    """Get or open the database for this invocation; closed with the context."""
    if "db" not in ctx.obj:
        db = DiaryDB(ctx.obj["config"].db_url, logger=ctx.obj.get("logger"))
        ctx.obj["db"] = db
        ctx.call_on_close(db.close)
    return ctx.obj["db"]


# Import and register command modules
# These imports must come after CLI group definition
from .entries import create, read, update, delete  # noqa: E402
from .dump import dump  # noqa: E402

cli.add_command(create)
cli.add_command(read)
cli.add_command(update)
cli.add_command(delete)
cli.add_command(dump)


if __name__ == "__main__":
    cli(obj={})
