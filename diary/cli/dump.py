"""
Dump Command
------------

Write every entry to a file, or to stdout when no output path is given.

Usage:
    diary dump
    diary dump -o backup.json --format json
"""
import click

from diary.core.logging_manager import handle_cli_error
from diary.database import ExportManager
from diary.database.export_manager import FORMATS
from . import DIARY_ERRORS, get_db


@click.command()
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write to this file instead of stdout",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(FORMATS),
    default="text",
    show_default=True,
)
@click.option(
    "--sort",
    type=click.Choice(["asc", "desc"], case_sensitive=False),
    default="asc",
    show_default=True,
)
@click.pass_context
def dump(ctx, output_file, fmt, sort):
    """Dump all entries."""
    try:
        db = get_db(ctx)
        exporter = ExportManager(ctx.obj.get("logger"))

        if output_file is None:
            click.echo(exporter.dump(db, fmt=fmt, sort=sort))
            return

        stats = exporter.export_to_file(db, output_file, fmt=fmt, sort=sort)
        click.echo(
            f"✅ Dumped {stats['total_entries']} entries to {stats['output_path']}"
        )

    except DIARY_ERRORS as e:
        handle_cli_error(
            ctx,
            e,
            "dump",
            additional_context={"output_file": output_file, "format": fmt},
        )
