"""
Entry Commands
--------------

CRUD commands for diary entries.

Commands:
    - create: Add an entry
    - read: Show one entry (-i) or a page of entries
    - update: Change content and/or pinned flag
    - delete: Remove an entry

Usage:
    diary create -t "Went hiking" --pinned
    diary read --page 2 --per-page 5 --sort asc
    diary read --pinned true --substr hik
    diary update -i 3 --pinned false
    diary delete -i 3
"""
from typing import List

import click

from diary.core.logging_manager import handle_cli_error
from diary.database import Entry
from diary.database.query_builder import DEFAULT_PAGE, DEFAULT_PER_PAGE
from . import DIARY_ERRORS, get_db


def format_listing(entry: Entry) -> str:
    """Entry block prefixed with its id (and a pin marker)."""
    marker = " 📌" if entry.pinned else ""
    return f"[{entry.id}]{marker}\n{entry.render()}"


def print_entries(entries: List[Entry]) -> None:
    click.echo(f"\nFound {len(entries)} entries.\n")
    if entries:
        click.echo("\n\n".join(format_listing(entry) for entry in entries))


@click.command()
@click.option("-t", "--content", help="Entry text")
@click.option("-p", "--pinned", is_flag=True, help="Pin the new entry")
@click.pass_context
def create(ctx, content, pinned):
    """Create a new entry."""
    try:
        db = get_db(ctx)
        entry = db.create(content, pinned=pinned)
        click.echo(f"✅ New entry created (id: {entry.id}).")

    except DIARY_ERRORS as e:
        handle_cli_error(ctx, e, "create", additional_context={"pinned": pinned})


@click.command()
@click.option("-i", "--id", "entry_id", type=int, help="Show a single entry")
@click.option("--page", type=int, default=DEFAULT_PAGE, show_default=True)
@click.option("--per-page", type=int, default=DEFAULT_PER_PAGE, show_default=True)
@click.option(
    "--sort",
    type=click.Choice(["asc", "desc"], case_sensitive=False),
    default="desc",
    show_default=True,
    help="Order by creation time",
)
@click.option("--pinned", type=click.BOOL, default=None, help="Filter by pinned flag")
@click.option("--substr", default=None, help="Case-insensitive content filter")
@click.pass_context
def read(ctx, entry_id, page, per_page, sort, pinned, substr):
    """Read one entry by id, or a filtered page of entries."""
    try:
        db = get_db(ctx)

        if entry_id is not None:
            click.echo(db.read_one(entry_id).render())
            return

        entries = db.read_many(
            page=page,
            per_page=per_page,
            sort=sort,
            pinned=pinned,
            substring=substr,
        )
        print_entries(entries)

    except DIARY_ERRORS as e:
        handle_cli_error(
            ctx,
            e,
            "read",
            additional_context={"entry_id": entry_id, "page": page, "per_page": per_page},
        )


@click.command()
@click.option("-i", "--id", "entry_id", type=int, required=True, help="Entry to update")
@click.option("-t", "--content", default=None, help="New entry text")
@click.option("-p", "--pinned", type=click.BOOL, default=None, help="New pinned flag")
@click.pass_context
def update(ctx, entry_id, content, pinned):
    """Update an entry's content and/or pinned flag."""
    try:
        db = get_db(ctx)
        db.update(entry_id, content=content, pinned=pinned)
        click.echo(f"✅ Entry with id: {entry_id} updated.")

    except DIARY_ERRORS as e:
        handle_cli_error(ctx, e, "update", additional_context={"entry_id": entry_id})


@click.command()
@click.option("-i", "--id", "entry_id", type=int, required=True, help="Entry to delete")
@click.pass_context
def delete(ctx, entry_id):
    """Delete an entry permanently."""
    try:
        db = get_db(ctx)
        db.delete(entry_id)
        click.echo(f"🗑️  Entry with id: {entry_id} deleted.")

    except DIARY_ERRORS as e:
        handle_cli_error(ctx, e, "delete", additional_context={"entry_id": entry_id})
