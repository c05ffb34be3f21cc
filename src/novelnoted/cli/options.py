# ABOUTME: Shared Click options and parameter types for novelnoted CLI commands.
# ABOUTME: Provides reusable decorators for common flags like --db, --status and --isbn.

from pathlib import Path

import click

from novelnoted.config import ENV_DB
from novelnoted.metadata.isbn import is_valid_isbn, to_isbn13
from novelnoted.records.types import ReadingStatus
from novelnoted.store.connection import DEFAULT_DB_PATH

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    envvar=ENV_DB,
    help=f"Path to the novelnoted database (default: {DEFAULT_DB_PATH}).",
)

# want-to-read is only read from old records, never offered for new ones.
ACTIVE_STATUSES = [ReadingStatus.CURRENTLY_READING.value, ReadingStatus.READ.value]

status_choice = click.Choice(ACTIVE_STATUSES)
filter_choice = click.Choice(["all", *(s.value for s in ReadingStatus)])


def _normalize_isbn(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if not value:
        return None
    if not is_valid_isbn(value):
        raise click.BadParameter(f"{value!r} is not a valid ISBN-10 or ISBN-13.")
    return to_isbn13(value)


isbn_option = click.option(
    "--isbn",
    default=None,
    callback=_normalize_isbn,
    help="ISBN-10 or ISBN-13, stored as ISBN-13.",
)
