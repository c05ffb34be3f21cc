# ABOUTME: The `novelnoted watch` command: follows the library live as other clients write to it.
# ABOUTME: Polls the database for foreign commits and prints a summary line on every snapshot.

import time
from pathlib import Path

import click

from novelnoted.cli.app import get_console, open_app
from novelnoted.cli.options import db_option
from novelnoted.core.derive import ALL, WISHLIST_TAB
from novelnoted.core.sync import LibraryView
from novelnoted.records.types import ReadingStatus


def summary_line(view: LibraryView) -> str:
    counts = view.tab_counts()
    return (
        f"{counts[ALL]} books | "
        f"{counts[ReadingStatus.CURRENTLY_READING.value]} reading | "
        f"{counts[ReadingStatus.READ.value]} read | "
        f"{counts[WISHLIST_TAB]} wishlist"
    )


@click.command("watch")
@click.option(
    "--interval",
    type=click.FloatRange(min=0.1),
    default=2.0,
    show_default=True,
    help="Seconds between checks for changes.",
)
@click.option("--once", is_flag=True, help="Print the current snapshot and exit.")
@db_option
def watch(interval: float, once: bool, db_path: Path | None) -> None:
    """Print a summary every time the library or wishlist changes. Ctrl-C stops."""
    console = get_console()
    with open_app(db_path) as app, LibraryView(app.records) as view:
        last = summary_line(view)
        console.print(last)
        if once:
            return

        def on_change(changed: LibraryView) -> None:
            nonlocal last
            line = summary_line(changed)
            if line != last:
                last = line
                console.print(line)

        view.on_change(on_change)
        try:
            while view.is_open and view.last_error is None:
                time.sleep(interval)
                app.store.refresh()
        except KeyboardInterrupt:
            pass

        if view.last_error is not None:
            console.print(f"[red]Live updates stopped: {view.last_error}[/red]")
            raise SystemExit(1)
