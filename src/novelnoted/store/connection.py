# ABOUTME: Opens the shared novelnoted SQLite file and brings its schema up to date.
# ABOUTME: Every client process goes through open_database() before touching documents.

import sqlite3
from pathlib import Path

from novelnoted.store.schema import MIGRATIONS, SCHEMA_V1

DEFAULT_DB_PATH = Path.home() / ".novelnoted" / "library.db"

_PRAGMAS = ("journal_mode=WAL", "foreign_keys=ON")


def _get_schema_version(conn: sqlite3.Connection) -> int:
    """Highest recorded schema version, or 0 for a blank file."""
    has_table = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'schema_version'"
    ).fetchone()
    if has_table is None:
        return 0
    (version,) = conn.execute("SELECT COALESCE(MAX(version), 0) FROM schema_version").fetchone()
    return version


def _apply_migrations(conn: sqlite3.Connection) -> None:
    """Run every migration newer than the recorded version, oldest first."""
    current = _get_schema_version(conn)
    for version, script in sorted(MIGRATIONS):
        if version > current:
            conn.executescript(script)


def open_database(path: Path | None = None) -> sqlite3.Connection:
    """Connect to the library database, creating it on first use.

    WAL mode lets several clients share the file. Rows come back as
    sqlite3.Row so document columns can be read by name.
    """
    target = path or DEFAULT_DB_PATH
    target.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(target))
    conn.row_factory = sqlite3.Row
    for pragma in _PRAGMAS:
        conn.execute(f"PRAGMA {pragma}")

    if _get_schema_version(conn) == 0:
        conn.executescript(SCHEMA_V1)
    _apply_migrations(conn)
    return conn
