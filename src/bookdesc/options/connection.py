# ABOUTME: SQLite connection management for the bookdesc option database.
# ABOUTME: Opens or creates the database, applies schema and pending migrations.

import sqlite3
from pathlib import Path

from bookdesc.options.schema import MIGRATIONS, SCHEMA_V1

DEFAULT_OPTIONS_PATH = Path.home() / ".bookdesc" / "options.db"


class OptionStoreError(Exception):
    """Raised when the option database cannot be opened."""


def _schema_exists(conn: sqlite3.Connection) -> bool:
    """Check if the schema has already been applied."""
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_version'"
    )
    return cursor.fetchone() is not None


def _get_schema_version(conn: sqlite3.Connection) -> int:
    """Read the current schema version from the database."""
    cursor = conn.execute("SELECT version FROM schema_version ORDER BY version DESC LIMIT 1")
    row = cursor.fetchone()
    return row[0] if row else 0


def _apply_migrations(conn: sqlite3.Connection) -> None:
    """Apply migrations newer than the stored schema version, in order."""
    current = _get_schema_version(conn)
    for version, sql in MIGRATIONS:
        if version > current:
            conn.executescript(sql)


def open_options(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the bookdesc option database.

    Creates the database file and parent directories if they don't exist,
    applies the schema on first creation and any pending migrations.

    Args:
        path: Path to the database file. Defaults to ~/.bookdesc/options.db.

    Returns:
        A configured sqlite3.Connection usable from any thread.

    Raises:
        OptionStoreError: If the database cannot be opened.
    """
    db_path = path or DEFAULT_OPTIONS_PATH
    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(db_path), check_same_thread=False)
    except (OSError, sqlite3.Error) as exc:
        raise OptionStoreError(f"Cannot open option database {db_path}: {exc}") from exc

    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")

    if not _schema_exists(conn):
        conn.executescript(SCHEMA_V1)

    _apply_migrations(conn)

    return conn
