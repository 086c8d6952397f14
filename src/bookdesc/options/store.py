# ABOUTME: Key/value option storage scoped by category, scope, and option name.
# ABOUTME: Wraps the SQLite option database with thread-safe reads and writes.

import sqlite3
import threading


class OptionStore:
    """Wraps a sqlite3 connection and provides raw text access to the options table.

    Values are stored as text; typed interpretation is left to the option
    handles in bookdesc.options.typed.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._lock = threading.Lock()

    def get(self, category: str, scope: str, name: str) -> str | None:
        """Return the stored value, or None when the option is unset."""
        with self._lock:
            cursor = self._conn.execute(
                "SELECT value FROM options WHERE category = ? AND scope = ? AND name = ?",
                (category, scope, name),
            )
            row = cursor.fetchone()
        return row[0] if row else None

    def set(self, category: str, scope: str, name: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        with self._lock:
            self._conn.execute(
                "INSERT INTO options (category, scope, name, value, date_modified) "
                "VALUES (?, ?, ?, ?, strftime('%Y-%m-%dT%H:%M:%S', 'now')) "
                "ON CONFLICT (category, scope, name) DO UPDATE SET "
                "value = excluded.value, date_modified = excluded.date_modified",
                (category, scope, name, value),
            )
            self._conn.commit()

    def unset(self, category: str, scope: str, name: str) -> None:
        """Remove a stored value. No-op if the option is unset."""
        with self._lock:
            self._conn.execute(
                "DELETE FROM options WHERE category = ? AND scope = ? AND name = ?",
                (category, scope, name),
            )
            self._conn.commit()

    def names(self, category: str, scope: str) -> list[str]:
        """List the option names stored under a scope, alphabetically sorted."""
        with self._lock:
            cursor = self._conn.execute(
                "SELECT name FROM options WHERE category = ? AND scope = ? ORDER BY name",
                (category, scope),
            )
            return [row[0] for row in cursor.fetchall()]

    def remove_scope(self, category: str, scope: str) -> int:
        """Delete every option stored under a scope.

        Returns:
            The number of options removed.
        """
        with self._lock:
            cursor = self._conn.execute(
                "DELETE FROM options WHERE category = ? AND scope = ?",
                (category, scope),
            )
            self._conn.commit()
        return cursor.rowcount

    def close(self) -> None:
        """Close the underlying connection."""
        with self._lock:
            self._conn.close()
