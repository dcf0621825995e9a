"""
LocalStorage - Async key/value device storage in ~/.bhashapath/storage.db.

Values are JSON strings keyed by name. Each call opens its own SQLite
connection; the async methods run that work in a worker thread so callers
on the event loop suspend at the storage boundary.
"""

import asyncio
import sqlite3
from pathlib import Path
from typing import Optional

from bhashapath.utils.config import DEFAULT_HOME


DEFAULT_STORAGE_PATH = DEFAULT_HOME / "storage.db"


class StorageError(Exception):
    """Raised when the storage file cannot be read or written."""


class LocalStorage:
    """
    Key/value store backed by a single SQLite table.

    Stands in for the device's local storage: string keys, string values,
    whole-value overwrites, no transactions across keys.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize storage.

        Args:
            db_path: Path to storage.db (default: ~/.bhashapath/storage.db)
        """
        self.db_path = db_path or DEFAULT_STORAGE_PATH
        self._ensure_database()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path))
        except (OSError, sqlite3.Error) as e:
            raise StorageError(f"Cannot open storage at {self.db_path}: {e}") from e

        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot initialize storage at {self.db_path}: {e}") from e
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        return sqlite3.connect(str(self.db_path))

    # -------------------------------------------------------------------------
    # Sync API
    # -------------------------------------------------------------------------

    def read(self, key: str) -> Optional[str]:
        """Get the stored value for a key, or None."""
        try:
            conn = self._get_connection()
            try:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (key,)
                ).fetchone()
                return row[0] if row else None
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read {key!r}: {e}") from e

    def write(self, key: str, value: str):
        """Overwrite the value stored under a key."""
        try:
            conn = self._get_connection()
            try:
                conn.execute(
                    """INSERT INTO kv_store (key, value) VALUES (?, ?)
                       ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
                    (key, value)
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to write {key!r}: {e}") from e

    def delete(self, key: str):
        """Remove a key. Missing keys are ignored."""
        try:
            conn = self._get_connection()
            try:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to delete {key!r}: {e}") from e

    def keys(self) -> list[str]:
        try:
            conn = self._get_connection()
            try:
                rows = conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
                return [row[0] for row in rows]
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to list keys: {e}") from e

    # -------------------------------------------------------------------------
    # Async API
    # -------------------------------------------------------------------------

    async def get_item(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self.read, key)

    async def set_item(self, key: str, value: str):
        await asyncio.to_thread(self.write, key, value)

    async def remove_item(self, key: str):
        await asyncio.to_thread(self.delete, key)
