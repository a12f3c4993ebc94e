"""
Key-value repository backed by the kv_store table.
"""

from typing import Optional

from database import init_database
from .base import BaseRepository


class KeyValueRepository(BaseRepository):
    """
    Persistent get/set store for small string values.
    """

    def __init__(self, db_path: Optional[str] = None, create_schema: bool = True):
        super().__init__(db_path)
        if create_schema:
            init_database(db_path)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get the value stored under `key`.

        Returns:
            The stored string, or `default` if the key is missing
        """
        with self.read_connection() as (conn, cursor):
            cursor.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cursor.fetchone()
            if row is None:
                return default
            return row['value']

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite the value stored under `key`."""
        with self.connection() as (conn, cursor):
            cursor.execute("""
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
            """, (key, value))

    def delete(self, key: str) -> bool:
        """Remove `key`. Returns True if a row was deleted."""
        with self.connection() as (conn, cursor):
            cursor.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            return cursor.rowcount > 0
