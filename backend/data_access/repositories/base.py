"""
Connection handling shared by the SQLite repositories.
"""

from contextlib import contextmanager
from typing import Generator, Any, Optional

from database import get_connection


class BaseRepository:
    """
    Opens one short-lived SQLite connection per operation.

    Happy Snake writes a handful of tiny values (settings, high score), so
    there is no pooling: each call connects, runs, and closes.
    """

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path

    @contextmanager
    def connection(self, auto_commit: bool = True) -> Generator[Any, None, None]:
        """
        Yield (conn, cursor) for a write.

        Commits when the block exits cleanly and auto_commit is set, rolls
        back if it raises. The connection is closed either way.
        """
        conn = get_connection(self.db_path)
        cursor = conn.cursor()
        try:
            yield conn, cursor
            if auto_commit:
                conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    @contextmanager
    def read_connection(self) -> Generator[Any, None, None]:
        """Yield (conn, cursor) for a lookup; nothing is committed."""
        conn = get_connection(self.db_path)
        cursor = conn.cursor()
        try:
            yield conn, cursor
        finally:
            cursor.close()
            conn.close()
