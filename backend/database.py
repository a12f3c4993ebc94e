"""
Database configuration and schema management for Happy Snake.

This module provides SQLite connection management with environment-aware
path selection and schema initialization. The only table is a small
key-value store holding the saved settings blob and the high score.
"""

import logging
import os
import sqlite3
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def get_database_path() -> str:
    """
    Determine the database path.

    Returns:
        Path to the SQLite database file.
        - SNAKE_DB_PATH if set
        - otherwise backend/happysnake.db
    """
    db_path = os.getenv('SNAKE_DB_PATH')
    if db_path:
        parent = os.path.dirname(db_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        return db_path

    backend_dir = Path(__file__).parent
    return str(backend_dir / 'happysnake.db')


def get_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """
    Get a database connection with appropriate settings.

    Returns:
        sqlite3.Connection: Database connection with row factory enabled.
    """
    conn = sqlite3.connect(db_path or get_database_path())
    conn.row_factory = sqlite3.Row  # Enable column access by name
    return conn


def init_database(db_path: Optional[str] = None) -> None:
    """
    Initialize the database schema.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    db_path = db_path or get_database_path()
    logger.info(f"Initializing database at: {db_path}")

    conn = get_connection(db_path)
    cursor = conn.cursor()

    try:
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        conn.commit()

    except Exception as e:
        conn.rollback()
        logger.error(f"Error initializing database: {e}")
        raise
    finally:
        conn.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()
    print(f"Database ready at: {get_database_path()}")
