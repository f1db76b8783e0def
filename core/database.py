import logging
import sqlite3
from typing import Optional

import config

logger = logging.getLogger(__name__)


def init_db() -> None:
    """
    Initializes the SQLite database.
    Creates the key/value storage table if it does not exist.
    """
    if not config.DB_FILE:
        logger.warning("Database path not found in config.")
        return

    with sqlite3.connect(config.DB_FILE) as conn:
        c = conn.cursor()
        c.execute("""
            CREATE TABLE IF NOT EXISTS storage (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)
        conn.commit()


def get_value(key: str) -> Optional[str]:
    """
    Reads one stored value.

    Returns:
        str: The stored text, or None if the key was never written.
    """
    with sqlite3.connect(config.DB_FILE) as conn:
        c = conn.cursor()
        c.execute("SELECT value FROM storage WHERE key=?", (key,))
        row = c.fetchone()
    return row[0] if row else None


def set_value(key: str, value: str) -> None:
    """Writes (or overwrites) one stored value."""
    with sqlite3.connect(config.DB_FILE) as conn:
        c = conn.cursor()
        c.execute(
            "INSERT INTO storage (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, value),
        )
        conn.commit()


def delete_value(key: str) -> None:
    with sqlite3.connect(config.DB_FILE) as conn:
        conn.execute("DELETE FROM storage WHERE key=?", (key,))
        conn.commit()
