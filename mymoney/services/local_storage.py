"""
Local Storage Service.

Read/write access to the ``local_storage`` key-value table in the local
SQLite database.  Holds small client-side state such as the persisted
navigation history; never domain data.

Unlike the repositories, failures never leave this module as exceptions:
reads report ``None`` and writes report ``False`` so a broken local file
cannot take the session down.

    CREATE TABLE IF NOT EXISTS local_storage (
        key        TEXT PRIMARY KEY,
        value      TEXT NOT NULL,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""

from __future__ import annotations

import sqlite3
from typing import Optional

from mymoney.database import DatabaseManager
from mymoney.logger import StructuredLogger


class LocalStorageService:
    """Persistent string key/value storage in local SQLite.

    Parameters
    ----------
    db:
        Initialised ``DatabaseManager`` with an active SQLite connection
        and schema applied.
    logger:
        Structured logger instance.
    """

    def __init__(self, db: DatabaseManager, logger: StructuredLogger) -> None:
        self._db = db
        self._logger = logger

    def get(self, key: str) -> Optional[str]:
        """Read a value by key.  Returns ``None`` if not found."""
        try:
            row = self._db.sqlite.execute(
                "SELECT value FROM local_storage WHERE key = ?",
                (key,),
            ).fetchone()
            return row["value"] if row is not None else None
        except sqlite3.Error as exc:
            self._logger.warning("Failed to read local_storage[%s]: %s", key, exc)
            return None

    def set(self, key: str, value: str) -> bool:
        """Upsert a value.  Returns ``True`` on success."""
        try:
            self._db.sqlite.execute(
                """
                INSERT INTO local_storage (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value      = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (key, value),
            )
            self._db.sqlite.commit()
            self._logger.debug("local_storage[%s] updated.", key)
            return True
        except sqlite3.Error as exc:
            self._logger.error("Failed to write local_storage[%s]: %s", key, exc)
            return False

    def remove(self, key: str) -> bool:
        """Delete a key.  Removing a missing key succeeds."""
        try:
            self._db.sqlite.execute("DELETE FROM local_storage WHERE key = ?", (key,))
            self._db.sqlite.commit()
            return True
        except sqlite3.Error as exc:
            self._logger.error("Failed to remove local_storage[%s]: %s", key, exc)
            return False
