"""
Local SQLite Schema Initialization.

Defines the schema of the on-device database that backs the local
persistent storage boundary (navigation state and other small client
preferences) and provides a single entry-point -- :func:`initialize_schema`
-- that creates all required tables idempotently.  A single-row
``schema_version`` table records the version the tables were created at.

Domain data (budget items, categories, transactions) lives in Supabase
only; see ``supabase/schema.sql``.

Usage::

    import sqlite3
    from mymoney.logger import StructuredLogger
    from mymoney.schema import initialize_schema

    conn = sqlite3.connect("mymoney_local.db")
    initialize_schema(conn, StructuredLogger(name="mymoney.schema"))
"""

from __future__ import annotations

import sqlite3

from mymoney.logger import StructuredLogger

__all__ = ["CURRENT_SCHEMA_VERSION", "initialize_schema"]

CURRENT_SCHEMA_VERSION: int = 1

_TABLE_DEFINITIONS: list[str] = [
    # -- single-row version tracker -------------------------------------------
    """
    CREATE TABLE IF NOT EXISTS schema_version (
        id INTEGER PRIMARY KEY CHECK (id = 1),
        version INTEGER NOT NULL,
        applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    # -- key/value device storage ---------------------------------------------
    """
    CREATE TABLE IF NOT EXISTS local_storage (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
]


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _ensure_version_table(conn: sqlite3.Connection) -> None:
    """Create the ``schema_version`` table if it does not yet exist."""
    conn.execute(_TABLE_DEFINITIONS[0])
    conn.commit()


def _get_schema_version(conn: sqlite3.Connection) -> int:
    """Return the current schema version, or ``0`` if unset."""
    cursor: sqlite3.Cursor = conn.execute(
        "SELECT version FROM schema_version WHERE id = 1"
    )
    row: tuple[int] | None = cursor.fetchone()
    return row[0] if row is not None else 0


def _set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    """Upsert the single-row version tracker to *version*.

    Does **not** commit; the caller is responsible for transaction
    management so that version updates are atomic with schema changes.
    """
    conn.execute(
        """
        INSERT INTO schema_version (id, version) VALUES (1, ?)
        ON CONFLICT(id) DO UPDATE SET version = excluded.version,
                                      applied_at = CURRENT_TIMESTAMP
        """,
        (version,),
    )


def _create_all_tables(conn: sqlite3.Connection, logger: StructuredLogger) -> None:
    """Execute every DDL statement in :data:`_TABLE_DEFINITIONS`.

    Does **not** commit.
    """
    for ddl in _TABLE_DEFINITIONS:
        conn.execute(ddl)
    logger.info(
        "All %d tables created or verified successfully.", len(_TABLE_DEFINITIONS)
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def initialize_schema(conn: sqlite3.Connection, logger: StructuredLogger) -> None:
    """Create the local tables on a fresh database.

    Table creation and the version stamp commit together, or roll back
    together so the next startup retries.  Safe to call on every startup.
    """
    _ensure_version_table(conn)
    current: int = _get_schema_version(conn)

    if current >= CURRENT_SCHEMA_VERSION:
        logger.debug("Local schema is up to date (version %d).", current)
        return

    logger.info("Creating local schema at version %d …", CURRENT_SCHEMA_VERSION)

    try:
        _create_all_tables(conn, logger)
        _set_schema_version(conn, CURRENT_SCHEMA_VERSION)
        conn.commit()
    except Exception:
        conn.rollback()
        logger.error(
            "Local schema creation failed; rolled back to version %d.", current,
        )
        raise

    logger.info("Local schema initialised at version %d.", CURRENT_SCHEMA_VERSION)
