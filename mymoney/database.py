"""
Database Abstraction Layer.

Holds the two stores the application talks to:

- **Supabase (hosted PostgreSQL + Auth)**: the authoritative store for
  budget items, categories and transactions, and the identity provider.
  Accessed through the asynchronous ``supabase`` client; every call is a
  suspension point on the caller's event loop.

- **SQLite (local)**: small on-device key/value storage (navigation
  state).  Never holds domain data.

Data access is performed through the Repository pattern.  This module only
manages the raw *connections*; it contains no query logic.

Usage (dependency injection at app startup)::

    from mymoney.database import DatabaseManager
    from mymoney.logger import StructuredLogger

    db = await DatabaseManager.connect(
        supabase_url=config.SUPABASE_URL,
        supabase_key=config.SUPABASE_ANON_KEY.get_secret_value(),
        sqlite_path=Path(config.LOCAL_DB_PATH),
        logger=StructuredLogger(name="mymoney.database"),
    )
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

from supabase import AsyncClient, acreate_client

from mymoney.errors import BackendUnavailableError
from mymoney.logger import StructuredLogger


class DatabaseManager:
    """Manages the Supabase client and the local SQLite connection.

    When no Supabase client is supplied the application runs in offline
    mode: the ``supabase`` property raises ``BackendUnavailableError``,
    which read paths turn into empty results and write paths surface to
    the caller.

    Parameters
    ----------
    supabase_client:
        An initialised ``AsyncClient``, or ``None`` for offline mode.
    sqlite_path:
        Filesystem path for the local SQLite database file (``":memory:"``
        is accepted).  Parent directories are created when missing.
    logger:
        A ``StructuredLogger`` instance for structured JSON log output.
    """

    def __init__(
        self,
        supabase_client: Optional[AsyncClient],
        sqlite_path: Path,
        logger: StructuredLogger,
    ) -> None:
        self._logger: StructuredLogger = logger
        self._supabase: Optional[AsyncClient] = supabase_client
        self._closed: bool = False
        self._sqlite_conn: sqlite3.Connection = self._connect_sqlite(sqlite_path)

    @classmethod
    async def connect(
        cls,
        supabase_url: str,
        supabase_key: str,
        sqlite_path: Path,
        logger: StructuredLogger,
    ) -> DatabaseManager:
        """Create the Supabase client (when configured) and open SQLite.

        Credential or initialisation errors are logged and leave the
        manager in offline mode rather than aborting startup.
        """
        client: Optional[AsyncClient] = None
        if supabase_url and supabase_key:
            try:
                client = await acreate_client(supabase_url, supabase_key)
                logger.info("Supabase client initialized.")
            except (ValueError, TypeError) as exc:
                logger.warning(
                    "Supabase credential format error: %s. Running in offline mode.",
                    exc,
                )
            except Exception as exc:
                logger.error(
                    "Unexpected Supabase initialization failure: %s. "
                    "Running in offline mode.",
                    exc,
                    exc_info=True,
                )
        else:
            logger.warning(
                "Supabase credentials not configured; running in offline mode."
            )

        return cls(supabase_client=client, sqlite_path=sqlite_path, logger=logger)

    # ------------------------------------------------------------------
    # Public properties
    # ------------------------------------------------------------------

    @property
    def supabase(self) -> AsyncClient:
        """Return the initialised Supabase client.

        Raises
        ------
        BackendUnavailableError
            If the client was not initialised (offline mode).
        """
        if self._supabase is None:
            raise BackendUnavailableError(
                "Supabase client is not initialised. "
                "The application is running in offline mode."
            )
        return self._supabase

    @property
    def is_online(self) -> bool:
        """``True`` when the Supabase client is available."""
        return self._supabase is not None

    @property
    def sqlite(self) -> sqlite3.Connection:
        """Return the local SQLite connection."""
        return self._sqlite_conn

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the local SQLite connection.

        Safe to call multiple times; subsequent calls are no-ops.
        """
        if self._closed:
            return
        self._closed = True
        try:
            self._sqlite_conn.close()
            self._logger.info("SQLite connection closed.")
        except sqlite3.ProgrammingError:
            pass

    def _connect_sqlite(self, path: Path) -> sqlite3.Connection:
        """Open (or create) the local SQLite database.

        Raises
        ------
        PermissionError
            If the OS denies access to the database file or its directory.
        """
        try:
            if str(path) != ":memory:":
                path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(path))
            conn.row_factory = sqlite3.Row
            self._logger.info("SQLite database opened at %s", path)
            return conn
        except PermissionError as exc:
            msg = (
                f"Cannot open the local database at '{path}'. "
                "The file or its directory may be read-only or locked by "
                "another process.  Please check file permissions and try again."
            )
            self._logger.error(msg)
            raise PermissionError(msg) from exc
