"""
Base Repository.

Provides shared infrastructure for all repositories:
- DatabaseManager reference (Supabase + SQLite)
- Logger reference
- Generic async helpers over a single Supabase table: filtered/ordered
  select, insert, bulk create-if-absent, patch by id, delete by id

Every helper is a suspension point.  ``BackendUnavailableError`` from an
offline ``DatabaseManager`` passes through untouched; any exception raised
by the Supabase call itself is logged and re-raised as
``BackendOperationError``.  Nothing is retried.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Optional, Protocol, TypeVar

from pydantic import BaseModel, ValidationError
from supabase import AsyncClient

from mymoney.database import DatabaseManager
from mymoney.errors import BackendOperationError
from mymoney.logger import StructuredLogger
from mymoney.utils.general import JsonSafeType, convert_to_json_safe

Row = dict[str, JsonSafeType]
ModelT = TypeVar("ModelT", bound=BaseModel)


class APIResponse(Protocol):
    """The part of a PostgREST response the repositories read."""

    data: list[Row]


class BaseRepository:
    """Base class for all repositories. Receives dependencies via __init__."""

    TABLE: str = ""

    def __init__(self, db: DatabaseManager, logger: StructuredLogger) -> None:
        self._db = db
        self._logger = logger

    @property
    def supabase(self) -> AsyncClient:
        """Returns the Supabase client; raises ``BackendUnavailableError`` offline."""
        return self._db.supabase

    @property
    def is_online(self) -> bool:
        return self._db.is_online

    async def _execute(
        self,
        operation: str,
        request: Callable[[AsyncClient], Awaitable[APIResponse]],
    ) -> APIResponse:
        """Run one Supabase request against :attr:`TABLE`.

        Parameters
        ----------
        operation:
            Short verb used in logs and in the raised error
            (``"select"``, ``"insert"``, ...).
        request:
            Receives the client and returns the awaitable ``execute()``.
        """
        client = self.supabase
        try:
            return await request(client)
        except Exception as exc:
            self._logger.error(
                "Supabase %s on %s failed: %s", operation, self.TABLE, exc,
            )
            raise BackendOperationError(
                f"Failed to {operation} {self.TABLE}: {exc}",
                original_error=exc,
                operation=operation,
                table=self.TABLE,
            ) from exc

    def _to_model(self, model: type[ModelT], row: Row) -> ModelT:
        """Build *model* from a stored row.

        Raises:
            BackendOperationError: If the row does not match *model*.
        """
        try:
            return model.model_validate(row)
        except ValidationError as exc:
            self._logger.error(
                "Malformed %s row %s: %s", self.TABLE, row.get("id"), exc,
            )
            raise BackendOperationError(
                f"Malformed {self.TABLE} row {row.get('id')!r}: "
                f"{exc.errors()[0]['msg']}",
                original_error=exc,
                operation="read",
                table=self.TABLE,
            ) from exc

    async def _select(
        self,
        *,
        equals: Mapping[str, object],
        gte: Optional[Mapping[str, object]] = None,
        lte: Optional[Mapping[str, object]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[Row]:
        """Select every column of the rows matching all filters."""

        def _request(client: AsyncClient) -> Awaitable[APIResponse]:
            query = client.table(self.TABLE).select("*")
            for column, value in equals.items():
                query = query.eq(column, convert_to_json_safe(value))
            for column, value in (gte or {}).items():
                query = query.gte(column, convert_to_json_safe(value))
            for column, value in (lte or {}).items():
                query = query.lte(column, convert_to_json_safe(value))
            if order_by:
                query = query.order(order_by, desc=descending)
            return query.execute()

        response = await self._execute("select", _request)
        return list(response.data or [])

    async def _insert(self, fields: Row) -> Row:
        """Insert one row and return it as stored (including its ``id``)."""
        response = await self._execute(
            "insert",
            lambda client: client.table(self.TABLE).insert(fields).execute(),
        )
        if not response.data:
            raise BackendOperationError(
                f"Insert into {self.TABLE} returned no row.",
                operation="insert",
                table=self.TABLE,
            )
        return response.data[0]

    async def _insert_many_if_absent(
        self, rows: list[Row], *, on_conflict: str,
    ) -> list[Row]:
        """Bulk create-if-absent keyed by the unique columns in *on_conflict*.

        Rows colliding with an existing row are skipped by the backend, so
        concurrent callers cannot create duplicates.  Returns the rows that
        were actually inserted.
        """
        if not rows:
            return []
        response = await self._execute(
            "upsert",
            lambda client: client.table(self.TABLE)
            .upsert(rows, on_conflict=on_conflict, ignore_duplicates=True)
            .execute(),
        )
        return list(response.data or [])

    async def _update(self, row_id: str, fields: Row) -> Row:
        """Patch the supplied columns of one row.

        Raises:
            BackendOperationError: If no row with *row_id* exists.
        """
        response = await self._execute(
            "update",
            lambda client: client.table(self.TABLE)
            .update(fields)
            .eq("id", row_id)
            .execute(),
        )
        if not response.data:
            raise BackendOperationError(
                f"No {self.TABLE} row with id {row_id!r}.",
                operation="update",
                table=self.TABLE,
            )
        return response.data[0]

    async def _delete(self, row_id: str) -> None:
        """Delete one row by id; deleting a missing row is not an error."""
        await self._execute(
            "delete",
            lambda client: client.table(self.TABLE).delete().eq("id", row_id).execute(),
        )
