"""
Category Repository.

Data access for the ``categories`` table.  Rows are unique on
``(user_id, name)`` (see ``supabase/schema.sql``); default seeding relies
on that constraint for its create-if-absent write.
"""

from __future__ import annotations

from mymoney.database import DatabaseManager
from mymoney.logger import StructuredLogger
from mymoney.models.category import Category
from mymoney.repositories.base_repository import BaseRepository, Row

_UNIQUE_COLUMNS: str = "user_id,name"


class CategoryRepository(BaseRepository):
    """Data access layer for Category entities."""

    TABLE = "categories"

    def __init__(self, db: DatabaseManager, logger: StructuredLogger) -> None:
        super().__init__(db, logger)

    async def create(self, fields: Row) -> str:
        """Insert a category and return its new id."""
        row = await self._insert(fields)
        return str(row["id"])

    async def create_many_if_absent(self, rows: list[Row]) -> list[Category]:
        """Insert the categories whose ``(user_id, name)`` does not exist yet."""
        inserted = await self._insert_many_if_absent(rows, on_conflict=_UNIQUE_COLUMNS)
        return [self._to_model(Category, row) for row in inserted]

    async def list_for_user(self, user_id: str) -> list[Category]:
        """Fetch all categories owned by *user_id*, ordered by name."""
        rows = await self._select(equals={"user_id": user_id}, order_by="name")
        return [self._to_model(Category, row) for row in rows]

    async def update(self, category_id: str, fields: Row) -> Category:
        row = await self._update(category_id, fields)
        return self._to_model(Category, row)

    async def delete(self, category_id: str) -> None:
        await self._delete(category_id)
