"""
Budget Item Repository.

Data access for the ``budget_items`` table.  Every read is scoped by an
equality match on ``user_id``.
"""

from __future__ import annotations

from mymoney.database import DatabaseManager
from mymoney.logger import StructuredLogger
from mymoney.models.budget import BudgetItem
from mymoney.repositories.base_repository import BaseRepository, Row


class BudgetItemRepository(BaseRepository):
    """Data access layer for BudgetItem entities."""

    TABLE = "budget_items"

    def __init__(self, db: DatabaseManager, logger: StructuredLogger) -> None:
        super().__init__(db, logger)

    async def create(self, fields: Row) -> str:
        """Insert a budget item and return its new id."""
        row = await self._insert(fields)
        return str(row["id"])

    async def list_for_user(self, user_id: str) -> list[BudgetItem]:
        """Fetch all budget items owned by *user_id* (unordered)."""
        rows = await self._select(equals={"user_id": user_id})
        return [self._to_model(BudgetItem, row) for row in rows]

    async def update(self, item_id: str, fields: Row) -> BudgetItem:
        row = await self._update(item_id, fields)
        return self._to_model(BudgetItem, row)

    async def delete(self, item_id: str) -> None:
        await self._delete(item_id)
