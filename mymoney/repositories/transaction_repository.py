"""
Transaction Repository.

Data access for the ``transactions`` table.  Reads are scoped by
``user_id``, optionally narrowed to an inclusive ``transaction_date``
window, and ordered newest first by the backend.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from mymoney.database import DatabaseManager
from mymoney.logger import StructuredLogger
from mymoney.models.transaction import Transaction
from mymoney.repositories.base_repository import BaseRepository, Row


class TransactionRepository(BaseRepository):
    """Data access layer for Transaction entities.

    Deleting a transaction is a hard delete.  Categories and budget items
    referenced by ``category_id`` / ``budget_item_id`` are not foreign
    keys; removing them leaves those references dangling.
    """

    TABLE = "transactions"

    def __init__(self, db: DatabaseManager, logger: StructuredLogger) -> None:
        super().__init__(db, logger)

    async def create(self, fields: Row) -> str:
        """Insert a transaction and return its new id."""
        row = await self._insert(fields)
        return str(row["id"])

    async def list_for_user(
        self,
        user_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[Transaction]:
        """Fetch *user_id*'s transactions, newest ``transaction_date`` first.

        Both bounds are inclusive and independently optional.
        """
        gte: dict[str, object] = {}
        lte: dict[str, object] = {}
        if start_date is not None:
            gte["transaction_date"] = start_date
        if end_date is not None:
            lte["transaction_date"] = end_date

        rows = await self._select(
            equals={"user_id": user_id},
            gte=gte,
            lte=lte,
            order_by="transaction_date",
            descending=True,
        )
        return [self._to_model(Transaction, row) for row in rows]

    async def update(self, transaction_id: str, fields: Row) -> Transaction:
        row = await self._update(transaction_id, fields)
        return self._to_model(Transaction, row)

    async def delete(self, transaction_id: str) -> None:
        await self._delete(transaction_id)
