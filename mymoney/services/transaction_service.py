"""
Transaction Service.

Records income and expense transactions and lists them newest first,
optionally within an inclusive date window.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Optional, Union

from mymoney.errors import BackendUnavailableError
from mymoney.logger import StructuredLogger
from mymoney.models.transaction import (
    Transaction,
    TransactionData,
    TransactionFormData,
    TransactionUpdate,
)
from mymoney.repositories.transaction_repository import TransactionRepository
from mymoney.services.base_service import BaseService
from mymoney.utils.audit import log_audit_event
from mymoney.utils.general import convert_to_json_safe, utc_now

_ENTITY: str = "Transaction"


class TransactionService(BaseService):
    """Entity access service for transactions."""

    def __init__(self, repo: TransactionRepository, logger: StructuredLogger) -> None:
        super().__init__(logger)
        self._repo = repo

    async def add_transaction(
        self,
        data: Union[TransactionData, TransactionFormData, Mapping[str, object]],
        user_id: str,
    ) -> str:
        """Record a transaction owned by *user_id* and return its id.

        Raw form input (:class:`TransactionFormData`) is parsed first.
        """
        self._require_user(user_id)
        if isinstance(data, TransactionFormData):
            data = data.to_data()
        transaction = self._validate(TransactionData, data)

        now = convert_to_json_safe(utc_now())
        fields = transaction.model_dump(mode="json")
        fields.update(user_id=user_id, created_at=now, updated_at=now)

        transaction_id = await self._repo.create(fields)
        log_audit_event(
            self._logger, "CREATE", _ENTITY, transaction_id, user_id,
            details={
                "type": str(transaction.type),
                "amount": str(transaction.amount),
            },
        )
        return transaction_id

    async def get_transactions(
        self,
        user_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[Transaction]:
        try:
            return await self._repo.list_for_user(user_id, start_date, end_date)
        except BackendUnavailableError:
            self._logger.warning("Backend unavailable; returning no transactions.")
            return []

    async def update_transaction(
        self,
        transaction_id: str,
        updates: Union[TransactionUpdate, Mapping[str, object]],
    ) -> Transaction:
        """Write only the supplied fields and stamp ``updated_at``."""
        changes = self._validate(TransactionUpdate, updates).model_dump(
            mode="json", exclude_unset=True,
        )
        changes["updated_at"] = convert_to_json_safe(utc_now())

        updated = await self._repo.update(transaction_id, changes)
        log_audit_event(
            self._logger, "UPDATE", _ENTITY, transaction_id, updated.user_id,
            details={"fields": ",".join(sorted(changes))},
        )
        return updated

    async def delete_transaction(self, transaction_id: str) -> None:
        await self._repo.delete(transaction_id)
        log_audit_event(self._logger, "DELETE", _ENTITY, transaction_id)
