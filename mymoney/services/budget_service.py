"""
Budget Service.

Create, list, update and delete budget line items for one user.
Listing degrades to an empty result when the backend is not configured;
writes surface every failure to the caller.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Union

from mymoney.errors import BackendUnavailableError
from mymoney.logger import StructuredLogger
from mymoney.models.budget import BudgetItem, BudgetItemData, BudgetItemUpdate
from mymoney.repositories.budget_repository import BudgetItemRepository
from mymoney.services.base_service import BaseService
from mymoney.utils.audit import log_audit_event
from mymoney.utils.general import convert_to_json_safe, utc_now

_ENTITY: str = "BudgetItem"


class BudgetService(BaseService):
    """Entity access service for budget items."""

    def __init__(self, repo: BudgetItemRepository, logger: StructuredLogger) -> None:
        super().__init__(logger)
        self._repo = repo

    async def add_budget_item(
        self,
        data: Union[BudgetItemData, Mapping[str, object]],
        user_id: str,
    ) -> str:
        """Create a budget item owned by *user_id* and return its id."""
        self._require_user(user_id)
        item = self._validate(BudgetItemData, data)

        fields = item.model_dump(mode="json")
        fields["user_id"] = user_id
        fields["created_at"] = convert_to_json_safe(utc_now())

        item_id = await self._repo.create(fields)
        log_audit_event(
            self._logger, "CREATE", _ENTITY, item_id, user_id,
            details={"name": item.name, "type": str(item.type)},
        )
        return item_id

    async def get_budget_items(self, user_id: str) -> list[BudgetItem]:
        """Return *user_id*'s budget items, newest ``created_at`` first."""
        try:
            items = await self._repo.list_for_user(user_id)
        except BackendUnavailableError:
            self._logger.warning("Backend unavailable; returning no budget items.")
            return []
        return sorted(items, key=lambda item: item.created_at, reverse=True)

    async def update_budget_item(
        self,
        item_id: str,
        updates: Union[BudgetItemUpdate, Mapping[str, object]],
    ) -> BudgetItem:
        """Write only the supplied fields and stamp ``updated_at``."""
        changes = self._validate(BudgetItemUpdate, updates).model_dump(
            mode="json", exclude_unset=True,
        )
        changes["updated_at"] = convert_to_json_safe(utc_now())

        updated = await self._repo.update(item_id, changes)
        log_audit_event(
            self._logger, "UPDATE", _ENTITY, item_id, updated.user_id,
            details={"fields": ",".join(sorted(changes))},
        )
        return updated

    async def delete_budget_item(self, item_id: str) -> None:
        """Delete a budget item.  Transactions referencing it are left as-is."""
        await self._repo.delete(item_id)
        log_audit_event(self._logger, "DELETE", _ENTITY, item_id)
