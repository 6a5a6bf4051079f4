"""
Category Service.

CRUD for per-user categories plus one-shot seeding of the default
catalog.  Seeding is create-if-absent on ``(user_id, name)`` so running it
twice, or from two sessions at once, never duplicates a default.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Union

from mymoney.errors import BackendUnavailableError
from mymoney.logger import StructuredLogger
from mymoney.models.category import (
    DEFAULT_CATEGORIES,
    Category,
    CategoryData,
    CategoryUpdate,
)
from mymoney.repositories.base_repository import Row
from mymoney.repositories.category_repository import CategoryRepository
from mymoney.services.base_service import BaseService
from mymoney.utils.audit import log_audit_event
from mymoney.utils.general import convert_to_json_safe, utc_now

_ENTITY: str = "Category"


class CategoryService(BaseService):
    """Entity access service for categories."""

    def __init__(self, repo: CategoryRepository, logger: StructuredLogger) -> None:
        super().__init__(logger)
        self._repo = repo

    @staticmethod
    def _new_row(category: CategoryData, user_id: str) -> Row:
        now = convert_to_json_safe(utc_now())
        row = category.model_dump(mode="json")
        row.update(user_id=user_id, created_at=now, updated_at=now)
        return row

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def add_category(
        self,
        data: Union[CategoryData, Mapping[str, object]],
        user_id: str,
    ) -> str:
        """Create a category owned by *user_id* and return its id.

        Raises:
            DataValidationError: Blank name or missing *user_id*.
        """
        self._require_user(user_id)
        category = self._validate(CategoryData, data)

        category_id = await self._repo.create(self._new_row(category, user_id))
        log_audit_event(
            self._logger, "CREATE", _ENTITY, category_id, user_id,
            details={"name": category.name},
        )
        return category_id

    async def get_categories(self, user_id: str) -> list[Category]:
        """Return *user_id*'s categories in ascending name order."""
        try:
            return await self._repo.list_for_user(user_id)
        except BackendUnavailableError:
            self._logger.warning("Backend unavailable; returning no categories.")
            return []

    async def update_category(
        self,
        category_id: str,
        updates: Union[CategoryUpdate, Mapping[str, object]],
    ) -> Category:
        changes = self._validate(CategoryUpdate, updates).model_dump(
            mode="json", exclude_unset=True,
        )
        changes["updated_at"] = convert_to_json_safe(utc_now())

        updated = await self._repo.update(category_id, changes)
        log_audit_event(
            self._logger, "UPDATE", _ENTITY, category_id, updated.user_id,
            details={"fields": ",".join(sorted(changes))},
        )
        return updated

    async def delete_category(self, category_id: str) -> None:
        """Delete a category.  Items and transactions keep their reference."""
        await self._repo.delete(category_id)
        log_audit_event(self._logger, "DELETE", _ENTITY, category_id)

    # ------------------------------------------------------------------
    # Defaults
    # ------------------------------------------------------------------

    @staticmethod
    def get_default_categories() -> list[CategoryData]:
        """Return a fresh copy of the default catalog."""
        return [category.model_copy() for category in DEFAULT_CATEGORIES]

    async def initialize_default_categories(self, user_id: str) -> list[Category]:
        """Seed the default catalog when *user_id* has no categories.

        Returns the categories actually created (empty when the user already
        had categories or the backend is not configured).
        """
        self._require_user(user_id)
        if not self._repo.is_online:
            self._logger.warning(
                "Backend unavailable; skipping default category seeding for %s.",
                user_id,
            )
            return []

        existing = await self._repo.list_for_user(user_id)
        if existing:
            self._logger.debug(
                "User %s already has %d categories; nothing to seed.",
                user_id, len(existing),
            )
            return []

        rows = [self._new_row(category, user_id) for category in DEFAULT_CATEGORIES]
        created = await self._repo.create_many_if_absent(rows)
        log_audit_event(
            self._logger, "SEED", _ENTITY, user_id, user_id,
            details={"created": len(created)},
        )
        return created
