"""
Business Logic Services Package.

Services depend on the Repository layer for backend access and never
touch ``db.supabase`` directly.

The ``create_services()`` factory wires every repository and service together,
returning a typed dict that the application layer (stores / CLI commands)
can consume without knowing the internal dependency graph.
"""

from __future__ import annotations

from typing import TypedDict

from mymoney.database import DatabaseManager
from mymoney.logger import get_logger
from mymoney.repositories.budget_repository import BudgetItemRepository
from mymoney.repositories.category_repository import CategoryRepository
from mymoney.repositories.transaction_repository import TransactionRepository
from mymoney.services.budget_service import BudgetService
from mymoney.services.category_service import CategoryService
from mymoney.services.local_storage import LocalStorageService
from mymoney.services.transaction_service import TransactionService


class ServiceContainer(TypedDict):
    """Typed container for all application services."""

    budget_service: BudgetService
    category_service: CategoryService
    transaction_service: TransactionService
    local_storage: LocalStorageService


def create_services(db: DatabaseManager) -> ServiceContainer:
    """
    Wire all repositories and services together.

    This is the single composition root for the service layer.

    Args:
        db: Initialised DatabaseManager (online or offline) with the local
            schema applied.

    Returns:
        ServiceContainer mapping service names to fully-wired instances.
    """
    logger = get_logger("mymoney.services")

    budget_repo = BudgetItemRepository(db=db, logger=logger)
    category_repo = CategoryRepository(db=db, logger=logger)
    transaction_repo = TransactionRepository(db=db, logger=logger)

    return ServiceContainer(
        budget_service=BudgetService(repo=budget_repo, logger=logger),
        category_service=CategoryService(repo=category_repo, logger=logger),
        transaction_service=TransactionService(repo=transaction_repo, logger=logger),
        local_storage=LocalStorageService(db=db, logger=logger),
    )
