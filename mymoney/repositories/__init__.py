"""
Repository Layer Package.

Provides data-access abstractions over the Supabase tables.
All backend operations flow through repositories; services never access
``db.supabase`` directly.

Usage:
    from mymoney.repositories.category_repository import CategoryRepository
    from mymoney.repositories.transaction_repository import TransactionRepository
"""

from mymoney.repositories.base_repository import BaseRepository
from mymoney.repositories.budget_repository import BudgetItemRepository
from mymoney.repositories.category_repository import CategoryRepository
from mymoney.repositories.transaction_repository import TransactionRepository

__all__ = [
    "BaseRepository",
    "BudgetItemRepository",
    "CategoryRepository",
    "TransactionRepository",
]
