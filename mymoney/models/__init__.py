"""
Data Models Package.

Re-exports all Pydantic models:
    from mymoney.models import BudgetItem, Category, Transaction, NavigationState
    from mymoney.models import BudgetItemType, PaymentMethod, TransactionType
"""

from mymoney.models.enums import BudgetItemType, PaymentMethod, TransactionType
from mymoney.models.auth_models import AuthState, AuthUser
from mymoney.models.budget import BudgetItem, BudgetItemData, BudgetItemUpdate
from mymoney.models.category import (
    DEFAULT_CATEGORIES,
    Category,
    CategoryData,
    CategoryUpdate,
)
from mymoney.models.navigation import NavigationState
from mymoney.models.transaction import (
    Transaction,
    TransactionData,
    TransactionFormData,
    TransactionUpdate,
)

__all__ = [
    "BudgetItemType",
    "PaymentMethod",
    "TransactionType",
    "AuthState",
    "AuthUser",
    "BudgetItem",
    "BudgetItemData",
    "BudgetItemUpdate",
    "DEFAULT_CATEGORIES",
    "Category",
    "CategoryData",
    "CategoryUpdate",
    "NavigationState",
    "Transaction",
    "TransactionData",
    "TransactionFormData",
    "TransactionUpdate",
]
