"""
Shared Enumerations for My Money Models.

All string enumerations for type-safe field constraints.
StrEnum values compare equal to their string equivalents,
so rows read back from Supabase can be compared directly.
"""

from __future__ import annotations
from enum import StrEnum


class BudgetItemType(StrEnum):
    """Kind of budget line item."""

    INCOME = "income"
    EXPENSE = "expense"
    SAVINGS = "savings"


class PaymentMethod(StrEnum):
    """How a budget line item is paid."""

    CASH = "cash"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    BANK_TRANSFER = "bank_transfer"
    CHECK = "check"
    OTHER = "other"


class TransactionType(StrEnum):
    """Direction of money for a recorded transaction."""

    INCOME = "income"
    EXPENSE = "expense"
