"""
Budget Item Models.

``BudgetItemData`` is what the UI submits, ``BudgetItemUpdate`` is a
partial edit, and ``BudgetItem`` is a row read back from the
``budget_items`` table.  Identity, ownership and timestamps are never
part of the input models, so an update cannot touch them.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from mymoney.models.enums import BudgetItemType, PaymentMethod
from mymoney.utils.general import ensure_utc


class BudgetItemData(BaseModel):
    """Fields supplied by the caller when creating a budget item."""

    name: str
    type: BudgetItemType
    amount: Decimal = Field(ge=0)
    is_recurrent: bool = False
    due_day: Optional[int] = Field(default=None, ge=1, le=31)
    due_date: Optional[date] = None
    owner: str
    payment_method: PaymentMethod
    category: Optional[str] = None  # Category id reference

    @field_validator("category", mode="before")
    @classmethod
    def _blank_category_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class BudgetItemUpdate(BaseModel):
    """Partial update; only explicitly supplied fields are written."""

    name: Optional[str] = None
    type: Optional[BudgetItemType] = None
    amount: Optional[Decimal] = Field(default=None, ge=0)
    is_recurrent: Optional[bool] = None
    due_day: Optional[int] = Field(default=None, ge=1, le=31)
    due_date: Optional[date] = None
    owner: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    category: Optional[str] = None

    @field_validator(
        "name", "type", "amount", "is_recurrent", "owner", "payment_method",
        mode="before",
    )
    @classmethod
    def _not_null(cls, value: object, info: ValidationInfo) -> object:
        if value is None:
            raise ValueError(f"Budget item {info.field_name} cannot be null")
        return value


class BudgetItem(BudgetItemData):
    """A budget item as stored in Supabase."""

    id: str
    user_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None
