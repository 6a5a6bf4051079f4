"""
Category Models.

Categories label budget items and transactions.  A fixed catalog of
defaults (:data:`DEFAULT_CATEGORIES`) is seeded for users who have none.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ValidationInfo, field_validator

from mymoney.utils.general import ensure_utc

DEFAULT_COLOR: str = "#95A5A6"
DEFAULT_ICON: str = "🏷️"


class CategoryData(BaseModel):
    """Fields supplied by the caller when creating a category."""

    name: str
    color: str = DEFAULT_COLOR
    icon: str = DEFAULT_ICON

    @field_validator("name")
    @classmethod
    def _name_required(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Category name is required")
        return stripped


class CategoryUpdate(BaseModel):
    """Partial update; only explicitly supplied fields are written."""

    name: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None

    @field_validator("name", "color", "icon", mode="before")
    @classmethod
    def _not_null(cls, value: object, info: ValidationInfo) -> object:
        if value is None:
            raise ValueError(f"Category {info.field_name} cannot be null")
        return value

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Category name cannot be blank")
        return stripped


class Category(CategoryData):
    """A category as stored in Supabase."""

    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


DEFAULT_CATEGORIES: tuple[CategoryData, ...] = (
    CategoryData(name="Food & Dining", color="#FF6B6B", icon="🍽️"),
    CategoryData(name="Transportation", color="#4ECDC4", icon="🚗"),
    CategoryData(name="Shopping", color="#45B7D1", icon="🛍️"),
    CategoryData(name="Entertainment", color="#96CEB4", icon="🎬"),
    CategoryData(name="Bills & Utilities", color="#FFEAA7", icon="⚡"),
    CategoryData(name="Healthcare", color="#DDA0DD", icon="🏥"),
    CategoryData(name="Education", color="#98D8C8", icon="📚"),
    CategoryData(name="Travel", color="#F7DC6F", icon="✈️"),
    CategoryData(name="Salary", color="#82E0AA", icon="💰"),
    CategoryData(name="Investment", color="#85C1E9", icon="📈"),
)
