"""
Transaction Models.

``TransactionData`` is the typed input, ``TransactionFormData`` is the
raw text a form submits, ``TransactionUpdate`` is a partial edit and
``Transaction`` is a row read back from the ``transactions`` table.

Timestamps round-trip through Supabase ``timestamptz`` strings.  A row
missing ``transaction_date`` or ``registration_date`` reads as "now"
rather than failing validation.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from mymoney.errors import DataValidationError
from mymoney.models.enums import TransactionType
from mymoney.utils.general import ensure_utc, utc_now


class TransactionData(BaseModel):
    """Fields supplied by the caller when recording a transaction."""

    description: str
    amount: Decimal = Field(ge=0)
    transaction_date: datetime
    type: TransactionType
    category_id: Optional[str] = None
    budget_item_id: Optional[str] = None
    owner: str
    registration_date: datetime = Field(default_factory=utc_now)

    @field_validator("transaction_date", "registration_date")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @field_validator("category_id", "budget_item_id", mode="before")
    @classmethod
    def _blank_reference_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class TransactionUpdate(BaseModel):
    """Partial update; only explicitly supplied fields are written."""

    description: Optional[str] = None
    amount: Optional[Decimal] = Field(default=None, ge=0)
    transaction_date: Optional[datetime] = None
    type: Optional[TransactionType] = None
    category_id: Optional[str] = None
    budget_item_id: Optional[str] = None
    owner: Optional[str] = None
    registration_date: Optional[datetime] = None

    @field_validator(
        "description", "amount", "transaction_date", "type", "owner",
        "registration_date", mode="before",
    )
    @classmethod
    def _not_null(cls, value: object, info: ValidationInfo) -> object:
        if value is None:
            raise ValueError(f"Transaction {info.field_name} cannot be null")
        return value

    @field_validator("transaction_date", "registration_date")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None


class Transaction(BaseModel):
    """A transaction as stored in Supabase."""

    id: Optional[str] = None
    description: str
    amount: Decimal
    transaction_date: datetime = Field(default_factory=utc_now)
    type: TransactionType
    category_id: Optional[str] = None
    budget_item_id: Optional[str] = None
    owner: str
    registration_date: datetime = Field(default_factory=utc_now)
    user_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @field_validator("transaction_date", "registration_date", mode="before")
    @classmethod
    def _missing_timestamp_is_now(cls, value: object) -> object:
        # Supabase returns null for unset timestamptz columns.
        return utc_now() if value is None else value

    @field_validator("transaction_date", "registration_date", "created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None


class TransactionFormData(BaseModel):
    """Raw values captured by the transaction form.

    ``amount`` and ``transaction_date`` arrive as text; the optional
    references arrive as empty strings when nothing is selected.
    """

    description: str
    amount: str
    transaction_date: str
    type: TransactionType
    category_id: str = ""
    budget_item_id: str = ""
    owner: str

    def to_data(self) -> TransactionData:
        """Convert the form values into a typed ``TransactionData``.

        ``transaction_date`` accepts ``YYYY-MM-DD`` (midnight UTC) or a
        full ISO-8601 timestamp.

        Raises:
            DataValidationError: If the amount or date cannot be parsed or
                the resulting data fails validation.
        """
        try:
            amount = Decimal(self.amount.strip().replace(",", ""))
        except InvalidOperation as exc:
            raise DataValidationError(
                f"Invalid amount: {self.amount!r}", original_error=exc,
            ) from exc

        raw_date = self.transaction_date.strip()
        try:
            if len(raw_date) == 10:
                when = datetime.combine(
                    date.fromisoformat(raw_date), time.min, tzinfo=timezone.utc,
                )
            else:
                when = datetime.fromisoformat(raw_date)
        except ValueError as exc:
            raise DataValidationError(
                f"Invalid transaction date: {self.transaction_date!r}",
                original_error=exc,
            ) from exc

        try:
            return TransactionData(
                description=self.description.strip(),
                amount=amount,
                transaction_date=when,
                type=self.type,
                category_id=self.category_id,
                budget_item_id=self.budget_item_id,
                owner=self.owner.strip(),
            )
        except ValidationError as exc:
            raise DataValidationError(
                f"Invalid transaction: {exc.errors()[0]['msg']}", original_error=exc,
            ) from exc
