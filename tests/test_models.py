"""Tests for the pydantic models and their validators."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from mymoney.errors import DataValidationError
from mymoney.models import (
    DEFAULT_CATEGORIES,
    AuthState,
    AuthUser,
    BudgetItemData,
    BudgetItemType,
    CategoryData,
    CategoryUpdate,
    NavigationState,
    PaymentMethod,
    Transaction,
    TransactionFormData,
    TransactionType,
)


class TestCategoryModels:
    def test_name_is_stripped(self):
        assert CategoryData(name="  Groceries  ").name == "Groceries"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Category name is required"):
            CategoryData(name="   ")

    def test_color_and_icon_default(self):
        category = CategoryData(name="Pets")
        assert category.color.startswith("#")
        assert category.icon

    def test_update_rejects_blank_name_but_allows_omission(self):
        assert CategoryUpdate(color="#000000").name is None
        with pytest.raises(ValidationError):
            CategoryUpdate(name="")

    def test_update_rejects_explicit_null(self):
        with pytest.raises(ValidationError, match="cannot be null"):
            CategoryUpdate(name=None)

    def test_default_catalog(self):
        """Ten defaults with unique names, colors and icons."""
        names = [category.name for category in DEFAULT_CATEGORIES]
        assert len(names) == 10
        assert len(set(names)) == 10
        assert names[0] == "Food & Dining"
        assert DEFAULT_CATEGORIES[-1].name == "Investment"
        assert DEFAULT_CATEGORIES[-1].color == "#85C1E9"
        assert all(category.icon for category in DEFAULT_CATEGORIES)


class TestBudgetItemModels:
    def _data(self, **overrides):
        values = {
            "name": "Rent",
            "type": "expense",
            "amount": "1200.00",
            "owner": "Alex",
            "payment_method": "bank_transfer",
        }
        values.update(overrides)
        return BudgetItemData(**values)

    def test_enums_and_amount_are_coerced(self):
        item = self._data(due_day=1)
        assert item.type is BudgetItemType.EXPENSE
        assert item.payment_method is PaymentMethod.BANK_TRANSFER
        assert item.amount == Decimal("1200.00")
        assert item.is_recurrent is False

    @pytest.mark.parametrize("due_day", [0, 32])
    def test_due_day_range(self, due_day):
        with pytest.raises(ValidationError):
            self._data(due_day=due_day)

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            self._data(amount="-1")

    def test_blank_category_reference_is_none(self):
        assert self._data(category="").category is None

    def test_json_dump_is_backend_ready(self):
        dumped = self._data(due_date=date(2025, 3, 1)).model_dump(mode="json")
        assert dumped["type"] == "expense"
        assert dumped["due_date"] == "2025-03-01"
        assert dumped["amount"] == "1200.00"


class TestTransactionModels:
    def _form(self, **overrides):
        values = {
            "description": " Groceries ",
            "amount": "1,234.50",
            "transaction_date": "2025-01-15",
            "type": "expense",
            "owner": "Alex",
        }
        values.update(overrides)
        return TransactionFormData(**values)

    def test_form_converts_text_fields(self):
        data = self._form().to_data()
        assert data.description == "Groceries"
        assert data.amount == Decimal("1234.50")
        assert data.transaction_date == datetime(2025, 1, 15, tzinfo=timezone.utc)
        assert data.category_id is None
        assert data.budget_item_id is None

    def test_form_accepts_full_timestamp(self):
        data = self._form(transaction_date="2025-01-15T10:30:00+02:00").to_data()
        assert data.transaction_date == datetime(2025, 1, 15, 8, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"amount": "twelve"},
            {"transaction_date": "15/01/2025"},
            {"amount": "-5"},
        ],
    )
    def test_form_rejects_bad_input(self, overrides):
        with pytest.raises(DataValidationError):
            self._form(**overrides).to_data()

    def test_missing_dates_read_as_now(self):
        before = datetime.now(timezone.utc) - timedelta(seconds=1)
        row = Transaction(
            id="t1",
            description="Coffee",
            amount=Decimal("3"),
            type="expense",
            owner="Alex",
            user_id="u1",
            transaction_date=None,
        )
        assert row.transaction_date >= before
        assert row.registration_date >= before

    def test_backend_timestamps_become_aware(self):
        row = Transaction(
            description="Salary",
            amount="1000",
            type=TransactionType.INCOME,
            owner="Alex",
            user_id="u1",
            transaction_date="2025-01-15T00:00:00",
        )
        assert row.transaction_date.tzinfo is not None


class TestStateModels:
    def test_auth_state_constructors(self):
        assert AuthState.loading().is_loading is True
        signed_out = AuthState.signed_out()
        assert (signed_out.user, signed_out.is_authenticated, signed_out.is_loading) == (
            None, False, False,
        )
        user = AuthUser(id="u1", email="a@b.c")
        signed_in = AuthState.signed_in(user)
        assert signed_in.user == user
        assert signed_in.is_authenticated is True
        assert signed_in.is_loading is False

    def test_snapshots_are_frozen(self):
        with pytest.raises(ValidationError):
            AuthState.loading().is_loading = False

    def test_navigation_defaults(self):
        assert NavigationState() == NavigationState(
            current_page="/", previous_page=None, is_first_visit=True,
        )
