"""Form validation tests."""

from __future__ import annotations

from datetime import date

from spendlens.blueprints.accounts.forms import AccountForm
from spendlens.blueprints.auth.forms import PasswordChangeForm
from spendlens.blueprints.budgets.forms import BudgetForm
from spendlens.blueprints.categories.forms import CategoryForm
from spendlens.blueprints.expenses.forms import ExpenseForm
from spendlens.blueprints.income.forms import IncomeForm


def test_expense_form_valid_payload():
    form = ExpenseForm.from_mapping(
        {"name": " Groceries ", "amount": "42.129", "expense_date": "2024-03-05", "category_id": 3}
    )

    assert form.validate()
    values = form.to_values()
    assert values["name"] == "Groceries"
    assert values["amount"] == 42.13
    assert values["expense_date"] == date(2024, 3, 5)
    assert values["category_id"] == 3
    assert values["budget_id"] is None


def test_expense_form_requires_name_amount_and_category():
    form = ExpenseForm.from_mapping({})

    assert not form.validate()
    assert set(form.errors) == {"name", "amount", "category_id"}


def test_expense_form_defaults_date_to_today():
    form = ExpenseForm.from_mapping({"name": "Lunch", "amount": 9, "category_id": 1})

    assert form.validate()
    assert form.expense_date == date.today()


def test_expense_form_rejects_bad_numbers():
    for amount in ("-5", "abc", "nan", "inf"):
        form = ExpenseForm.from_mapping({"name": "x", "amount": amount, "category_id": 1})
        assert not form.validate()
        assert "amount" in form.errors


def test_expense_form_rejects_bad_date():
    form = ExpenseForm.from_mapping(
        {"name": "x", "amount": 1, "category_id": 1, "expense_date": "03/05/2024"}
    )

    assert not form.validate()
    assert form.errors["expense_date"] == ["Enter a valid date (YYYY-MM-DD)."]


def test_partial_form_only_returns_supplied_keys():
    form = ExpenseForm.from_mapping({"amount": "12.5"}, partial=True)

    assert form.validate()
    assert form.to_values() == {"amount": 12.5}


def test_partial_form_still_validates_supplied_keys():
    form = ExpenseForm.from_mapping({"name": ""}, partial=True)

    assert not form.validate()
    assert "name" in form.errors


def test_income_form_defaults_and_choices():
    form = IncomeForm.from_mapping({"name": "Salary", "amount": "2500"})
    assert form.validate()
    assert form.frequency == "monthly"
    assert form.is_recurring is True

    form = IncomeForm.from_mapping(
        {"name": "Salary", "amount": "2500", "frequency": "Fortnightly"}
    )
    assert not form.validate()
    assert "frequency" in form.errors

    form = IncomeForm.from_mapping(
        {"name": "Gig", "amount": "80", "frequency": "WEEKLY", "is_recurring": False}
    )
    assert form.validate()
    assert form.frequency == "weekly"
    assert form.is_recurring is False


def test_budget_form_bounds():
    form = BudgetForm.from_mapping({"name": "Food", "budgeted_amount": "300", "month": "13"})
    assert not form.validate()
    assert form.errors["month"] == ["Month must be between 1 and 12."]

    form = BudgetForm.from_mapping(
        {"name": "Food", "budgeted_amount": "300", "month": "2", "year": "2024"}
    )
    assert form.validate()
    assert (form.month, form.year) == (2, 2024)


def test_account_form_allows_negative_balance():
    form = AccountForm.from_mapping({"name": "Card", "account_type": "credit", "balance": "-420.5"})

    assert form.validate()
    assert form.balance == -420.5
    assert form.is_active is True


def test_category_form_color():
    form = CategoryForm.from_mapping({"name": "Pets"})
    assert form.validate()
    assert form.icon == "📦"
    assert form.color == "#6B7280"

    form = CategoryForm.from_mapping({"name": "Pets", "color": "red"})
    assert not form.validate()
    assert "color" in form.errors


def test_password_change_form_mismatch():
    form = PasswordChangeForm.from_mapping(
        {"current_password": "old", "new_password": "abcdef", "confirm_password": "abcdeg"}
    )

    assert not form.validate()
    assert form.errors["confirm_password"] == ["New passwords do not match."]


def test_non_mapping_input_is_reported_on_body():
    for data in ("x", ["name"], 7):
        form = ExpenseForm.from_mapping(data)
        assert not form.validate()
        assert form.errors == {"body": ["Expected a JSON object."]}


def test_date_must_be_a_complete_iso_value():
    base = {"name": "x", "amount": 1, "category_id": 1}

    form = ExpenseForm.from_mapping({**base, "expense_date": "2024-01-15garbage"})
    assert not form.validate()
    assert "expense_date" in form.errors

    form = ExpenseForm.from_mapping({**base, "expense_date": "2024-01-15T09:30:00"})
    assert form.validate()
    assert form.expense_date == date(2024, 1, 15)
