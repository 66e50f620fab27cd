"""Expense routes."""

from __future__ import annotations

from datetime import date
from typing import Optional

from flask import jsonify, request

from ...extensions import current_user_id, get_store, login_required
from ...logging_config import get_logger
from ...models.expense import Expense
from ...services import ledger
from ...services.categories import resolve_category
from . import bp
from .forms import ExpenseForm

logger = get_logger(__name__)


def _serialize(expense: Expense, categories) -> dict[str, object]:
    label = resolve_category(expense.category_id, categories)
    return {
        "id": expense.id,
        "name": expense.name,
        "amount": round(float(expense.amount), 2),
        "expenseDate": expense.expense_date.isoformat(),
        "notes": expense.notes,
        "categoryId": expense.category_id,
        "budgetId": expense.budget_id,
        "category": {"name": label.name, "icon": label.icon, "color": label.color},
    }


def _parse_day(raw: Optional[str]) -> Optional[date]:
    if not raw:
        return None
    return date.fromisoformat(raw)


def _payload():
    return request.get_json(silent=True) or request.form


@bp.get("/")
@login_required
def list_expenses():
    """List expenses in a date range (defaults to the current month)."""

    try:
        start = _parse_day(request.args.get("from"))
        end = _parse_day(request.args.get("to"))
    except ValueError:
        return jsonify({"errors": {"range": ["Enter valid dates (YYYY-MM-DD)."]}}), 400
    if start and end and start > end:
        return jsonify({"errors": {"range": ["Start date must be on or before end date."]}}), 400

    user_id = current_user_id()
    store = get_store()
    expenses = ledger.expenses_between(store, user_id=user_id, start=start, end=end)
    categories = ledger.category_lookup(store, user_id=user_id)
    return jsonify(
        {
            "expenses": [_serialize(item, categories) for item in expenses],
            "total": round(sum(float(item.amount) for item in expenses), 2),
        }
    )


@bp.get("/recent")
@login_required
def recent_expenses():
    """Most recent expenses, newest first."""

    user_id = current_user_id()
    store = get_store()
    expenses = ledger.recent_expenses(store, user_id=user_id)
    categories = ledger.category_lookup(store, user_id=user_id)
    return jsonify({"expenses": [_serialize(item, categories) for item in expenses]})


@bp.post("/")
@login_required
def create_expense():
    """Persist a new expense from submitted data."""

    form = ExpenseForm.from_mapping(_payload())
    if not form.validate():
        return jsonify({"errors": form.errors}), 400

    user_id = current_user_id()
    store = get_store()
    expense = store.insert("expenses", form.to_values(), user_id=user_id)
    categories = ledger.category_lookup(store, user_id=user_id)
    return jsonify({"expense": _serialize(expense, categories)}), 201  # type: ignore[arg-type]


@bp.patch("/<int:expense_id>")
@login_required
def update_expense(expense_id: int):
    form = ExpenseForm.from_mapping(_payload(), partial=True)
    if not form.validate():
        return jsonify({"errors": form.errors}), 400

    user_id = current_user_id()
    store = get_store()
    expense = store.update("expenses", expense_id, form.to_values(), user_id=user_id)
    categories = ledger.category_lookup(store, user_id=user_id)
    return jsonify({"expense": _serialize(expense, categories)})  # type: ignore[arg-type]


@bp.delete("/<int:expense_id>")
@login_required
def delete_expense(expense_id: int):
    get_store().delete("expenses", expense_id, user_id=current_user_id())
    logger.info("Expense deleted", extra={"expense_id": expense_id})
    return jsonify({"message": "Expense deleted successfully"})
