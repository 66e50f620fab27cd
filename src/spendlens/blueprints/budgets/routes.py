"""Monthly budget routes."""

from __future__ import annotations

from datetime import date

from flask import jsonify, request

from ...extensions import current_user_id, get_store, login_required
from ...models.budget import MonthlyBudget
from ...services import ledger
from ...services.categories import resolve_category
from . import bp
from .forms import BudgetForm


def _serialize(budget: MonthlyBudget, categories) -> dict[str, object]:
    label = resolve_category(budget.category_id, categories)
    return {
        "id": budget.id,
        "name": budget.name,
        "month": budget.month,
        "year": budget.year,
        "budgetedAmount": round(float(budget.budgeted_amount), 2),
        "categoryId": budget.category_id,
        "category": {"name": label.name, "icon": label.icon, "color": label.color},
    }


def _payload():
    return request.get_json(silent=True) or request.form


@bp.get("/")
@login_required
def list_budgets():
    """Budgets for a month (current month by default), optionally per category."""

    today = date.today()
    month = request.args.get("month", default=today.month, type=int)
    year = request.args.get("year", default=today.year, type=int)
    category_id = request.args.get("category_id", type=int)
    if month is None or not 1 <= month <= 12:
        return jsonify({"errors": {"month": ["Month must be between 1 and 12."]}}), 400

    user_id = current_user_id()
    store = get_store()
    budgets = ledger.budgets_for_month(
        store, year, month, user_id=user_id, category_id=category_id
    )
    categories = ledger.category_lookup(store, user_id=user_id)
    return jsonify(
        {
            "month": month,
            "year": year,
            "budgets": [_serialize(item, categories) for item in budgets],
            "totalBudgeted": round(sum(float(b.budgeted_amount) for b in budgets), 2),
        }
    )


@bp.post("/")
@login_required
def create_budget():
    form = BudgetForm.from_mapping(_payload())
    if not form.validate():
        return jsonify({"errors": form.errors}), 400
    user_id = current_user_id()
    store = get_store()
    budget = store.insert("monthly_budgets", form.to_values(), user_id=user_id)
    categories = ledger.category_lookup(store, user_id=user_id)
    return jsonify({"budget": _serialize(budget, categories)}), 201  # type: ignore[arg-type]


@bp.patch("/<int:budget_id>")
@login_required
def update_budget(budget_id: int):
    form = BudgetForm.from_mapping(_payload(), partial=True)
    if not form.validate():
        return jsonify({"errors": form.errors}), 400
    user_id = current_user_id()
    store = get_store()
    budget = store.update("monthly_budgets", budget_id, form.to_values(), user_id=user_id)
    categories = ledger.category_lookup(store, user_id=user_id)
    return jsonify({"budget": _serialize(budget, categories)})  # type: ignore[arg-type]


@bp.delete("/<int:budget_id>")
@login_required
def delete_budget(budget_id: int):
    get_store().delete("monthly_budgets", budget_id, user_id=current_user_id())
    return jsonify({"message": "Budget deleted"})
