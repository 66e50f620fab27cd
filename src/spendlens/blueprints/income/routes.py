"""Income routes."""

from __future__ import annotations

from flask import jsonify, request

from ...extensions import current_user_id, get_store, login_required
from ...models.income import Income
from ...services import ledger
from ...services.income import monthly_equivalent, total_monthly_income
from . import bp
from .forms import IncomeForm


def _serialize(item: Income) -> dict[str, object]:
    return {
        "id": item.id,
        "name": item.name,
        "amount": round(float(item.amount), 2),
        "frequency": item.frequency,
        "incomeDate": item.income_date.isoformat(),
        "isRecurring": item.is_recurring,
        "accountId": item.account_id,
        "monthlyAmount": round(monthly_equivalent(item.amount, item.frequency), 2),
    }


def _payload():
    return request.get_json(silent=True) or request.form


@bp.get("/")
@login_required
def list_income():
    """Income sources, newest first, with the monthly-equivalent total."""

    incomes = ledger.income_sources(get_store(), user_id=current_user_id())
    return jsonify(
        {
            "income": [_serialize(item) for item in incomes],
            "totalMonthlyIncome": round(total_monthly_income(incomes), 2),
        }
    )


@bp.get("/summary")
@login_required
def income_summary():
    incomes = ledger.income_sources(get_store(), user_id=current_user_id())
    return jsonify(
        {"sources": len(incomes), "totalMonthlyIncome": round(total_monthly_income(incomes), 2)}
    )


@bp.post("/")
@login_required
def create_income():
    form = IncomeForm.from_mapping(_payload())
    if not form.validate():
        return jsonify({"errors": form.errors}), 400
    item = get_store().insert("income", form.to_values(), user_id=current_user_id())
    return jsonify({"income": _serialize(item)}), 201  # type: ignore[arg-type]


@bp.patch("/<int:income_id>")
@login_required
def update_income(income_id: int):
    form = IncomeForm.from_mapping(_payload(), partial=True)
    if not form.validate():
        return jsonify({"errors": form.errors}), 400
    item = get_store().update("income", income_id, form.to_values(), user_id=current_user_id())
    return jsonify({"income": _serialize(item)})  # type: ignore[arg-type]


@bp.delete("/<int:income_id>")
@login_required
def delete_income(income_id: int):
    get_store().delete("income", income_id, user_id=current_user_id())
    return jsonify({"message": "Income source deleted"})
