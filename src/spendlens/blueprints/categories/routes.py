"""Expense category routes."""

from __future__ import annotations

from flask import jsonify, request

from ...domain.repositories import Ordering
from ...extensions import current_user_id, get_store, login_required
from ...models.category import ExpenseCategory
from . import bp
from .forms import CategoryForm


def _serialize(category: ExpenseCategory) -> dict[str, object]:
    return {
        "id": category.id,
        "name": category.name,
        "icon": category.icon,
        "color": category.color,
    }


@bp.get("/")
@login_required
def list_categories():
    categories = get_store().query(
        "expense_categories", ordering=Ordering("name"), user_id=current_user_id()
    )
    return jsonify({"categories": [_serialize(item) for item in categories]})  # type: ignore[arg-type]


@bp.post("/")
@login_required
def create_category():
    form = CategoryForm.from_mapping(request.get_json(silent=True) or request.form)
    if not form.validate():
        return jsonify({"errors": form.errors}), 400
    category = get_store().insert(
        "expense_categories", form.to_values(), user_id=current_user_id()
    )
    return jsonify({"category": _serialize(category)}), 201  # type: ignore[arg-type]
