"""Account routes."""

from __future__ import annotations

from flask import jsonify, request

from ...extensions import current_user_id, get_store, login_required
from ...models.account import Account
from ...services import ledger
from . import bp
from .forms import AccountForm


def _serialize(account: Account) -> dict[str, object]:
    return {
        "id": account.id,
        "name": account.name,
        "accountType": account.account_type,
        "balance": round(float(account.balance), 2),
        "isActive": account.is_active,
    }


def _payload():
    return request.get_json(silent=True) or request.form


@bp.get("/")
@login_required
def list_accounts():
    """Active accounts ordered by balance with the combined total."""

    accounts = ledger.active_accounts(get_store(), user_id=current_user_id())
    return jsonify(
        {
            "accounts": [_serialize(item) for item in accounts],
            "totalBalance": round(ledger.total_balance(accounts), 2),
        }
    )


@bp.post("/")
@login_required
def create_account():
    form = AccountForm.from_mapping(_payload())
    if not form.validate():
        return jsonify({"errors": form.errors}), 400
    account = get_store().insert("accounts", form.to_values(), user_id=current_user_id())
    return jsonify({"account": _serialize(account)}), 201  # type: ignore[arg-type]


@bp.patch("/<int:account_id>")
@login_required
def update_account(account_id: int):
    form = AccountForm.from_mapping(_payload(), partial=True)
    if not form.validate():
        return jsonify({"errors": form.errors}), 400
    account = get_store().update(
        "accounts", account_id, form.to_values(), user_id=current_user_id()
    )
    return jsonify({"account": _serialize(account)})  # type: ignore[arg-type]


@bp.delete("/<int:account_id>")
@login_required
def delete_account(account_id: int):
    get_store().delete("accounts", account_id, user_id=current_user_id())
    return jsonify({"message": "Account deleted"})
