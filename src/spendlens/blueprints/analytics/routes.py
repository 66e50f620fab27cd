"""Dashboard and analytics routes.

Each request re-runs its pipeline against a fresh query result.
"""

from __future__ import annotations

from flask import current_app, jsonify, request

from ...extensions import current_user_id, get_store, login_required
from ...services import reports
from . import bp

_TREND_PERIODS = (3, 6, 12, 24)


def _config():
    return current_app.config["SPENDLENS_CONFIG"]


@bp.get("/spending-habits")
@login_required
def spending_habits():
    """Category patterns and insights over the analysis window."""

    report = reports.load_spending_report(
        get_store(),
        user_id=current_user_id(),
        window_days=_config().ANALYSIS_WINDOW_DAYS,
    )
    return jsonify(report)


@bp.get("/trends")
@login_required
def trends():
    months = request.args.get("months", default=reports.DEFAULT_TREND_MONTHS, type=int)
    if months not in _TREND_PERIODS:
        allowed = ", ".join(str(value) for value in _TREND_PERIODS)
        return jsonify({"errors": {"months": [f"Months must be one of: {allowed}."]}}), 400
    report = reports.load_trends_report(get_store(), user_id=current_user_id(), months=months)
    return jsonify(report)


@bp.get("/budget-flow")
@login_required
def budget_flow():
    report = reports.load_budget_flow(
        get_store(),
        user_id=current_user_id(),
        max_workers=_config().FETCH_WORKERS,
    )
    return jsonify(report)


@bp.get("/dashboard")
@login_required
def dashboard():
    return jsonify(reports.load_dashboard(get_store(), user_id=current_user_id()))
