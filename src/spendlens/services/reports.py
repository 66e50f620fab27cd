"""Report pipelines composing store reads with the analytics services.

Each report re-queries the store and recomputes from scratch; nothing is
cached between calls.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..domain.repositories import RecordStore
from ..logging_config import get_logger
from ..models.expense import Expense
from . import ledger
from .budgeting import (
    DEFAULT_FETCH_WORKERS,
    budget_spend,
    compute_budget_flow,
    dashboard_stats,
    previous_month,
)
from .categories import CategoryLookup
from .insights import generate_insights
from .spending import analyze_categories
from .trends import bill_trends, category_trends, monthly_totals

logger = get_logger(__name__)

DEFAULT_TREND_MONTHS = 12
BILL_TREND_LIMIT = 10


def spending_report(
    expenses: Iterable[Expense],
    categories: CategoryLookup,
    *,
    window_days: int = 90,
) -> dict[str, object]:
    """Aggregate, estimate trends and derive insights for one window."""

    expenses = list(expenses)
    total = sum(float(item.amount) for item in expenses)
    patterns = analyze_categories(expenses, categories)
    insights = generate_insights(patterns, total, window_days=window_days)
    return {
        "totalSpending": round(total, 2),
        "windowDays": window_days,
        "patterns": [pattern.to_dict() for pattern in patterns],
        "insights": [insight.to_dict() for insight in insights],
    }


def trends_report(
    expenses: Iterable[Expense], categories: CategoryLookup
) -> dict[str, object]:
    expenses = list(expenses)
    return {
        "monthly": [item.to_dict() for item in monthly_totals(expenses, categories)],
        "bills": [
            bill.to_dict() for bill in bill_trends(expenses, categories)[:BILL_TREND_LIMIT]
        ],
        "categories": [item.to_dict() for item in category_trends(expenses, categories)],
    }


def load_spending_report(
    store: RecordStore, *, user_id: int, window_days: int = 90, today: Optional[date] = None
) -> dict[str, object]:
    today = today or date.today()
    since = ledger.window_start(today, window_days)
    expenses = ledger.expenses_since(store, since, user_id=user_id, until=today)
    categories = ledger.category_lookup(store, user_id=user_id)
    logger.info(
        "Spending report",
        extra={"user_id": user_id, "expenses": len(expenses), "window_days": window_days},
    )
    return spending_report(expenses, categories, window_days=window_days)


def load_trends_report(
    store: RecordStore,
    *,
    user_id: int,
    months: int = DEFAULT_TREND_MONTHS,
    today: Optional[date] = None,
) -> dict[str, object]:
    today = today or date.today()
    since = ledger.months_back(today, months)
    expenses = ledger.expenses_since(store, since, user_id=user_id, until=today)
    categories = ledger.category_lookup(store, user_id=user_id)
    report = trends_report(expenses, categories)
    report["months"] = months
    return report


def load_budget_flow(
    store: RecordStore,
    *,
    user_id: int,
    today: Optional[date] = None,
    max_workers: int = DEFAULT_FETCH_WORKERS,
) -> dict[str, object]:
    today = today or date.today()
    incomes = ledger.income_sources(store, user_id=user_id)
    budgets = ledger.budgets_for_month(store, today.year, today.month, user_id=user_id)
    spent = budget_spend(
        budgets,
        lambda budget: ledger.spent_for_budget(store, budget, user_id=user_id),
        max_workers=max_workers,
    )
    categories = ledger.category_lookup(store, user_id=user_id)
    flow = compute_budget_flow(
        incomes=incomes, budgets=budgets, spent_by_budget=spent, categories=categories
    )
    return flow.to_dict()


def load_dashboard(
    store: RecordStore, *, user_id: int, today: Optional[date] = None
) -> dict[str, object]:
    today = today or date.today()
    budgets = ledger.budgets_for_month(store, today.year, today.month, user_id=user_id)
    prev_year, prev_month = previous_month(today.year, today.month)
    stats = dashboard_stats(
        total_budget=sum(float(budget.budgeted_amount) for budget in budgets),
        current_expenses=ledger.monthly_expense_total(
            store, today.year, today.month, user_id=user_id
        ),
        previous_expenses=ledger.monthly_expense_total(
            store, prev_year, prev_month, user_id=user_id
        ),
    )
    return stats.to_dict()
