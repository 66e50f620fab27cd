"""Budget flow, spend fan-out and dashboard tests."""

from __future__ import annotations

import threading
from datetime import date

import pytest

from spendlens.models import MonthlyBudget
from spendlens.services.budgeting import (
    budget_spend,
    compute_budget_flow,
    dashboard_stats,
    month_bounds,
    previous_month,
)
from tests.conftest import assert_float_equal, make_category, make_income


def _budget(budget_id: int, name: str, amount: float, category_id=None) -> MonthlyBudget:
    return MonthlyBudget(
        id=budget_id,
        user_id=1,
        name=name,
        month=3,
        year=2024,
        budgeted_amount=amount,
        category_id=category_id,
    )


def test_month_bounds_handles_leap_year():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(2023, 12) == (date(2023, 12, 1), date(2023, 12, 31))


def test_previous_month_wraps_year():
    assert previous_month(2024, 1) == (2023, 12)
    assert previous_month(2024, 7) == (2024, 6)


def test_budget_spend_collects_every_budget():
    budgets = [_budget(1, "Food", 300.0), _budget(2, "Fuel", 100.0), _budget(3, "Fun", 50.0)]
    spent = {1: 120.0, 2: 80.0, 3: 0.0}
    threads = set()

    def fetch(budget):
        threads.add(threading.current_thread().name)
        return spent[budget.id]

    result = budget_spend(budgets, fetch, max_workers=3)

    assert result == spent
    assert all(name.startswith("budget-spend") for name in threads)


def test_budget_spend_propagates_failures():
    budgets = [_budget(1, "Food", 300.0), _budget(2, "Fuel", 100.0)]

    def fetch(budget):
        if budget.id == 2:
            raise RuntimeError("lookup failed")
        return 1.0

    with pytest.raises(RuntimeError, match="lookup failed"):
        budget_spend(budgets, fetch, max_workers=2)


def test_budget_spend_without_budgets():
    assert budget_spend([], lambda budget: 0.0) == {}


def test_compute_budget_flow_totals():
    categories = {1: make_category(1, "Groceries", icon="🛒")}
    flow = compute_budget_flow(
        incomes=[make_income(1000.0, "biweekly")],
        budgets=[_budget(1, "Food", 400.0, category_id=1), _budget(2, "Fun", 100.0)],
        spent_by_budget={1: 500.0, 2: 25.0},
        categories=categories,
    )

    assert_float_equal(flow.total_income, 2170.0)
    assert flow.total_budgeted == 500.0
    assert flow.total_spent == 525.0
    assert_float_equal(flow.unallocated, 1670.0)
    assert flow.remaining == -25.0
    assert flow.budget_utilization == pytest.approx(105.0)

    food, fun = flow.lines
    assert food.icon == "🛒"
    assert food.over_budget
    assert food.percentage_used == pytest.approx(125.0)
    assert fun.icon == "📦"
    assert not fun.over_budget


def test_budget_flow_without_income_or_budget():
    flow = compute_budget_flow(incomes=[], budgets=[], spent_by_budget={}, categories={})

    payload = flow.to_dict()
    assert payload["incomeUtilization"] == 0.0
    assert payload["budgetUtilization"] == 0.0
    assert payload["categories"] == []


def test_zero_budget_line_is_not_over_budget():
    flow = compute_budget_flow(
        incomes=[],
        budgets=[_budget(1, "Empty", 0.0)],
        spent_by_budget={1: 10.0},
        categories={},
    )

    assert flow.lines[0].percentage_used == 0.0
    assert not flow.lines[0].over_budget


def test_dashboard_stats():
    stats = dashboard_stats(total_budget=1000.0, current_expenses=600.0, previous_expenses=500.0)

    payload = stats.to_dict()
    assert payload["variance"] == 400.0
    assert payload["underBudget"] is True
    assert payload["monthlyTrend"] == 20.0


def test_dashboard_stats_without_previous_month():
    stats = dashboard_stats(total_budget=100.0, current_expenses=150.0, previous_expenses=0.0)

    assert stats.monthly_trend == 0.0
    assert stats.to_dict()["underBudget"] is False
