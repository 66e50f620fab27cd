"""Budgeting domain services."""

from __future__ import annotations

from calendar import monthrange
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, Mapping, Sequence

from ..logging_config import get_logger
from ..models.budget import MonthlyBudget
from ..models.income import Income
from .categories import CategoryLookup, resolve_category
from .income import total_monthly_income
from .trends import month_over_month

logger = get_logger(__name__)

DEFAULT_FETCH_WORKERS = 4


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a calendar month."""

    return date(year, month, 1), date(year, month, monthrange(year, month)[1])


def previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def _percentage(part: float, whole: float) -> float:
    return part / whole * 100 if whole > 0 else 0.0


@dataclass(slots=True)
class BudgetFlowLine:
    """Budgeted versus spent for a single budget row."""

    budget_id: int | None
    name: str
    budgeted: float
    spent: float
    icon: str
    color: str

    @property
    def percentage_used(self) -> float:
        return _percentage(self.spent, self.budgeted)

    @property
    def over_budget(self) -> bool:
        return self.percentage_used > 100

    @property
    def delta(self) -> float:
        return self.spent - self.budgeted

    def to_dict(self) -> dict[str, object]:
        return {
            "budgetId": self.budget_id,
            "name": self.name,
            "budgeted": round(self.budgeted, 2),
            "spent": round(self.spent, 2),
            "icon": self.icon,
            "color": self.color,
            "percentageUsed": round(self.percentage_used, 1),
            "overBudget": self.over_budget,
        }


@dataclass(slots=True)
class BudgetFlow:
    total_income: float
    total_budgeted: float
    total_spent: float
    lines: list[BudgetFlowLine] = field(default_factory=list)

    @property
    def unallocated(self) -> float:
        return self.total_income - self.total_budgeted

    @property
    def remaining(self) -> float:
        return self.total_budgeted - self.total_spent

    @property
    def income_utilization(self) -> float:
        return _percentage(self.total_budgeted, self.total_income)

    @property
    def budget_utilization(self) -> float:
        return _percentage(self.total_spent, self.total_budgeted)

    def to_dict(self) -> dict[str, object]:
        return {
            "totalIncome": round(self.total_income, 2),
            "totalBudgeted": round(self.total_budgeted, 2),
            "totalSpent": round(self.total_spent, 2),
            "unallocated": round(self.unallocated, 2),
            "remaining": round(self.remaining, 2),
            "incomeUtilization": round(self.income_utilization, 1),
            "budgetUtilization": round(self.budget_utilization, 1),
            "categories": [line.to_dict() for line in self.lines],
        }


def budget_spend(
    budgets: Sequence[MonthlyBudget],
    fetch_spent: Callable[[MonthlyBudget], float],
    *,
    max_workers: int = DEFAULT_FETCH_WORKERS,
) -> dict[int, float]:
    """Fetch spent-to-date for every budget row concurrently.

    All lookups are awaited as a group; the first failure propagates once the
    pool has drained.
    """

    if not budgets:
        return {}
    workers = max(1, min(max_workers, len(budgets)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="budget-spend") as pool:
        totals = list(pool.map(fetch_spent, budgets))
    logger.debug("Fetched budget spend", extra={"budgets": len(budgets)})
    return {budget.id: float(total) for budget, total in zip(budgets, totals)}


def compute_budget_flow(
    *,
    incomes: Iterable[Income],
    budgets: Sequence[MonthlyBudget],
    spent_by_budget: Mapping[int, float],
    categories: CategoryLookup,
) -> BudgetFlow:
    """Compose income, budgeted and spent totals for the month."""

    lines = []
    for budget in budgets:
        label = resolve_category(budget.category_id, categories)
        lines.append(
            BudgetFlowLine(
                budget_id=budget.id,
                name=budget.name,
                budgeted=float(budget.budgeted_amount),
                spent=float(spent_by_budget.get(budget.id, 0.0)),
                icon=label.icon,
                color=label.color,
            )
        )

    return BudgetFlow(
        total_income=total_monthly_income(incomes),
        total_budgeted=sum(line.budgeted for line in lines),
        total_spent=sum(line.spent for line in lines),
        lines=lines,
    )


@dataclass(frozen=True, slots=True)
class DashboardStats:
    total_budget: float
    total_expenses: float
    monthly_trend: float

    @property
    def variance(self) -> float:
        return self.total_budget - self.total_expenses

    def to_dict(self) -> dict[str, object]:
        return {
            "totalBudget": round(self.total_budget, 2),
            "totalExpenses": round(self.total_expenses, 2),
            "variance": round(self.variance, 2),
            "underBudget": self.variance >= 0,
            "monthlyTrend": round(self.monthly_trend, 1),
        }


def dashboard_stats(
    *, total_budget: float, current_expenses: float, previous_expenses: float
) -> DashboardStats:
    """Headline numbers for the current month."""

    return DashboardStats(
        total_budget=total_budget,
        total_expenses=current_expenses,
        monthly_trend=month_over_month(current_expenses, previous_expenses),
    )
