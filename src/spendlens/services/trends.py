"""Trend estimation and recurring-bill detection over expense series.

Every function here is pure: callers pass freshly fetched records and get new
result objects back, so repeated runs over the same input are identical.
"""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, NamedTuple, Sequence

from ..models.expense import Expense
from .categories import CategoryLabel, CategoryLookup, resolve_category

RECURRING_CV_THRESHOLD = 0.3
RECURRING_MIN_OBSERVATIONS = 3
# Bills need at least this many months of data to be reported.
MIN_BILL_MONTHS = 2


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence."""

    if not values:
        return 0.0
    return sum(values) / len(values)


def split_trend(amounts: Sequence[float]) -> float:
    """Percentage change from the earlier half of a series to the later half.

    ``amounts`` must be in chronological order. The series is split at
    ``len // 2``; with fewer than two observations the earlier half is empty
    and the trend is 0.0. A non-positive earlier mean also yields 0.0.
    """

    half = len(amounts) // 2
    earlier = amounts[:half]
    later = amounts[half:]
    earlier_mean = mean(earlier)
    if not earlier or earlier_mean <= 0:
        return 0.0
    return (mean(later) - earlier_mean) / earlier_mean * 100


def coefficient_of_variation(amounts: Sequence[float]) -> float:
    """Population standard deviation divided by the mean.

    Returns 1.0 when the mean is not positive, which keeps such series out of
    the recurring bucket.
    """

    avg = mean(amounts)
    if avg <= 0:
        return 1.0
    variance = sum((value - avg) ** 2 for value in amounts) / len(amounts)
    return math.sqrt(variance) / avg


def is_recurring(amounts: Sequence[float]) -> bool:
    """Heuristic: low relative variation over enough observations."""

    return (
        len(amounts) >= RECURRING_MIN_OBSERVATIONS
        and coefficient_of_variation(amounts) < RECURRING_CV_THRESHOLD
    )


def month_over_month(current_total: float, previous_total: float) -> float:
    """Percentage change between two monthly totals (0.0 without a baseline)."""

    if previous_total <= 0:
        return 0.0
    return (current_total - previous_total) / previous_total * 100


class MonthKey(NamedTuple):
    year: int
    month: int

    @classmethod
    def of(cls, value: date) -> MonthKey:
        return cls(value.year, value.month)

    @property
    def label(self) -> str:
        return date(self.year, self.month, 1).strftime("%b %y")

    @property
    def iso(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


class BillKey(NamedTuple):
    """Structured grouping key for a named bill within a category."""

    name: str
    category: str


@dataclass(slots=True)
class MonthlyAmount:
    month: str
    label: str
    amount: float

    def to_dict(self) -> dict[str, object]:
        return {"month": self.month, "label": self.label, "amount": round(self.amount, 2)}


@dataclass(slots=True)
class MonthlyTotal:
    month: str
    label: str
    year: int
    month_number: int
    total: float = 0.0
    categories: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return {
            "month": self.month,
            "label": self.label,
            "year": self.year,
            "monthNumber": self.month_number,
            "total": round(self.total, 2),
            "categories": {name: round(value, 2) for name, value in self.categories.items()},
        }


@dataclass(slots=True)
class BillTrend:
    name: str
    category: str
    icon: str
    color: str
    monthly_amounts: list[MonthlyAmount]
    trend: float
    avg_amount: float
    is_recurring: bool
    variation: float

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "category": self.category,
            "icon": self.icon,
            "color": self.color,
            "monthlyAmounts": [item.to_dict() for item in self.monthly_amounts],
            "trend": round(self.trend, 1),
            "avgAmount": round(self.avg_amount, 2),
            "isRecurring": self.is_recurring,
            "variation": round(self.variation, 3),
        }


@dataclass(slots=True)
class CategoryTrend:
    category: str
    icon: str
    color: str
    data: list[MonthlyAmount]
    trend: float
    avg_monthly: float
    total_spent: float

    def to_dict(self) -> dict[str, object]:
        return {
            "category": self.category,
            "icon": self.icon,
            "color": self.color,
            "data": [item.to_dict() for item in self.data],
            "trend": round(self.trend, 1),
            "avgMonthly": round(self.avg_monthly, 2),
            "totalSpent": round(self.total_spent, 2),
        }


def _monthly_series(per_month: dict[MonthKey, float]) -> list[MonthlyAmount]:
    return [
        MonthlyAmount(month=key.iso, label=key.label, amount=per_month[key])
        for key in sorted(per_month)
    ]


def monthly_totals(
    expenses: Iterable[Expense], categories: CategoryLookup
) -> list[MonthlyTotal]:
    """Total spend per calendar month with a per-category breakdown."""

    buckets: dict[MonthKey, MonthlyTotal] = {}
    for expense in expenses:
        key = MonthKey.of(expense.expense_date)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = buckets[key] = MonthlyTotal(
                month=key.iso, label=key.label, year=key.year, month_number=key.month
            )
        amount = float(expense.amount)
        name = resolve_category(expense.category_id, categories).name
        bucket.total += amount
        bucket.categories[name] = bucket.categories.get(name, 0.0) + amount
    return [buckets[key] for key in sorted(buckets)]


def bill_trends(expenses: Iterable[Expense], categories: CategoryLookup) -> list[BillTrend]:
    """Per-bill monthly series with trend and recurring classification.

    Recurring bills sort first, then by the magnitude of their trend.
    """

    per_bill: dict[BillKey, dict[MonthKey, float]] = defaultdict(lambda: defaultdict(float))
    labels: dict[BillKey, CategoryLabel] = {}
    for expense in expenses:
        label = resolve_category(expense.category_id, categories)
        key = BillKey(expense.name, label.name)
        labels.setdefault(key, label)
        per_bill[key][MonthKey.of(expense.expense_date)] += float(expense.amount)

    results: list[BillTrend] = []
    for key, per_month in per_bill.items():
        if len(per_month) < MIN_BILL_MONTHS:
            continue
        series = _monthly_series(per_month)
        amounts = [item.amount for item in series]
        label = labels[key]
        results.append(
            BillTrend(
                name=key.name,
                category=key.category,
                icon=label.icon,
                color=label.color,
                monthly_amounts=series,
                trend=split_trend(amounts),
                avg_amount=mean(amounts),
                is_recurring=is_recurring(amounts),
                variation=coefficient_of_variation(amounts),
            )
        )

    results.sort(key=lambda bill: (not bill.is_recurring, -abs(bill.trend)))
    return results


def category_trends(
    expenses: Iterable[Expense], categories: CategoryLookup
) -> list[CategoryTrend]:
    """Per-category monthly series sorted by total spend, largest first."""

    per_category: dict[str, dict[MonthKey, float]] = defaultdict(lambda: defaultdict(float))
    labels: dict[str, CategoryLabel] = {}
    for expense in expenses:
        label = resolve_category(expense.category_id, categories)
        labels.setdefault(label.name, label)
        per_category[label.name][MonthKey.of(expense.expense_date)] += float(expense.amount)

    results: list[CategoryTrend] = []
    for name, per_month in per_category.items():
        series = _monthly_series(per_month)
        amounts = [item.amount for item in series]
        total = sum(amounts)
        label = labels[name]
        results.append(
            CategoryTrend(
                category=name,
                icon=label.icon,
                color=label.color,
                data=series,
                trend=split_trend(amounts),
                avg_monthly=total / len(amounts),
                total_spent=total,
            )
        )

    results.sort(key=lambda item: item.total_spent, reverse=True)
    return results
