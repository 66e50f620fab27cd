"""Category spending patterns over a trailing window."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..models.expense import Expense
from .categories import CategoryLabel, CategoryLookup, resolve_category
from .trends import split_trend

WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

EARLY_MONTH_LAST_DAY = 10
MID_MONTH_LAST_DAY = 20


def weekday_name(value) -> str:
    """Sunday-first weekday name for a date."""

    return WEEKDAYS[(value.weekday() + 1) % 7]


def classify_time_of_month(days: Iterable[int]) -> str:
    """Return early/mid/late for a strict-majority bucket, else consistent."""

    early = mid = late = 0
    for day in days:
        if day <= EARLY_MONTH_LAST_DAY:
            early += 1
        elif day <= MID_MONTH_LAST_DAY:
            mid += 1
        else:
            late += 1
    if early > mid and early > late:
        return "early"
    if mid > early and mid > late:
        return "mid"
    if late > early and late > mid:
        return "late"
    return "consistent"


@dataclass(slots=True)
class SpendingPattern:
    category: str
    icon: str
    color: str
    total_spent: float
    avg_per_transaction: float
    frequency: int
    trend: float
    day_of_week: dict[str, int]
    time_of_month: str

    @property
    def peak_day(self) -> str:
        # First weekday wins ties, Sunday-first.
        return max(WEEKDAYS, key=lambda day: self.day_of_week[day])

    def to_dict(self) -> dict[str, object]:
        return {
            "category": self.category,
            "icon": self.icon,
            "color": self.color,
            "totalSpent": round(self.total_spent, 2),
            "avgPerTransaction": round(self.avg_per_transaction, 2),
            "frequency": self.frequency,
            "trend": round(self.trend, 1),
            "dayOfWeekPattern": dict(self.day_of_week),
            "timeOfMonthPattern": self.time_of_month,
            "peakDay": self.peak_day,
        }


@dataclass(slots=True)
class _Group:
    label: CategoryLabel
    expenses: list[Expense] = field(default_factory=list)


def analyze_categories(
    expenses: Iterable[Expense], categories: CategoryLookup
) -> list[SpendingPattern]:
    """Group expenses by category and summarize each group.

    Results are sorted by total spend, largest first. The group totals always
    add up to the total of ``expenses``.
    """

    groups: dict[str, _Group] = {}
    for expense in expenses:
        label = resolve_category(expense.category_id, categories)
        group = groups.get(label.name)
        if group is None:
            group = groups[label.name] = _Group(label)
        group.expenses.append(expense)

    patterns: list[SpendingPattern] = []
    for name, group in groups.items():
        chronological = sorted(group.expenses, key=lambda item: item.expense_date)
        amounts = [float(item.amount) for item in chronological]
        total = sum(amounts)

        day_of_week = dict.fromkeys(WEEKDAYS, 0)
        for item in chronological:
            day_of_week[weekday_name(item.expense_date)] += 1

        patterns.append(
            SpendingPattern(
                category=name,
                icon=group.label.icon,
                color=group.label.color,
                total_spent=total,
                avg_per_transaction=total / len(amounts),
                frequency=len(amounts),
                trend=split_trend(amounts),
                day_of_week=day_of_week,
                time_of_month=classify_time_of_month(
                    item.expense_date.day for item in chronological
                ),
            )
        )

    patterns.sort(key=lambda pattern: pattern.total_spent, reverse=True)
    return patterns
