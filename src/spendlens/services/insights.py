"""Rule-based spending insights."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .spending import SpendingPattern

HIGH_SHARE_THRESHOLD = 0.30
INCREASING_TREND_THRESHOLD = 50.0
REDUCED_TREND_THRESHOLD = -20.0


@dataclass(frozen=True, slots=True)
class Insight:
    kind: str
    title: str
    description: str
    amount: Optional[float] = None
    category: Optional[str] = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "type": self.kind,
            "title": self.title,
            "description": self.description,
        }
        if self.amount is not None:
            payload["amount"] = round(self.amount, 2)
        if self.category is not None:
            payload["category"] = self.category
        return payload


EMPTY_STATE = Insight(
    kind="info",
    title="Start Tracking Your Spending",
    description="Add your first expenses to see personalized spending insights and patterns.",
)


def generate_insights(
    patterns: Sequence[SpendingPattern],
    grand_total: float,
    *,
    window_days: int = 90,
) -> list[Insight]:
    """Apply the threshold rules to each pattern in order.

    A daily-average insight leads the list whenever anything was spent.
    """

    if not patterns:
        return [EMPTY_STATE]

    insights: list[Insight] = []
    for pattern in patterns:
        name = pattern.category
        if grand_total > 0 and pattern.total_spent > grand_total * HIGH_SHARE_THRESHOLD:
            share = pattern.total_spent / grand_total * 100
            insights.append(
                Insight(
                    kind="warning",
                    title=f"High {name} Spending",
                    description=f"{name} accounts for {share:.1f}% of your total spending.",
                    amount=pattern.total_spent,
                    category=name,
                )
            )
        if pattern.trend > INCREASING_TREND_THRESHOLD:
            insights.append(
                Insight(
                    kind="warning",
                    title=f"Increasing {name} Spending",
                    description=(
                        f"Your {name} spending has increased by {pattern.trend:.1f}% recently."
                    ),
                    category=name,
                )
            )
        elif pattern.trend < REDUCED_TREND_THRESHOLD:
            insights.append(
                Insight(
                    kind="success",
                    title=f"Reduced {name} Spending",
                    description=(
                        f"Great job! You've reduced {name} spending by {abs(pattern.trend):.1f}%."
                    ),
                    category=name,
                )
            )

    if grand_total > 0:
        daily = grand_total / window_days
        insights.insert(
            0,
            Insight(
                kind="info",
                title="Daily Spending Average",
                description=(
                    f"You spend an average of ${daily:.2f} per day over the last "
                    f"{window_days} days."
                ),
                amount=daily,
            ),
        )
    return insights
