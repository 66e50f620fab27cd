"""Income normalization helpers."""

from __future__ import annotations

from typing import Iterable

from ..models.income import Income

# Approximate pay periods per month.
MONTHLY_MULTIPLIERS: dict[str, float] = {
    "weekly": 4.33,
    "biweekly": 2.17,
    "monthly": 1.0,
}


def monthly_equivalent(amount: float, frequency: str) -> float:
    """Return the monthly-equivalent of ``amount`` paid at ``frequency``.

    Unknown frequencies are treated as monthly.
    """

    amount = float(amount)
    # Annual income is spread over twelve months.
    if frequency == "annual":
        return amount / 12
    return amount * MONTHLY_MULTIPLIERS.get(frequency, 1.0)


def total_monthly_income(incomes: Iterable[Income]) -> float:
    """Sum the monthly-equivalent amount of every income source."""

    return sum(monthly_equivalent(item.amount, item.frequency) for item in incomes)
