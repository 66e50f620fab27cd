"""Record-store queries used by the views."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from ..domain.repositories import Filter, Ordering, RecordStore
from ..models import Account, Expense, ExpenseCategory, Income, MonthlyBudget
from .budgeting import month_bounds
from .categories import build_lookup

RECENT_EXPENSE_LIMIT = 20


def category_lookup(store: RecordStore, *, user_id: int) -> dict[int, ExpenseCategory]:
    categories = store.query(
        "expense_categories", ordering=Ordering("name"), user_id=user_id
    )
    return build_lookup(categories)  # type: ignore[arg-type]


def recent_expenses(
    store: RecordStore, *, user_id: int, limit: int = RECENT_EXPENSE_LIMIT
) -> list[Expense]:
    return store.query(  # type: ignore[return-value]
        "expenses",
        ordering=Ordering("expense_date", descending=True),
        limit=limit,
        user_id=user_id,
    )


def expenses_between(
    store: RecordStore,
    *,
    user_id: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
    today: Optional[date] = None,
) -> list[Expense]:
    """Expenses in an inclusive date range, newest first.

    Missing bounds default to the current calendar month.
    """

    today = today or date.today()
    first_day, last_day = month_bounds(today.year, today.month)
    return store.query(  # type: ignore[return-value]
        "expenses",
        filters=(
            Filter.gte("expense_date", start or first_day),
            Filter.lte("expense_date", end or last_day),
        ),
        ordering=Ordering("expense_date", descending=True),
        user_id=user_id,
    )


def expenses_since(
    store: RecordStore, since: date, *, user_id: int, until: Optional[date] = None
) -> list[Expense]:
    """Expenses on or after ``since`` (and up to ``until``) in chronological order."""

    filters = [Filter.gte("expense_date", since)]
    if until is not None:
        filters.append(Filter.lte("expense_date", until))
    return store.query(  # type: ignore[return-value]
        "expenses",
        filters=filters,
        ordering=Ordering("expense_date"),
        user_id=user_id,
    )


def window_start(today: date, window_days: int) -> date:
    """First day of a trailing window of ``window_days`` days ending on ``today``."""

    return today - timedelta(days=window_days - 1)


def months_back(today: date, months: int) -> date:
    """Same day ``months`` calendar months earlier, clamped to month end."""

    total = today.year * 12 + (today.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    last_day = month_bounds(year, month)[1].day
    return date(year, month, min(today.day, last_day))


def monthly_expense_total(store: RecordStore, year: int, month: int, *, user_id: int) -> float:
    start, end = month_bounds(year, month)
    expenses = store.query(
        "expenses",
        filters=(Filter.gte("expense_date", start), Filter.lte("expense_date", end)),
        user_id=user_id,
    )
    return sum(float(item.amount) for item in expenses)  # type: ignore[attr-defined]


def budgets_for_month(
    store: RecordStore,
    year: int,
    month: int,
    *,
    user_id: int,
    category_id: Optional[int] = None,
) -> list[MonthlyBudget]:
    filters = [Filter.eq("month", month), Filter.eq("year", year)]
    if category_id is not None:
        filters.append(Filter.eq("category_id", category_id))
    return store.query(  # type: ignore[return-value]
        "monthly_budgets", filters=filters, ordering=Ordering("name"), user_id=user_id
    )


def spent_for_budget(store: RecordStore, budget: MonthlyBudget, *, user_id: int) -> float:
    expenses = store.query(
        "expenses", filters=(Filter.eq("budget_id", budget.id),), user_id=user_id
    )
    return sum(float(item.amount) for item in expenses)  # type: ignore[attr-defined]


def active_accounts(store: RecordStore, *, user_id: int) -> list[Account]:
    return store.query(  # type: ignore[return-value]
        "accounts",
        filters=(Filter.eq("is_active", True),),
        ordering=Ordering("balance", descending=True),
        user_id=user_id,
    )


def total_balance(accounts: list[Account]) -> float:
    return sum(float(account.balance) for account in accounts)


def income_sources(store: RecordStore, *, user_id: int) -> list[Income]:
    return store.query(  # type: ignore[return-value]
        "income", ordering=Ordering("income_date", descending=True), user_id=user_id
    )
