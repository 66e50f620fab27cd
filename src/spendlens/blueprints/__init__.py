"""Blueprint exports."""

from . import accounts, analytics, auth, budgets, categories, expenses, income

__all__ = [
    "accounts",
    "analytics",
    "auth",
    "budgets",
    "categories",
    "expenses",
    "income",
]
