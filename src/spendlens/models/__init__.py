"""SQLModel table exports."""

from .account import ACCOUNT_TYPES, Account
from .budget import MonthlyBudget
from .category import ExpenseCategory
from .expense import Expense
from .income import FREQUENCIES, Income
from .user import User

__all__ = [
    "ACCOUNT_TYPES",
    "Account",
    "Expense",
    "ExpenseCategory",
    "FREQUENCIES",
    "Income",
    "MonthlyBudget",
    "User",
]
