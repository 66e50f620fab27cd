"""Expense category definitions."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

DEFAULT_ICON = "📦"
DEFAULT_COLOR = "#6B7280"
UNCATEGORIZED = "Uncategorized"


class ExpenseCategory(SQLModel, table=True):
    """Category referenced (never owned) by expenses and budgets."""

    __tablename__: ClassVar[str] = "expense_categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(index=True, nullable=False, max_length=64)
    icon: str = Field(default=DEFAULT_ICON, max_length=16)
    color: str = Field(default=DEFAULT_COLOR, max_length=7)
