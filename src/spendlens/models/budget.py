"""Budgeting tables."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class MonthlyBudget(SQLModel, table=True):
    """Planned spend for one category in a single calendar month.

    Budgets never roll over; a new row is expected for each month.
    """

    __tablename__: ClassVar[str] = "monthly_budgets"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=128)
    month: int = Field(nullable=False, index=True, ge=1, le=12)
    year: int = Field(nullable=False, index=True)
    budgeted_amount: float = Field(nullable=False, ge=0)
    category_id: Optional[int] = Field(
        default=None, foreign_key="expense_categories.id", index=True
    )

    # TODO(@budgeting): enforce (user, category, month, year) uniqueness once
    #   duplicate rows already in the wild are merged.
