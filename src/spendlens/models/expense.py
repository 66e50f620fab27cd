"""SQLModel definition for recorded expenses."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Expense(SQLModel, table=True):
    """A single spend entry. Amounts are stored as positive values."""

    __tablename__: ClassVar[str] = "expenses"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=255)
    amount: float = Field(nullable=False, ge=0)
    expense_date: date = Field(nullable=False, index=True)
    notes: Optional[str] = Field(default=None)
    category_id: Optional[int] = Field(
        default=None, foreign_key="expense_categories.id", index=True
    )
    budget_id: Optional[int] = Field(default=None, foreign_key="monthly_budgets.id", index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
