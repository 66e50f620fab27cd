"""Income source table."""

from __future__ import annotations

from datetime import date
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

FREQUENCIES = ("weekly", "biweekly", "monthly", "annual")


class Income(SQLModel, table=True):
    """A salary or other income stream paid at a fixed frequency."""

    __tablename__: ClassVar[str] = "income"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=128)
    amount: float = Field(nullable=False, ge=0)
    frequency: str = Field(default="monthly", nullable=False, max_length=16)
    income_date: date = Field(nullable=False, index=True)
    is_recurring: bool = Field(default=True, nullable=False)
    account_id: Optional[int] = Field(default=None, foreign_key="accounts.id")
