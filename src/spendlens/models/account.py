"""Account model."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

ACCOUNT_TYPES = ("checking", "savings", "credit", "investment")


class Account(SQLModel, table=True):
    __tablename__: ClassVar[str] = "accounts"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=128)
    account_type: str = Field(default="checking", nullable=False, max_length=16)
    balance: float = Field(default=0.0, nullable=False)
    is_active: bool = Field(default=True, nullable=False, index=True)
