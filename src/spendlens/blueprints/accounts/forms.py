"""Account form validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from ...models.account import ACCOUNT_TYPES
from ..forms import BaseForm


@dataclass(slots=True)
class AccountForm(BaseForm):
    FIELDS: ClassVar[tuple[str, ...]] = ("name", "account_type", "balance", "is_active")

    name: Optional[str] = None
    account_type: Optional[str] = None
    balance: Optional[float] = None
    is_active: Optional[bool] = None

    def clean(self) -> None:
        self.name = self._text("name", "Name", max_length=128)
        self.account_type = self._choice(
            "account_type", "Account type", ACCOUNT_TYPES, default="checking"
        )
        # Credit balances may be negative.
        self.balance = self._amount("balance", "Balance", allow_negative=True, default=0.0)
        self.is_active = self._flag("is_active", "Active", default=True)
