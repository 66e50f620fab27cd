"""Income form validation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Optional

from ...models.income import FREQUENCIES
from ..forms import BaseForm


@dataclass(slots=True)
class IncomeForm(BaseForm):
    FIELDS: ClassVar[tuple[str, ...]] = (
        "name",
        "amount",
        "frequency",
        "income_date",
        "is_recurring",
        "account_id",
    )

    name: Optional[str] = None
    amount: Optional[float] = None
    frequency: Optional[str] = None
    income_date: Optional[date] = None
    is_recurring: Optional[bool] = None
    account_id: Optional[int] = None

    def clean(self) -> None:
        self.name = self._text("name", "Name", max_length=128)
        self.amount = self._amount("amount", "Amount")
        self.frequency = self._choice("frequency", "Frequency", FREQUENCIES, default="monthly")
        self.income_date = self._date("income_date", "Date", default=date.today())
        self.is_recurring = self._flag("is_recurring", "Recurring", default=True)
        self.account_id = self._whole_number("account_id", "Account")
