"""Expense form validation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Optional

from ..forms import BaseForm


@dataclass(slots=True)
class ExpenseForm(BaseForm):
    """Represents expense input prior to validation."""

    FIELDS: ClassVar[tuple[str, ...]] = (
        "name",
        "amount",
        "expense_date",
        "notes",
        "category_id",
        "budget_id",
    )

    name: Optional[str] = None
    amount: Optional[float] = None
    expense_date: Optional[date] = None
    notes: Optional[str] = None
    category_id: Optional[int] = None
    budget_id: Optional[int] = None

    def clean(self) -> None:
        """Validate the bound data and populate typed attributes."""

        self.name = self._text("name", "Name")
        self.amount = self._amount("amount", "Amount")
        self.expense_date = self._date("expense_date", "Date", default=date.today())
        self.notes = self._text("notes", "Notes", required=False, max_length=2000)
        self.category_id = self._whole_number("category_id", "Category", required=True)
        self.budget_id = self._whole_number("budget_id", "Budget")
