"""Budget form validation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Optional

from ..forms import BaseForm


@dataclass(slots=True)
class BudgetForm(BaseForm):
    FIELDS: ClassVar[tuple[str, ...]] = (
        "name",
        "budgeted_amount",
        "month",
        "year",
        "category_id",
    )

    name: Optional[str] = None
    budgeted_amount: Optional[float] = None
    month: Optional[int] = None
    year: Optional[int] = None
    category_id: Optional[int] = None

    def clean(self) -> None:
        today = date.today()
        self.name = self._text("name", "Name", max_length=128)
        self.budgeted_amount = self._amount("budgeted_amount", "Budgeted amount")
        self.month = self._whole_number("month", "Month", maximum=12, default=today.month)
        self.year = self._whole_number(
            "year", "Year", minimum=1900, maximum=9999, default=today.year
        )
        self.category_id = self._whole_number("category_id", "Category")
