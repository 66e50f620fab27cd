"""Category resolution with display fallbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from ..models.category import DEFAULT_COLOR, DEFAULT_ICON, UNCATEGORIZED, ExpenseCategory

CategoryLookup = Mapping[int, ExpenseCategory]


@dataclass(frozen=True, slots=True)
class CategoryLabel:
    name: str
    icon: str = DEFAULT_ICON
    color: str = DEFAULT_COLOR


FALLBACK_LABEL = CategoryLabel(UNCATEGORIZED)


def build_lookup(categories: Iterable[ExpenseCategory]) -> dict[int, ExpenseCategory]:
    """Index categories by id."""

    return {category.id: category for category in categories if category.id is not None}


def resolve_category(category_id: Optional[int], lookup: CategoryLookup) -> CategoryLabel:
    """Return display attributes for ``category_id``.

    Missing or dangling references resolve to "Uncategorized".
    """

    if category_id is None:
        return FALLBACK_LABEL
    category = lookup.get(category_id)
    if category is None:
        return FALLBACK_LABEL
    return CategoryLabel(
        name=category.name or UNCATEGORIZED,
        icon=category.icon or DEFAULT_ICON,
        color=category.color or DEFAULT_COLOR,
    )
