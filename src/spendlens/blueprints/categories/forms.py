"""Category form validation."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, Optional

from ...models.category import DEFAULT_COLOR, DEFAULT_ICON
from ..forms import BaseForm

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


@dataclass(slots=True)
class CategoryForm(BaseForm):
    FIELDS: ClassVar[tuple[str, ...]] = ("name", "icon", "color")

    name: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None

    def clean(self) -> None:
        self.name = self._text("name", "Name", max_length=64)
        self.icon = self._text("icon", "Icon", required=False, max_length=16) or DEFAULT_ICON
        color = self._text("color", "Color", required=False, max_length=7) or DEFAULT_COLOR
        if not _HEX_COLOR.match(color):
            self._add_error("color", "Color must be a hex value like #6B7280.")
        self.color = color
