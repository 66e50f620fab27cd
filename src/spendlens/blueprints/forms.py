"""Shared form validation helpers.

Forms bind request data as strings, validate presence and type, and expose
typed values. When bound with ``partial=True`` (PATCH requests) only the keys
present in the payload are validated and returned.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, ClassVar, Iterable, Optional

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(slots=True)
class BaseForm:
    """Represents request input prior to validation."""

    FIELDS: ClassVar[tuple[str, ...]] = ()

    errors: dict[str, list[str]] = field(default_factory=dict, init=False)
    raw_data: dict[str, str] = field(default_factory=dict, init=False)
    partial: bool = field(default=False, init=False)
    malformed: bool = field(default=False, init=False)

    @classmethod
    def from_mapping(cls, data: Any, *, partial: bool = False):
        """Create a form populated from request data."""

        form = cls()
        form.partial = partial
        if isinstance(data, Mapping):
            form.load(data)
        else:
            # Valid JSON that is not an object (a list, a string, a number).
            form.malformed = True
        return form

    def load(self, data: Mapping[str, Any]) -> None:
        """Bind incoming mapping data to the form state."""

        self.raw_data = {}
        for key in self.FIELDS:
            if key not in data:
                continue
            value = data.get(key)
            if value is None:
                value_str = ""
            elif isinstance(value, bool):
                value_str = "true" if value else "false"
            elif isinstance(value, str):
                value_str = value
            else:
                value_str = str(value)
            self.raw_data[key] = value_str.strip()

    def validate(self) -> bool:
        """Run field validation and report whether the form is clean."""

        self.errors.clear()
        if self.malformed:
            self._add_error("body", "Expected a JSON object.")
            return False
        self.clean()
        return not self.errors

    def clean(self) -> None:  # pragma: no cover - overridden
        raise NotImplementedError

    def to_values(self) -> dict[str, Any]:
        """Typed values to persist; partial forms only include supplied keys."""

        keys: Iterable[str] = self.FIELDS
        if self.partial:
            keys = [key for key in self.FIELDS if key in self.raw_data]
        return {key: getattr(self, key) for key in keys}

    def _skip(self, key: str) -> bool:
        return self.partial and key not in self.raw_data

    def _add_error(self, field_name: str, message: str) -> None:
        """Accumulate validation errors for a specific field."""

        self.errors.setdefault(field_name, []).append(message)

    def _text(self, key: str, label: str, *, required: bool = True, max_length: int = 255):
        if self._skip(key):
            return None
        value = self.raw_data.get(key, "")
        if not value:
            if required:
                self._add_error(key, f"{label} is required.")
            return None
        if len(value) > max_length:
            self._add_error(key, f"{label} must be {max_length} characters or fewer.")
            return None
        return value

    def _amount(self, key: str, label: str, *, allow_negative: bool = False, default=None):
        if self._skip(key):
            return None
        raw = self.raw_data.get(key, "")
        if not raw:
            if default is not None:
                return default
            self._add_error(key, f"{label} is required.")
            return None
        try:
            value = float(raw)
        except (TypeError, ValueError):
            self._add_error(key, f"Enter a valid number for the {label.lower()}.")
            return None
        if value != value or value in (float("inf"), float("-inf")):
            self._add_error(key, f"Enter a valid number for the {label.lower()}.")
            return None
        if value < 0 and not allow_negative:
            self._add_error(key, f"{label} cannot be negative.")
            return None
        return round(value, 2)

    def _date(self, key: str, label: str, *, default: Optional[date] = None):
        if self._skip(key):
            return None
        raw = self.raw_data.get(key, "")
        if not raw:
            if default is not None:
                return default
            self._add_error(key, f"{label} is required.")
            return None
        try:
            return date.fromisoformat(raw)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(raw).date()
        except ValueError:
            self._add_error(key, "Enter a valid date (YYYY-MM-DD).")
            return None

    def _choice(self, key: str, label: str, choices: tuple[str, ...], *, default: str):
        if self._skip(key):
            return None
        raw = self.raw_data.get(key, "").lower()
        if not raw:
            return default
        if raw not in choices:
            self._add_error(key, f"{label} must be one of: {', '.join(choices)}.")
            return None
        return raw

    def _whole_number(
        self,
        key: str,
        label: str,
        *,
        required: bool = False,
        minimum: int = 1,
        maximum: Optional[int] = None,
        default: Optional[int] = None,
    ):
        if self._skip(key):
            return None
        raw = self.raw_data.get(key, "")
        if not raw:
            if default is not None:
                return default
            if required:
                self._add_error(key, f"{label} is required.")
            return None
        try:
            value = int(raw)
        except (TypeError, ValueError):
            self._add_error(key, f"{label} must be a whole number.")
            return None
        if value < minimum or (maximum is not None and value > maximum):
            bounds = f"between {minimum} and {maximum}" if maximum else f"at least {minimum}"
            self._add_error(key, f"{label} must be {bounds}.")
            return None
        return value

    def _flag(self, key: str, label: str, *, default: bool):
        if self._skip(key):
            return None
        raw = self.raw_data.get(key, "").lower()
        if not raw:
            return default
        if raw in _TRUE_VALUES:
            return True
        if raw in _FALSE_VALUES:
            return False
        self._add_error(key, f"{label} must be true or false.")
        return None
