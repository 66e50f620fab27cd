"""Sign-in, sign-up and password change forms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from ..forms import BaseForm


@dataclass(slots=True)
class LoginForm(BaseForm):
    FIELDS: ClassVar[tuple[str, ...]] = ("email", "password")

    email: Optional[str] = None
    password: Optional[str] = None

    def clean(self) -> None:
        self.email = self._text("email", "Email")
        self.password = self._text("password", "Password")


@dataclass(slots=True)
class SignUpForm(BaseForm):
    FIELDS: ClassVar[tuple[str, ...]] = ("email", "password", "display_name")

    email: Optional[str] = None
    password: Optional[str] = None
    display_name: Optional[str] = None

    def clean(self) -> None:
        self.email = self._text("email", "Email")
        self.password = self._text("password", "Password")
        self.display_name = self._text(
            "display_name", "Display name", required=False, max_length=128
        )


@dataclass(slots=True)
class PasswordChangeForm(BaseForm):
    FIELDS: ClassVar[tuple[str, ...]] = ("current_password", "new_password", "confirm_password")

    current_password: Optional[str] = None
    new_password: Optional[str] = None
    confirm_password: Optional[str] = None

    def clean(self) -> None:
        self.current_password = self._text("current_password", "Current password")
        self.new_password = self._text("new_password", "New password")
        self.confirm_password = self._text("confirm_password", "Password confirmation")
        if (
            self.new_password
            and self.confirm_password
            and self.new_password != self.confirm_password
        ):
            self._add_error("confirm_password", "New passwords do not match.")
