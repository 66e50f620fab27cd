"""Identity provider protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.user import User


class IdentityProvider(Protocol):
    """Yields the signed-in user for the current request, if any."""

    def current_user(self) -> Optional[User]:
        ...
