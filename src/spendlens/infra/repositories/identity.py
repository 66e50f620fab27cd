"""Identity provider backed by the Flask signed-cookie session."""

from __future__ import annotations

from typing import Optional

from flask import g, session

from ...models.user import User
from ..database import SessionFactory

SESSION_USER_KEY = "user_id"


class FlaskSessionIdentity:
    """Resolve the current user from the ``user_id`` stored in the session."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def current_user(self) -> Optional[User]:
        # Cache on the request context so a view resolves the user once.
        if "current_user" in g:
            return g.current_user

        user: Optional[User] = None
        user_id = session.get(SESSION_USER_KEY)
        if user_id is not None:
            with self.session_factory() as db:
                user = db.get(User, user_id)
                if user is not None:
                    db.expunge(user)
            if user is None:
                # Account removed while the cookie was still live.
                session.pop(SESSION_USER_KEY, None)
        g.current_user = user
        return user

    def sign_in(self, user: User) -> None:
        session.clear()
        session[SESSION_USER_KEY] = user.id
        g.current_user = user

    def sign_out(self) -> None:
        session.pop(SESSION_USER_KEY, None)
        g.pop("current_user", None)
