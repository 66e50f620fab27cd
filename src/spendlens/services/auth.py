"""Authentication and user management services."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlmodel import select

from ..infra.database import SessionFactory
from ..logging_config import get_logger
from ..models.user import User

logger = get_logger(__name__)

_hasher = PasswordHasher()
MIN_PASSWORD_LENGTH = 6


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _check_password(password: str) -> None:
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")


def get_user_by_email(email: str, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by email address."""
    email = _normalize_email(email)
    with session_factory() as session:
        user = session.exec(select(User).where(User.email == email)).first()
        if user:
            session.expunge(user)
        return user


def any_users_exist(session_factory: SessionFactory) -> bool:
    """Determine if any users exist for first-time setup."""
    with session_factory() as session:
        return session.exec(select(User.id)).first() is not None


def create_user(
    *,
    email: str,
    password: str,
    display_name: str = "",
    session_factory: SessionFactory,
) -> User:
    """Create a new user with hashed password."""

    email = _normalize_email(email)
    if not email or "@" not in email:
        raise ValueError("A valid email address is required")
    _check_password(password)
    password_hash = _hasher.hash(password)
    with session_factory() as session:
        existing = session.exec(select(User).where(User.email == email)).first()
        if existing:
            raise ValueError("An account with this email already exists")
        user = User(
            email=email,
            display_name=(display_name or "").strip() or email.split("@", 1)[0],
            password_hash=password_hash,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
    logger.info("User created", extra={"user_id": user.id})
    return user


def authenticate(
    *,
    email: str,
    password: str,
    session_factory: SessionFactory,
) -> Optional[User]:
    """Validate credentials and return the user when correct."""

    email = _normalize_email(email)
    if not email:
        return None
    with session_factory() as session:
        user = session.exec(select(User).where(User.email == email)).first()
        if user is None:
            return None
        try:
            _hasher.verify(user.password_hash, password)
        except (VerifyMismatchError, InvalidHash, VerificationError):
            logger.warning("Failed sign-in attempt", extra={"user_id": user.id})
            return None

        user.last_login = datetime.now(timezone.utc)
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user


def change_password(
    *,
    user_id: int,
    current_password: str,
    new_password: str,
    confirm_password: str,
    session_factory: SessionFactory,
) -> User:
    """Replace a user's password after verifying the current one."""

    if new_password != confirm_password:
        raise ValueError("New passwords do not match")
    _check_password(new_password)
    with session_factory() as session:
        user = session.get(User, user_id)
        if user is None:
            raise ValueError("User not found")
        try:
            _hasher.verify(user.password_hash, current_password)
        except (VerifyMismatchError, InvalidHash, VerificationError):
            raise ValueError("Current password is incorrect") from None
        user.password_hash = _hasher.hash(new_password)
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
    logger.info("Password changed", extra={"user_id": user_id})
    return user
