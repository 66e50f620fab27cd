"""Database and extension wiring for SpendLens."""

from __future__ import annotations

from contextlib import contextmanager
from functools import wraps
from typing import Callable, Iterator, TypeVar

from flask import Flask, current_app, jsonify
from sqlmodel import Session

from .config import BaseConfig
from .domain.repositories import IdentityProvider
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import FlaskSessionIdentity, SQLModelRecordStore
from .models.user import User

F = TypeVar("F", bound=Callable)

_EXTENSION_KEY = "spendlens"


def init_db(app: Flask) -> None:
    """Initialize the engine, store and identity provider for the app."""

    config: BaseConfig = app.config["SPENDLENS_CONFIG"]
    engine, session_factory = bootstrap_database(config)
    app.extensions[_EXTENSION_KEY] = {
        "engine": engine,
        "session_factory": session_factory,
        "store": SQLModelRecordStore(session_factory),
        "identity": FlaskSessionIdentity(session_factory),
    }


def _state() -> dict:
    try:
        return current_app.extensions[_EXTENSION_KEY]
    except KeyError:  # pragma: no cover - exercised only on misconfigured apps
        raise RuntimeError("Database engine not initialized") from None


def get_engine():
    """Return the initialized SQLModel engine."""
    return _state()["engine"]


def get_session_factory() -> SessionFactory:
    return _state()["session_factory"]


def get_store() -> SQLModelRecordStore:
    return _state()["store"]


def get_identity() -> FlaskSessionIdentity:
    return _state()["identity"]


@contextmanager
def session_scope() -> Iterator[Session]:
    """Provide a transactional scope around operations."""

    with get_session_factory()() as session:
        yield session


def current_user() -> User | None:
    identity: IdentityProvider = get_identity()
    return identity.current_user()


def current_user_id() -> int:
    """Return the signed-in user's id; views must be wrapped in login_required."""

    user = current_user()
    if user is None or user.id is None:
        raise RuntimeError("User is not authenticated")
    return user.id


def login_required(view: F) -> F:
    """Reject requests without a signed-in user with a 401 JSON body."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            return jsonify({"error": "Authentication required."}), 401
        return view(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
