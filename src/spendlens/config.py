"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Interpret environment variable values as positive integers."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a whole number, got {value!r}") from exc
    if parsed <= 0:
        raise ValueError(f"{name} must be greater than zero")
    return parsed


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "SpendLens"
    DB_FILENAME = "spendlens.db"
    DEBUG = False
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("SPENDLENS_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("SPENDLENS_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("SPENDLENS_DATABASE_URL", self._build_sqlite_url())
        self.ANALYSIS_WINDOW_DAYS = _env_int("SPENDLENS_ANALYSIS_WINDOW_DAYS", 90)
        self.FETCH_WORKERS = _env_int("SPENDLENS_FETCH_WORKERS", 4)
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("SPENDLENS_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("SPENDLENS_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            # Budget spend lookups fan out over a thread pool.
            return {"connect_args": {"check_same_thread": False}}
        return {}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test suite."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        if "SPENDLENS_DATABASE_URL" not in os.environ:
            self.DATABASE_URL = "sqlite://"
            # One shared in-memory connection; keep budget lookups sequential.
            self.FETCH_WORKERS = 1

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        options = super().sqlalchemy_engine_options()
        if self.DATABASE_URL == "sqlite://":
            from sqlalchemy.pool import StaticPool

            # Share the single in-memory connection across sessions and threads.
            options["poolclass"] = StaticPool
        return options
