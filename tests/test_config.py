"""Configuration tests."""

from __future__ import annotations

import pytest

from spendlens import config as config_module
from spendlens.config import BaseConfig


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SPENDLENS_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("SPENDLENS_DATABASE_URL", raising=False)
    monkeypatch.delenv("SPENDLENS_ANALYSIS_WINDOW_DAYS", raising=False)
    monkeypatch.delenv("SPENDLENS_FETCH_WORKERS", raising=False)
    return tmp_path


def test_defaults(data_dir):
    config = BaseConfig()

    assert config.DATABASE_URL == f"sqlite:///{data_dir.resolve() / 'spendlens.db'}"
    assert config.ANALYSIS_WINDOW_DAYS == 90
    assert config.FETCH_WORKERS == 4
    assert config.sqlalchemy_engine_options() == {"connect_args": {"check_same_thread": False}}


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SPENDLENS_ANALYSIS_WINDOW_DAYS", "30")
    monkeypatch.setenv("SPENDLENS_FETCH_WORKERS", "2")

    config = BaseConfig()

    assert config.ANALYSIS_WINDOW_DAYS == 30
    assert config.FETCH_WORKERS == 2


@pytest.mark.parametrize("value", ["0", "-3", "many"])
def test_invalid_integers_rejected(monkeypatch, value):
    monkeypatch.setenv("SPENDLENS_FETCH_WORKERS", value)

    with pytest.raises(ValueError):
        BaseConfig()


def test_secret_required_outside_dev_mode(monkeypatch):
    monkeypatch.setenv("SPENDLENS_DEV_MODE", "false")
    monkeypatch.delenv("SPENDLENS_SECRET_KEY", raising=False)

    with pytest.raises(ValueError, match="SPENDLENS_SECRET_KEY"):
        BaseConfig()


def test_test_config_uses_shared_in_memory_database():
    config = config_module.TestConfig()

    assert config.TESTING is True
    assert config.DATABASE_URL == "sqlite://"
    assert config.FETCH_WORKERS == 1
    assert "poolclass" in config.sqlalchemy_engine_options()
