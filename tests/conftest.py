"""Pytest configuration and shared fixtures for SpendLens tests.

This module provides database fixtures, record factories, a configured Flask
app and helpers for building unsaved model instances for the pure analytics
tests.
"""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from spendlens import create_app
from spendlens.extensions import get_engine
from spendlens.infra.database import create_session_factory
from spendlens.infra.repositories import SQLModelRecordStore
from spendlens.models import Expense, ExpenseCategory, Income, User

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(
        f"sqlite:///{db_path}", echo=False, connect_args={"check_same_thread": False}
    )
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one the application builds."""

    return create_session_factory(db_engine)


@pytest.fixture
def user(session_factory) -> User:
    """Create a default user for scoping data."""

    with session_factory() as session:
        row = User(email="tester@example.com", display_name="Tester", password_hash="dummy")
        session.add(row)
        session.commit()
        session.refresh(row)
        session.expunge(row)
    return row


@pytest.fixture
def other_user(session_factory) -> User:
    with session_factory() as session:
        row = User(email="other@example.com", display_name="Other", password_hash="dummy")
        session.add(row)
        session.commit()
        session.refresh(row)
        session.expunge(row)
    return row


@pytest.fixture
def store(session_factory) -> SQLModelRecordStore:
    return SQLModelRecordStore(session_factory)


# =============================================================================
# Record Factories
# =============================================================================


@pytest.fixture
def category_factory(store, user):
    """Factory for persisted expense categories."""

    def _create(name: str = "Groceries", icon: str = "🛒", color: str = "#10B981", owner=None):
        owner = owner or user
        return store.insert(
            "expense_categories", {"name": name, "icon": icon, "color": color}, user_id=owner.id
        )

    return _create


@pytest.fixture
def expense_factory(store, user):
    """Factory for persisted expenses.

    Args:
        name: Expense name
        amount: Non-negative amount
        expense_date: Date of the spend (defaults to today)
    """

    def _create(
        name: str = "Test expense",
        amount: float = 10.0,
        expense_date: date | None = None,
        category_id: int | None = None,
        budget_id: int | None = None,
        owner=None,
    ):
        owner = owner or user
        return store.insert(
            "expenses",
            {
                "name": name,
                "amount": amount,
                "expense_date": expense_date or date.today(),
                "category_id": category_id,
                "budget_id": budget_id,
            },
            user_id=owner.id,
        )

    return _create


@pytest.fixture
def income_factory(store, user):
    def _create(
        name: str = "Salary",
        amount: float = 1000.0,
        frequency: str = "monthly",
        income_date: date | None = None,
        owner=None,
    ):
        owner = owner or user
        return store.insert(
            "income",
            {
                "name": name,
                "amount": amount,
                "frequency": frequency,
                "income_date": income_date or date.today(),
            },
            user_id=owner.id,
        )

    return _create


@pytest.fixture
def budget_factory(store, user):
    def _create(
        name: str = "Groceries budget",
        budgeted_amount: float = 300.0,
        month: int | None = None,
        year: int | None = None,
        category_id: int | None = None,
        owner=None,
    ):
        today = date.today()
        owner = owner or user
        return store.insert(
            "monthly_budgets",
            {
                "name": name,
                "budgeted_amount": budgeted_amount,
                "month": month or today.month,
                "year": year or today.year,
                "category_id": category_id,
            },
            user_id=owner.id,
        )

    return _create


@pytest.fixture
def account_factory(store, user):
    def _create(
        name: str = "Checking",
        account_type: str = "checking",
        balance: float = 0.0,
        is_active: bool = True,
        owner=None,
    ):
        owner = owner or user
        return store.insert(
            "accounts",
            {
                "name": name,
                "account_type": account_type,
                "balance": balance,
                "is_active": is_active,
            },
            user_id=owner.id,
        )

    return _create


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def app(tmp_path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SPENDLENS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SPENDLENS_DATABASE_URL", f"sqlite:///{tmp_path / 'app.db'}")
    monkeypatch.setenv("SPENDLENS_SECRET_KEY", "test-secret")
    app = create_app("testing")
    yield app
    with app.app_context():
        get_engine().dispose()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def auth_client(client):
    """Test client signed in as a freshly created user."""

    response = client.post(
        "/auth/signup",
        json={"email": "owner@example.com", "password": "secret123", "display_name": "Owner"},
    )
    assert response.status_code == 201
    return client


# =============================================================================
# Helper Utilities
# =============================================================================


def make_expense(
    name: str,
    amount: float,
    expense_date: date,
    category_id: int | None = None,
) -> Expense:
    """Build an unsaved expense for pure analytics tests."""

    return Expense(
        user_id=1,
        name=name,
        amount=amount,
        expense_date=expense_date,
        category_id=category_id,
    )


def make_category(category_id: int, name: str, icon: str = "🛒", color: str = "#10B981"):
    return ExpenseCategory(id=category_id, user_id=1, name=name, icon=icon, color=color)


def make_income(amount: float, frequency: str) -> Income:
    return Income(user_id=1, name="Pay", amount=amount, frequency=frequency, income_date=date.today())


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance (default one cent)."""
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
