"""Pytest configuration and shared fixtures for finance tracker tests.

Every test gets its own temporary SQLite database, so engines and
repositories can be exercised without touching the real app database.
"""

from __future__ import annotations

import tempfile
import uuid
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

# Import all models to ensure they're registered with SQLModel metadata
from finance_tracker.models import Category, Transaction, TransactionType, User  # noqa: F401
from finance_tracker.infra.database import create_session_factory
from finance_tracker.services.categories import CategoryInput, create_category
from finance_tracker.services.ledger_service import (
    LedgerEntry,
    TransactionInput,
    create_transaction,
)
from finance_tracker.services.store import LedgerStore
from finance_tracker.services.users import UserInput, create_user

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to the test database
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
    """Session factory matching the one the application wires up."""

    return create_session_factory(db_engine)


@pytest.fixture(scope="function")
def store(session_factory) -> LedgerStore:
    return LedgerStore.from_session_factory(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def user_factory(store):
    """Factory for creating users through the user service.

    Returns:
        Callable: Function that creates and persists User instances
    """

    def _create_user(
        email: str | None = None,
        first_name: str = "Test",
        last_name: str = "User",
    ) -> User:
        email = email or f"user-{uuid.uuid4().hex[:8]}@example.com"
        return create_user(
            store, UserInput(email=email, first_name=first_name, last_name=last_name)
        )

    return _create_user


@pytest.fixture
def user(user_factory) -> User:
    """Default user for scoping data."""

    return user_factory(email="tester@example.com")


@pytest.fixture
def category_factory(store, user):
    """Factory for creating owned categories.

    Returns:
        Callable: Function that creates and persists Category instances
    """

    def _create_category(
        name: str = "Test Category",
        owner: User | None = None,
        color: str = "#FF5733",
    ) -> Category:
        owner = owner or user
        return create_category(store, owner.id, CategoryInput(name=name, color=color))

    return _create_category


@pytest.fixture
def default_category_factory(store):
    """Factory for shared default categories, inserted directly into the store."""

    def _create_default(name: str = "Shared") -> Category:
        return store.categories.create(Category.shared(name=name))

    return _create_default


@pytest.fixture
def transaction_factory(store, user, category_factory):
    """Factory for creating transactions through the ledger.

    Returns:
        Callable: Function that creates and persists transactions
    """

    def _create_transaction(
        amount: str | Decimal = "10.00",
        txn_type: TransactionType = TransactionType.EXPENSE,
        transaction_at: datetime | None = None,
        category: Category | None = None,
        notes: str | None = None,
        owner: User | None = None,
    ) -> LedgerEntry:
        owner = owner or user
        category = category or category_factory(name=f"Cat {uuid.uuid4().hex[:6]}", owner=owner)
        return create_transaction(
            store,
            owner.id,
            TransactionInput(
                type=txn_type,
                amount=Decimal(str(amount)),
                transaction_at=transaction_at or datetime(2024, 1, 1, 12, 0),
                category_id=category.id,
                notes=notes,
            ),
        )

    return _create_transaction


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture()
def app(tmp_path, monkeypatch: pytest.MonkeyPatch):
    db_path = tmp_path / "api.db"
    monkeypatch.setenv("FINANCE_TRACKER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("FINANCE_TRACKER_DATABASE_URL", f"sqlite:///{db_path}")
    monkeypatch.delenv("FINANCE_TRACKER_SEED_DEFAULTS", raising=False)

    from finance_tracker import create_app

    app = create_app("testing")
    yield app
    app.extensions["finance_tracker"]["engine"].dispose()


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client
