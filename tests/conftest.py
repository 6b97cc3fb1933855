"""Pytest fixtures for testing"""

import os

# Point settings at SQLite before the application modules read them
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

import pytest
from datetime import datetime
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from finance_tracker.api.main import create_app
from finance_tracker.api.dependencies import get_now
from finance_tracker.infrastructure.database.models import Base
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.domain.models import Budget, Transaction


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed reference time for month-window aggregations
NOW = datetime(2025, 3, 15, 12, 0, 0)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and a pinned clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: NOW
    return TestClient(app)


def _txn(amount: float, when: datetime, category: str = "food", description: str = "Test") -> Transaction:
    return Transaction(
        id=f"{category}-{when.isoformat()}-{amount}",
        amount=amount,
        date=when,
        description=description,
        category=category,
    )


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """Expenses spread over the current and previous months, plus one income entry"""
    return [
        _txn(-120.0, datetime(2025, 3, 2), "food", "Groceries"),
        _txn(-30.0, datetime(2025, 3, 10), "food", "Lunch"),
        _txn(-50.0, datetime(2025, 3, 5), "transportation", "Fuel"),
        _txn(-200.0, datetime(2025, 2, 14), "shopping", "Jacket"),
        _txn(-80.0, datetime(2025, 2, 20), "food", "Restaurant"),
        _txn(2500.0, datetime(2025, 3, 1), "other", "Salary"),
    ]


@pytest.fixture
def sample_budgets() -> list[Budget]:
    return [
        Budget(category="food", amount=200.0),
        Budget(category="transportation", amount=100.0),
    ]
