"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from finance_tracker.api.main import create_app
from finance_tracker.api.dependencies import get_today
from finance_tracker.infrastructure.database.models import Base
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import (
    CardRepository,
    CategoryRepository,
    TransactionRepository,
)
from finance_tracker.domain.models import Card, CardBillingConfig, Category


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Monday; closing day 4 puts this inside the invoice due 2025-11
TODAY = date(2025, 10, 20)
USER_ID = "user_1"


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
    """Create FastAPI test client with test database and a fixed "today" """
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def seeded(db: Session) -> Dict[str, str]:
    """
    One card closing on the 4th (due on the 10th) with purchases around
    the October 2025 closing. Oct 4, 2025 is a Saturday so the card
    effectively closes on Monday Oct 6.
    """
    card = CardRepository(db).create_card(
        user_id=USER_ID,
        name="Nubank",
        limit_cents=500_000,
        closing_day=4,
        due_day=10,
        color="#8A05BE",
    )
    food = CategoryRepository(db).create_category(
        user_id=USER_ID, name="Alimentação", icon="🍔", color="#F59E0B", budget_cents=100_000
    )
    txns = TransactionRepository(db)
    txns.create_transaction(USER_ID, 1_000, date(2025, 9, 3), "Padaria", card_id=card.id)
    txns.create_transaction(USER_ID, 10_000, date(2025, 9, 4), "Mercado", card_id=card.id, category_id=food.id, paid_by="Ana")
    txns.create_transaction(USER_ID, 5_000, date(2025, 10, 4), "Cinema", card_id=card.id, paid_by="Bruno")
    txns.create_transaction(USER_ID, 7_000, date(2025, 10, 6), "Farmácia", card_id=card.id, paid_by="Ana")
    txns.create_transaction(USER_ID, 2_500, date(2025, 10, 15), "PIX almoço", paid_by="Ana", payment_method="PIX")
    db.commit()

    return {"card_id": str(card.id), "category_id": str(food.id)}


@pytest.fixture
def nubank() -> Card:
    """Domain card closing on the 4th, due on the 10th"""
    return Card(
        card_id="card_nubank",
        name="Nubank",
        limit_cents=500_000,
        billing=CardBillingConfig(closing_day=4, due_day=10),
        color="#8A05BE",
    )


@pytest.fixture
def food() -> Category:
    return Category(
        category_id="cat_food",
        name="Alimentação",
        icon="🍔",
        color="#F59E0B",
        budget_cents=100_000,
    )
