"""Shared fixtures: a throwaway SQLite database and helpers to seed it."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "trading_rules_compliance_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.application.use_cases.users import create_user  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.models import TradeModel  # noqa: E402
from app.infrastructure.security import create_user_token  # noqa: E402
from main import create_app  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Start every test from empty tables."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_user(session):
    """Return a factory registering users through the regular use case."""

    def _make(email: str = "trader@example.com", *, role: str = "trader", **fields):
        return create_user(session, email=email, role_alias=role, **fields)

    return _make


@pytest.fixture()
def make_trade(session):
    """Return a factory inserting trades straight into the trade table."""

    def _make(user_id: int, **fields) -> int:
        model = TradeModel(user_id=user_id, **fields)
        session.add(model)
        session.commit()
        session.refresh(model)
        return model.id

    return _make


@pytest.fixture()
def auth_headers():
    """Return a helper building bearer headers for a user."""

    def _headers(user) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_user_token(user.email)}"}

    return _headers


@pytest.fixture()
def client():
    with TestClient(create_app()) as test_client:
        yield test_client
