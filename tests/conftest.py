from __future__ import annotations

import os

os.environ["APP_ENV"] = "test"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from partsdesk.api import dependencies  # noqa: E402
from partsdesk.api.main import app  # noqa: E402
from partsdesk.core.security import create_access_token  # noqa: E402
from partsdesk.db import session as db_session_module  # noqa: E402
from partsdesk.db.base_class import Base  # noqa: E402
from partsdesk.db.session import SessionLocal  # noqa: E402
from partsdesk.services.transfer_store import JsonTransferStore  # noqa: E402

TEST_DATABASE_URL = "sqlite:///:memory:"

test_engine = create_engine(
    TEST_DATABASE_URL,
    future=True,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Ensure application code uses the test engine
db_session_module.engine = test_engine  # type: ignore[assignment]
SessionLocal.configure(bind=test_engine)

DEFAULT_CLAIMS = {
    "userId": "user-1",
    "email": "clerk@example.com",
    "name": "Stock Clerk",
    "role": "admin",
}


@pytest.fixture(autouse=True)
def _reset_database_state():
    """Ensure each test sees a fresh database schema."""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield


@pytest.fixture(autouse=True)
def _reset_dependency_overrides():
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Provide a database session bound to the test engine."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    finally:
        session.close()


@pytest.fixture
def client():
    """Provide a FastAPI TestClient bound to the application."""
    return TestClient(app)


@pytest.fixture
def make_token():
    """Issue a signed token; keyword arguments override claims."""

    def _make(expires_minutes: int = 60, secret: str | None = None, **claims) -> str:
        payload = {**DEFAULT_CLAIMS, **claims}
        return create_access_token(payload, expires_minutes=expires_minutes, secret=secret)

    return _make


@pytest.fixture
def auth_headers(make_token):
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def transfer_store(tmp_path):
    """Point the stock transfer routes at a file under ``tmp_path``."""
    store = JsonTransferStore(tmp_path / "data" / "stock-transfers.json")
    app.dependency_overrides[dependencies.get_transfer_store] = lambda: store
    return store
