"""Shared pytest fixtures.

Every test gets a fresh in-memory SQLite database. The API client overrides
``get_db`` so requests run against that database, and the ``admin_headers`` /
``user_headers`` fixtures hand out bearer tokens for freshly created accounts.
"""

import os

# Settings are read at import time, so the environment is set first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "local"
os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["LOG_LEVEL"] = "WARNING"

from collections.abc import Generator  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import Engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from locals_api.auth import User, UserCreate, UserRole, create_user  # noqa: E402
from locals_api.core.db import build_engine, get_db, init_db  # noqa: E402
from locals_api.core.security import create_access_token  # noqa: E402
from locals_api.main import app  # noqa: E402

API = "/api/v1/locals"


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=test_engine)
    yield test_engine
    SQLModel.metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session, None, None]:
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture
def client(engine: Engine) -> Generator[TestClient, None, None]:
    """API client whose requests each open their own session on ``engine``."""

    def override_get_db() -> Generator[Session, None, None]:
        with Session(engine) as db_session:
            yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(
    session: Session,
    email: str,
    role: UserRole = UserRole.USER,
    password: str = "password123",
) -> User:
    return create_user(
        session=session,
        user_create=UserCreate(email=email, password=password, role=role),
    )


def bearer(user: User) -> dict[str, str]:
    token, _ = create_access_token(user.id, email=user.email, role=user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_user(session: Session) -> User:
    return make_user(session, "admin@example.com", UserRole.ADMIN)


@pytest.fixture
def regular_user(session: Session) -> User:
    return make_user(session, "user@example.com")


@pytest.fixture
def admin_headers(admin_user: User) -> dict[str, str]:
    return bearer(admin_user)


@pytest.fixture
def user_headers(regular_user: User) -> dict[str, str]:
    return bearer(regular_user)


@pytest.fixture
def product_payload():
    """Factory for valid product creation payloads."""

    def _payload(code: str = "P1", **overrides):
        payload = {
            "name": f"Product {code}",
            "code": code,
            "unit": "pcs",
            "in_price": 10.0,
            "price": 12.5,
            "vat": 25.0,
            "currency": "SEK",
            "stock": 3,
            "description": None,
        }
        payload.update(overrides)
        return payload

    return _payload
