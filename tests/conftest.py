"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from src.config import get_settings
from src.database import Base, build_engine, get_db
from src.main import app


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and credentials."""

    def __init__(
        self, *args, user_id: int | None = None, username: str = "", email: str = "", **kwargs
    ):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.username = username
        self.email = email


TEST_PASSWORD = "testpass123"

# PostgreSQL when TEST_DATABASE_URL is set (Docker), SQLite locally
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")

engine = build_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    from src import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override.

    The base URL is https so the Secure session cookie is stored and sent back.
    """

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, base_url="https://testserver") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def override_settings(client):
    """Swap settings for the current test, e.g. ``override_settings(auth_strategy="token")``."""

    def _override(**changes):
        settings = get_settings().model_copy(update=changes)
        app.dependency_overrides[get_settings] = lambda: settings
        return settings

    return _override


def register_and_login(
    client, username: str, email: str, password: str = TEST_PASSWORD
) -> AuthHeaders:
    """Register a user and return bearer headers carrying their session id or token."""
    response = client.post(
        "/auth/register",
        json={"username": username, "email": email, "password": password},
    )
    assert response.status_code == 201
    user_id = response.json()["id"]

    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    credential = response.json().get("token") or response.cookies.get("session_id")
    assert credential

    # Tests authenticate explicitly through headers
    client.cookies.clear()
    return AuthHeaders(
        {"Authorization": f"Bearer {credential}"},
        user_id=user_id,
        username=username,
        email=email,
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register_and_login(client, "testuser", "test@example.com")


@pytest.fixture
def other_auth_headers(client):
    """A second, independent user."""
    return register_and_login(client, "otheruser", "other@example.com")


@pytest.fixture
def make_user(client):
    """Factory fixture: ``make_user("name", "name@example.com")`` returns auth headers."""

    def _make_user(username: str, email: str, password: str = TEST_PASSWORD) -> AuthHeaders:
        return register_and_login(client, username, email, password)

    return _make_user
