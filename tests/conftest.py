"""Pytest fixtures and configuration for noteshelf tests."""

import os

# Must be set before noteshelf modules read their configuration at import time.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "noteshelf-test-secret-key-0123456789abcdef"
os.environ["JWT_EXPIRATION_HOURS"] = "24"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from noteshelf.database.database import Base
from noteshelf.database import models  # noqa: F401
from noteshelf.database.note_repository import NoteRepository
from noteshelf.database.user_repository import UserRepository


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def user_repository(db_session: Session):
    return UserRepository(db_session)


@pytest.fixture
def note_repository(db_session: Session):
    return NoteRepository(db_session)


@pytest.fixture
def alice(user_repository):
    """A stored user (hash is a placeholder; repository tests never verify it)."""
    return user_repository.create(name="Alice", email="alice@example.com", password_hash="not-a-real-hash")


@pytest.fixture
def bob(user_repository):
    return user_repository.create(name="Bob", email="bob@example.com", password_hash="not-a-real-hash")


@pytest.fixture
def test_client(db_session: Session):
    """Create a FastAPI test client with overridden database dependency."""
    from noteshelf.api.app import app
    from noteshelf.database.database import get_db

    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db

    client = TestClient(app)
    try:
        yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def register(test_client):
    """Register a user through the API and return the response JSON."""
    def _register(name="Ann", email="ann@x.com", password="secret1"):
        response = test_client.post(
            "/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _register


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def ann_headers(register):
    return bearer(register()["token"])


@pytest.fixture
def bob_headers(register):
    return bearer(register(name="Bob", email="bob@x.com", password="secret2")["token"])
