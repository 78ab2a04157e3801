"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient

from src.config import Settings
from src.database import Base, get_db
from src.main import create_app

TEST_PASSWORD = "testpass123"  # noqa: S105


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/user_accounts", "/user_accounts_test"
    )
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

test_settings = Settings(
    database_url=SQLALCHEMY_DATABASE_URL,
    jwt_secret="test-secret",  # noqa: S106
    environment="test",
)
app = create_app(test_settings)
engine = app.state.engine
TestingSessionLocal = app.state.session_factory


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

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
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def token_service():
    """The token service the test app verifies against."""
    return app.state.token_service


@pytest.fixture
def registration():
    """A valid registration body."""
    return {
        "email": "test@example.com",
        "password": TEST_PASSWORD,
        "UserName": "Test User",
        "phoneNumber": "+1234567890",
        "address": "123 Main St, City",
    }


@pytest.fixture
def auth_headers(client, registration):
    """Register and log in a user, and return auth headers with user info."""
    response = client.post("/register", json=registration)
    assert response.status_code == 201

    response = client.post(
        "/login", json={"email": registration["email"], "password": registration["password"]}
    )
    assert response.status_code == 200
    data = response.json()

    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["id"],
        email=registration["email"],
    )
