"""
Shared fixtures for the Auth Service tests.

Environment overrides must be set before any auth_service module is imported,
since settings are read at import time.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_auth.db")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-access-secret")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from auth_backend.auth_backend.auth_service.main import app
from auth_backend.auth_backend.auth_service.db import Base, engine


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them before each test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture
def db_session():
    """Create a database session for testing."""
    session = Session(bind=engine)
    yield session
    session.close()


@pytest.fixture
def jane():
    return {
        "full_name": "Jane Doe",
        "phone_number": "+1555000111",
        "email": "jane@example.com",
        "password": "Secret123",
    }


@pytest.fixture
def registered(client, jane):
    """Register Jane and return the response body."""
    response = client.post("/auth/register", json=jane)
    assert response.status_code == 201
    return response.json()
