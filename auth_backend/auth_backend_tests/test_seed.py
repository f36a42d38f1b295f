"""Tests for the sample-user seeder."""
from auth_backend.auth_backend.auth_service.auth import verify_password
from auth_backend.auth_backend.auth_service.models import User
from auth_backend.auth_backend.auth_service.seed import DEFAULT_USERS, seed_users


def test_seed_creates_default_users(db_session):
    created = seed_users(db_session)
    assert created == [u["email"] for u in DEFAULT_USERS]

    john = db_session.query(User).filter(User.email == "john.doe@example.com").one()
    assert john.full_name == "John Doe"
    assert verify_password("password123", john.password)


def test_seed_skips_existing(db_session):
    seed_users(db_session)
    assert seed_users(db_session) == []
    assert db_session.query(User).count() == len(DEFAULT_USERS)


def test_seeded_user_can_log_in(client, db_session):
    seed_users(db_session)
    response = client.post("/auth/login", json={"email": "admin@example.com", "password": "admin123"})
    assert response.status_code == 200
    assert response.json()["payload"]["data"]["user"]["full_name"] == "Admin User"
