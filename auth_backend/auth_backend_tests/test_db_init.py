"""Tests for database initialization."""
from sqlalchemy import inspect, create_engine
import os
import tempfile

from auth_backend.auth_backend.auth_service.db import engine, init_db
from auth_backend.auth_backend.auth_service.models import User, UserDetails
from auth_backend.auth_backend.auth_service.store import UserStore


def test_init_db_creates_user_tables():
    """init_db creates users and user_details with the expected columns."""
    with tempfile.NamedTemporaryFile(delete=False, suffix='.db') as tmp:
        tmp_db_path = tmp.name

    import auth_backend.auth_backend.auth_service.db as db_module
    original_engine = db_module.engine
    test_engine = create_engine(f"sqlite:///{tmp_db_path}", connect_args={"check_same_thread": False})
    try:
        # Temporarily override the engine in the db module
        db_module.engine = test_engine
        init_db()

        inspector = inspect(test_engine)
        tables = inspector.get_table_names()
        assert 'users' in tables
        assert 'user_details' in tables

        users = {col['name']: col for col in inspector.get_columns('users')}
        for col_name in ['id', 'email', 'phone_number', 'password', 'created_at', 'updated_at']:
            assert col_name in users, f"Column {col_name} should exist in users table"
            assert users[col_name]['nullable'] is False, f"{col_name} should not be nullable"

        details = {col['name'] for col in inspector.get_columns('user_details')}
        assert {'user_id', 'full_name'} <= details

        unique_columns = {
            tuple(idx['column_names'])
            for idx in inspector.get_indexes('users') if idx['unique']
        }
        assert ('email',) in unique_columns
        assert ('phone_number',) in unique_columns

        fks = inspector.get_foreign_keys('user_details')
        assert fks[0]['referred_table'] == 'users'
    finally:
        db_module.engine = original_engine
        test_engine.dispose()
        os.unlink(tmp_db_path)


def test_init_db_is_idempotent(db_session):
    """Running init_db against a populated database leaves schema and rows alone."""
    init_db()
    UserStore(db_session).create_user_with_profile(
        email="jane@example.com",
        phone_number="+1555000111",
        password_hash="not-a-real-digest",
        full_name="Jane Doe",
    )
    tables_before = sorted(inspect(engine).get_table_names())

    init_db()
    init_db()

    assert sorted(inspect(engine).get_table_names()) == tables_before
    assert {"users", "user_details"} <= set(tables_before)
    db_session.expire_all()
    assert db_session.query(User).count() == 1
    assert db_session.query(UserDetails).count() == 1
    assert db_session.query(User).one().full_name == "Jane Doe"
