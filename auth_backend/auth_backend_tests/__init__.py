"""
Tests for the auth_service package.

- HTTP flows through FastAPI's TestClient (`test_auth.py`, `test_health.py`)
- Service and store behaviour below the HTTP layer (`test_service.py`)
- Hashing, tokens and the response envelope in isolation
"""
