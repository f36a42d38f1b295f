"""Tests for the response envelope."""
from datetime import datetime, timezone

from auth_backend.auth_backend.auth_service import responses


def test_success_envelope():
    body = responses.success({"id": "u1"}, "Done")
    assert body["status"] == "SUCCESS"
    assert body["message"] == "Done"
    assert body["payload"] == {"data": {"id": "u1"}}
    # ISO 8601 with milliseconds, e.g. 2025-09-19T15:30:35.721Z
    parsed = datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))
    assert parsed.tzinfo is not None


def test_success_default_message():
    assert responses.success([])["message"] == "Request completed successfully"


def test_error_envelope():
    body = responses.error("Nope", code="INVALID_CREDENTIALS", details={"statusCode": 401})
    assert body["status"] == "ERROR"
    assert body["message"] == "Nope"
    assert body["payload"] == {"error": {"code": "INVALID_CREDENTIALS", "details": {"status_code": 401}}}


def test_error_omits_empty_parts():
    assert responses.error("Nope")["payload"] == {"error": {}}


def test_payload_keys_are_snake_cased():
    data = {
        "user": {"fullName": "Jane Doe", "phoneNumber": "+1555000111", "createdAt": datetime(2025, 1, 2, tzinfo=timezone.utc)},
        "tokens": [{"accessToken": "a", "refresh_token": "r"}],
    }
    body = responses.success(data)
    user = body["payload"]["data"]["user"]
    assert user == {
        "full_name": "Jane Doe",
        "phone_number": "+1555000111",
        "created_at": "2025-01-02T00:00:00+00:00",
    }
    assert body["payload"]["data"]["tokens"] == [{"access_token": "a", "refresh_token": "r"}]


def test_to_snake_case():
    assert responses.to_snake_case("fullName") == "full_name"
    assert responses.to_snake_case("userID") == "user_id"
    assert responses.to_snake_case("already_snake") == "already_snake"
    assert responses.to_snake_case("HTTPStatusCode") == "http_status_code"


def test_auth_messages():
    assert responses.auth_success({}, "register")["message"] == "User registered successfully"
    assert responses.auth_success({}, "logout")["message"] == "Logout successful"
    assert responses.health_success({})["message"] == "Health check completed successfully"
