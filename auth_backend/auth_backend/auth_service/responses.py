"""
Standard response envelope.

Every body leaving the API has the shape::

    {"status": "SUCCESS" | "ERROR", "message": str, "timestamp": str,
     "payload": {"data": ...} | {"error": {"code": ..., "details": ...}}}

Key naming is normalized to snake_case here and nowhere else.
"""
from datetime import datetime, timezone
from typing import Any, Optional
import re

from fastapi.encoders import jsonable_encoder

SUCCESS = "SUCCESS"
ERROR = "ERROR"

AUTH_MESSAGES = {
    "register": "User registered successfully",
    "login": "Login successful",
    "refresh": "Token refreshed successfully",
    "profile": "Profile retrieved successfully",
    "logout": "Logout successful",
}

_FIRST_CAP = re.compile(r"(.)([A-Z][a-z]+)")
_ALL_CAP = re.compile(r"([a-z0-9])([A-Z])")


def to_snake_case(name: str) -> str:
    """``fullName`` -> ``full_name``, ``userID`` -> ``user_id``."""
    name = _FIRST_CAP.sub(r"\1_\2", name)
    return _ALL_CAP.sub(r"\1_\2", name).lower()


def snake_case_keys(value: Any) -> Any:
    """Recursively rename dict keys to snake_case. Values are left untouched."""
    if isinstance(value, dict):
        return {
            (to_snake_case(k) if isinstance(k, str) else k): snake_case_keys(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [snake_case_keys(v) for v in value]
    return value


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def success(data: Any, message: str = "Request completed successfully") -> dict:
    return {
        "status": SUCCESS,
        "message": message,
        "timestamp": utc_timestamp(),
        "payload": {"data": snake_case_keys(jsonable_encoder(data))},
    }


def error(message: str, code: Optional[str] = None, details: Optional[Any] = None) -> dict:
    body = {}
    if code:
        body["code"] = code
    if details:
        body["details"] = snake_case_keys(jsonable_encoder(details))
    return {
        "status": ERROR,
        "message": message,
        "timestamp": utc_timestamp(),
        "payload": {"error": body},
    }


def auth_success(data: Any, action: str) -> dict:
    return success(data, AUTH_MESSAGES[action])


def health_success(data: Any) -> dict:
    return success(data, "Health check completed successfully")
