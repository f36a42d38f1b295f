"""
Typed failures raised by the auth flow.

Each carries the HTTP status and the stable machine-readable code used in the
error envelope. They are translated to responses once, at the app boundary.
"""
from typing import Any, Optional


class AuthError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class BadRequest(AuthError):
    status_code = 400
    code = "BAD_REQUEST"
    default_message = "Bad request"


class InvalidCredentials(AuthError):
    status_code = 401
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid credentials"


class InvalidRefreshToken(AuthError):
    status_code = 401
    code = "INVALID_REFRESH_TOKEN"
    default_message = "Invalid refresh token"


class Unauthenticated(AuthError):
    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Not authenticated"


class DuplicateUser(AuthError):
    status_code = 409
    code = "DUPLICATE_USER"
    default_message = "User with this email or phone number already exists"


class StoreUnavailable(AuthError):
    status_code = 503
    code = "STORE_UNAVAILABLE"
    default_message = "Database is currently unavailable. Please try again later."
