"""
Event logger utility for authentication events.
"""
from datetime import datetime, timezone
from typing import Optional
from fastapi import Request
import logging

logger = logging.getLogger("auth_service.events")


ALLOWED_EVENT_TYPES = {
    "register",
    "login_success",
    "login_failure",
    "refresh",
    "refresh_failure",
    "logout",
}


def client_ip(request: Request) -> Optional[str]:
    """Client address, preferring the first X-Forwarded-For hop behind a proxy."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return None


def log_auth_event(
    event_type: str,
    request: Request,
    user_id: Optional[str] = None,
    **fields
) -> None:
    """
    Write one audit line for an authentication event.

    Args:
        event_type: One of ALLOWED_EVENT_TYPES
        request: FastAPI Request object
        user_id: Subject id when known
        fields: Extra context, e.g. the error code of a failure.
            Never pass passwords or tokens.

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    extra = " ".join(f"{k}={v}" for k, v in sorted(fields.items()))
    logger.info(
        "AUTH %s user_id=%s ip=%s user_agent=%s timestamp=%s %s",
        event_type,
        user_id,
        client_ip(request),
        request.headers.get("user-agent"),
        datetime.now(timezone.utc).isoformat(),
        extra,
    )
