"""
Health check endpoints
"""
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
from typing import Dict, Any
import time

from ..config import settings
from ..db import check_db_connection
from ..responses import error, health_success

router = APIRouter(prefix="/health", tags=["health"])

_STARTED_AT = time.monotonic()
_STARTED_ISO = datetime.now(timezone.utc).isoformat()


def uptime_seconds() -> float:
    return time.monotonic() - _STARTED_AT


@router.get("", status_code=status.HTTP_200_OK)
def health_check() -> Dict[str, Any]:
    """
    Application liveness.

    Returns:
        Envelope with status, version, epoch ms, uptime and
        the UTC time the service started
    """
    return health_success({
        "status": "ok",
        "version": settings.APP_VERSION,
        "ts": int(time.time() * 1000),
        "uptime": uptime_seconds(),
        "started": _STARTED_ISO,
    })


@router.get("/db", status_code=status.HTTP_200_OK)
def database_health():
    """
    Readiness check including database connectivity.

    Returns 503 with the error envelope when the database is unreachable.
    """
    connected = check_db_connection()
    data = {
        "database": {
            "status": "healthy" if connected else "unhealthy",
            "connected": connected,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        "application": {
            "status": "ok",
            "version": settings.APP_VERSION,
            "uptime": uptime_seconds(),
        },
    }
    if not connected:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=error("Database is unavailable", code="STORE_UNAVAILABLE", details=data),
        )
    return health_success(data)
