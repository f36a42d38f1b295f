"""
Auth Service - registration, login and token issuance over HTTP
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from contextlib import asynccontextmanager
import logging
import time

from .config import settings
from .db import init_db
from .errors import AuthError
from .responses import error
from .routes import auth, health

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

HTTP_422_UNPROCESSABLE = 422

ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_409_CONFLICT: "CONFLICT",
    HTTP_422_UNPROCESSABLE: "VALIDATION_ERROR",
    status.HTTP_429_TOO_MANY_REQUESTS: "RATE_LIMIT_EXCEEDED",
    status.HTTP_503_SERVICE_UNAVAILABLE: "SERVICE_UNAVAILABLE",
}


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Initialize database on startup"""
    init_db()
    logger.info("%s %s up (environment=%s)", settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT)
    yield


class SlowRequestMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000
        if duration_ms > settings.SLOW_REQUEST_MS:
            logger.warning("Slow request detected: %s %s - %.0fms", request.method, request.url.path, duration_ms)
        elif settings.is_development:
            logger.debug("%s %s - %.0fms", request.method, request.url.path, duration_ms)
        response.headers["X-Response-Time"] = f"{duration_ms:.1f}ms"
        return response


app = FastAPI(
    title="Auth Service",
    description="User registration, login and JWT issuance",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SlowRequestMiddleware)

app.include_router(auth.router)
app.include_router(health.router)


def _request_details(request: Request, status_code: int) -> dict:
    return {
        "status_code": status_code,
        "path": request.url.path,
        "method": request.method,
    }


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    details = _request_details(request, exc.status_code)
    if exc.details:
        details["details"] = exc.details
    if exc.status_code >= 500:
        logger.error("HTTP %s Error: %s (%s %s)", exc.status_code, exc.message, request.method, request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content=error(exc.message, code=exc.code, details=details),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Only location and message; raw input may contain the password.
    fields = [
        {"field": ".".join(str(part) for part in e.get("loc", ())), "message": e.get("msg")}
        for e in exc.errors()
    ]
    details = _request_details(request, HTTP_422_UNPROCESSABLE)
    details["fields"] = fields
    return JSONResponse(
        status_code=HTTP_422_UNPROCESSABLE,
        content=error("Validation failed", code="VALIDATION_ERROR", details=details),
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=error(
            message,
            code=ERROR_CODES.get(exc.status_code, "INTERNAL_ERROR"),
            details=_request_details(request, exc.status_code),
        ),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error(
            "Internal server error",
            code="INTERNAL_ERROR",
            details=_request_details(request, status.HTTP_500_INTERNAL_SERVER_ERROR),
        ),
    )


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }
