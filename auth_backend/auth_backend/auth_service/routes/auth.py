"""
Authentication endpoints: register, login, refresh, profile and logout.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Header, Request, status
from sqlalchemy.orm import Session

from ..config import settings
from ..db import get_db
from ..errors import InvalidCredentials, InvalidRefreshToken, Unauthenticated
from ..responses import auth_success
from ..schemas import LoginRequest, RefreshRequest, RegisterRequest
from ..service import AuthService
from ..store import UserStore
from ..tokens import InvalidToken, TokenService
from ..utils.event_logger import log_auth_event

router = APIRouter(prefix="/auth", tags=["auth"])

token_service = TokenService.from_settings(settings)


def get_token_service() -> TokenService:
    return token_service


def get_auth_service(
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(UserStore(db), tokens)


def get_current_user_id(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    tokens: TokenService = Depends(get_token_service),
) -> str:
    """Resolve the bearer access token to its subject id."""
    if not authorization:
        raise Unauthenticated("Access token not found")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthenticated("Invalid authorization header")
    try:
        payload = tokens.verify_access(token.strip())
    except InvalidToken as exc:
        raise Unauthenticated("Invalid access token") from exc
    return payload["sub"]


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service),
):
    result = service.register(
        email=payload.email,
        phone_number=payload.phone_number,
        full_name=payload.full_name,
        password=payload.password,
    )
    log_auth_event("register", request, user_id=result["user"]["id"])
    return auth_success(result, "register")


@router.post("/login", status_code=status.HTTP_200_OK)
def login(
    payload: LoginRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service),
):
    try:
        result = service.login(
            password=payload.password,
            email=payload.email,
            phone_number=payload.phone_number,
        )
    except InvalidCredentials as exc:
        log_auth_event("login_failure", request, code=exc.code)
        raise
    log_auth_event("login_success", request, user_id=result["user"]["id"])
    return auth_success(result, "login")


@router.post("/refresh", status_code=status.HTTP_200_OK)
def refresh(
    payload: RefreshRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service),
):
    try:
        result = service.refresh(payload.refresh_token)
    except (InvalidRefreshToken, InvalidCredentials) as exc:
        log_auth_event("refresh_failure", request, code=exc.code)
        raise
    log_auth_event("refresh", request, user_id=result["user"]["id"])
    return auth_success(result, "refresh")


@router.get("/me", status_code=status.HTTP_200_OK)
def me(
    user_id: str = Depends(get_current_user_id),
    service: AuthService = Depends(get_auth_service),
):
    return auth_success(service.get_profile(user_id), "profile")


@router.post("/logout", status_code=status.HTTP_200_OK)
def logout(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    service: AuthService = Depends(get_auth_service),
):
    result = service.logout(user_id)
    log_auth_event("logout", request, user_id=user_id)
    return auth_success(result, "logout")
