"""
Registration, login, token refresh, profile and logout.

AuthService receives its collaborators explicitly and returns plain dicts;
failures are raised as the typed errors in ``errors.py``.
"""
from functools import lru_cache
from typing import Optional
import logging

from .auth import hash_password, verify_password
from .errors import BadRequest, DuplicateUser, InvalidCredentials, InvalidRefreshToken
from .store import UserStore
from .tokens import InvalidToken, TokenService

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _dummy_digest() -> str:
    # Compared against when the user is unknown, so both failure paths hash once.
    return hash_password("not-a-real-password")


class AuthService:
    def __init__(self, store: UserStore, tokens: TokenService):
        self.store = store
        self.tokens = tokens

    def _authenticated(self, user) -> dict:
        return {
            "user": user.to_public_dict(),
            "tokens": self.tokens.issue(user.id, user.email),
        }

    def register(self, email: str, phone_number: str, full_name: str, password: str) -> dict:
        if self.store.find_by_email_or_phone(email=email, phone_number=phone_number):
            raise DuplicateUser()

        password_hash = hash_password(password)
        user = self.store.create_user_with_profile(
            email=email,
            phone_number=phone_number,
            password_hash=password_hash,
            full_name=full_name,
        )
        logger.info("Registered user_id=%s", user.id)
        return self._authenticated(user)

    def login(
        self,
        password: str,
        email: Optional[str] = None,
        phone_number: Optional[str] = None,
    ) -> dict:
        """
        Authenticate by email or phone number.

        An unknown identifier and a wrong password raise the same
        InvalidCredentials so callers cannot probe for accounts.
        """
        if not email and not phone_number:
            raise BadRequest("Either email or phone number must be provided")

        if email:
            user = self.store.find_by_email(email)
        else:
            user = self.store.find_by_phone(phone_number)

        if user is None:
            verify_password(password, _dummy_digest())
            raise InvalidCredentials()
        if not verify_password(password, user.password):
            raise InvalidCredentials()

        return self._authenticated(user)

    def refresh(self, refresh_token: str) -> dict:
        try:
            payload = self.tokens.verify_refresh(refresh_token)
        except InvalidToken as exc:
            raise InvalidRefreshToken() from exc

        user = self.store.find_by_id(payload["sub"])
        if user is None:
            raise InvalidCredentials()
        return self._authenticated(user)

    def get_profile(self, user_id: str) -> dict:
        user = self.store.find_by_id(user_id)
        if user is None:
            raise InvalidCredentials()
        return {"user": user.to_public_dict()}

    def logout(self, user_id: str) -> dict:
        # No revocation store: the token stays valid until it expires.
        return {"user_id": user_id, "logged_out": True, "revoked": False}
