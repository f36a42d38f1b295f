"""
Signed, time-limited bearer tokens.

Access and refresh tokens are signed with different secrets so one can never
be replayed as the other.
"""
from datetime import datetime, timezone
from typing import Callable, Optional, Union
import re
import uuid

import jwt

DEFAULT_ACCESS_TTL = 900  # 15 minutes
DEFAULT_REFRESH_TTL = 604800  # 7 days

_TTL_PATTERN = re.compile(r"^(\d+)([smhd])$")
_TTL_UNITS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


class InvalidToken(Exception):
    """Raised for any token that fails verification, whatever the reason."""


def parse_ttl(value: Union[int, str, None], default: int) -> int:
    """
    Convert a TTL such as ``900``, ``"900"``, ``"15m"`` or ``"7d"`` to seconds.

    Unparsable or non-positive values fall back to ``default``.
    """
    if value is None:
        return default
    if isinstance(value, int):
        return value if value > 0 else default
    value = str(value).strip()
    if value.isdigit():
        return int(value) or default
    match = _TTL_PATTERN.match(value)
    if not match:
        return default
    seconds = int(match.group(1)) * _TTL_UNITS[match.group(2)]
    return seconds or default


class TokenService:
    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl: Union[int, str] = DEFAULT_ACCESS_TTL,
        refresh_ttl: Union[int, str] = DEFAULT_REFRESH_TTL,
        algorithm: str = "HS256",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh tokens must use different secrets")
        self.access_secret = access_secret
        self.refresh_secret = refresh_secret
        self.access_ttl = parse_ttl(access_ttl, DEFAULT_ACCESS_TTL)
        self.refresh_ttl = parse_ttl(refresh_ttl, DEFAULT_REFRESH_TTL)
        self.algorithm = algorithm
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @classmethod
    def from_settings(cls, settings) -> "TokenService":
        return cls(
            access_secret=settings.JWT_SECRET,
            refresh_secret=settings.JWT_REFRESH_SECRET,
            access_ttl=settings.JWT_EXPIRES_IN,
            refresh_ttl=settings.JWT_REFRESH_EXPIRES_IN,
            algorithm=settings.JWT_ALGORITHM,
        )

    def _sign(self, subject_id: str, subject_email: str, secret: str, ttl: int, iat: int) -> str:
        payload = {
            "sub": str(subject_id),
            "email": subject_email,
            "iat": iat,
            "exp": iat + ttl,
            "jti": str(uuid.uuid4()),
        }
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def issue(self, subject_id: str, subject_email: str) -> dict:
        """
        Mint an access/refresh pair for a subject.

        Returns:
            dict with access_token, refresh_token, token_type, expires_in
            and refresh_expires_in (seconds)
        """
        iat = int(self._clock().timestamp())
        return {
            "access_token": self._sign(subject_id, subject_email, self.access_secret, self.access_ttl, iat),
            "refresh_token": self._sign(subject_id, subject_email, self.refresh_secret, self.refresh_ttl, iat),
            "token_type": "Bearer",
            "expires_in": self.access_ttl,
            "refresh_expires_in": self.refresh_ttl,
        }

    def verify(self, token: str, secret: str) -> dict:
        """
        Check signature and expiry and return the payload.

        Raises:
            InvalidToken: on a corrupt token, wrong secret, expiry or missing claims
        """
        if not token:
            raise InvalidToken("Invalid token")
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.PyJWTError as exc:
            raise InvalidToken("Invalid token") from exc
        return payload

    def verify_access(self, token: str) -> dict:
        return self.verify(token, self.access_secret)

    def verify_refresh(self, token: str) -> dict:
        return self.verify(token, self.refresh_secret)
