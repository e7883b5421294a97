"""Token service — issue and verify signed, time-limited bearer tokens.

Tokens are stateless HS256 JWTs carrying ``sub`` (user id), ``iat`` and
``exp``. There is no revocation list: logging out only discards the token
on the client, and a discarded token stays valid until it expires.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from smartdine.config import get_settings


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenMalformed(TokenError):
    """Signature, structure or claims are invalid."""


class TokenExpired(TokenError):
    """The embedded expiry is in the past."""


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    issued_at: datetime
    expires_at: datetime


class TokenService:
    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_in: timedelta = timedelta(days=7)):
        if not secret_key:
            raise ValueError("Token signing secret must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, user_id: int, expires_delta: Optional[timedelta] = None) -> str:
        issued_at = datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + (expires_delta if expires_delta is not None else self.expires_in),
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError as exc:
            raise TokenExpired("Token has expired") from exc
        except JWTError as exc:
            raise TokenMalformed("Token is invalid") from exc

        sub, iat, exp = payload.get("sub"), payload.get("iat"), payload.get("exp")
        if sub is None or not str(sub).isdigit() or iat is None or exp is None:
            raise TokenMalformed("Token is missing required claims")

        return TokenClaims(
            user_id=int(sub),
            issued_at=datetime.fromtimestamp(iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide token service built once from settings."""
    settings = get_settings()
    return TokenService(
        secret_key=settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        expires_in=timedelta(minutes=settings.JWT_EXPIRATION_MINUTES),
    )
