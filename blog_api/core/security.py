"""Password hashing and JWT issuing/verification for authentication."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from blog_api.core.config import get_settings
from blog_api.core.errors import Unauthorized

# Bcrypt cost (rounds).
BCRYPT_ROUNDS = 10

PASSWORD_MIN_LEN = 6


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; longer input is truncated.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@dataclass(frozen=True)
class TokenIdentity:
    """Identity carried by a verified token."""

    id: str
    name: str


class TokenService:
    """
    Issues and verifies signed, time-limited identity tokens.

    The signing secret is injected once at construction and never changes.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(days=1),
    ) -> None:
        if not secret:
            raise ValueError("Token secret must be non-empty")
        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = expires_in

    def issue(self, user_id: str, user_name: str) -> str:
        """Create a token embedding id and name, expiring after the configured lifetime."""
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "id": str(user_id),
            "name": user_name,
            "iat": now,
            "exp": now + self._expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str | None) -> TokenIdentity:
        """
        Decode and validate a token; return its identity.
        Raises Unauthorized when the token is absent, malformed, forged or expired.
        """
        if not token:
            raise Unauthorized("Unauthorized. No token")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise Unauthorized("Unauthorized. Token expired") from e
        except jwt.PyJWTError as e:
            raise Unauthorized("Unauthorized. Invalid token") from e

        user_id = payload.get("id") or payload.get("sub")
        name = payload.get("name")
        if not user_id or not isinstance(name, str):
            raise Unauthorized("Unauthorized. Invalid token payload")
        return TokenIdentity(id=str(user_id), name=name)


@lru_cache
def get_token_service() -> TokenService:
    """Return the process-wide token service built from settings."""
    settings = get_settings()
    return TokenService(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        expires_in=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    )
