"""Password hashing and bearer token helpers."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import bcrypt
from jose import JWTError, jwt

from academy.config import settings


ALGORITHM = "HS256"


class InvalidTokenError(Exception):
    """Raised when a JWT cannot be decoded or is invalid."""


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def _encode(subject: str, lifetime: timedelta, token_type: str) -> str:
    claims: Dict[str, Any] = {
        "sub": subject,
        "type": token_type,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=ALGORITHM)


def create_access_token(subject: str) -> str:
    """Create a signed access token for the user id ``subject``."""

    return _encode(
        subject, timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES), token_type="access"
    )


def create_refresh_token(subject: str) -> str:
    return _encode(
        subject, timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS), token_type="refresh"
    )


def decode_token(token: str) -> Dict[str, Any]:
    """Decode a JWT and return its claims, raising ``InvalidTokenError`` if invalid."""

    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from exc
