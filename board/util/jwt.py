"""Session token encoding.

Tokens are HS256 JWTs whose subject is the actor ID. They identify an actor
and the device it was bootstrapped from; anything else (admin, line changes)
is read from the stored actor.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, Field

from board.config import AuthSettings


class TokenPayload(BaseModel):
    """Decoded session claims."""

    actor_id: str = Field(alias="sub")
    device_id: str = Field(alias="dev")
    line: str
    issued_at: datetime = Field(alias="iat")
    exp: datetime


class JWTError(Exception):
    """Session token could not be decoded."""


def create_token(
    actor_id: str,
    device_id: str,
    line: str,
    settings: AuthSettings,
    now: datetime | None = None,
) -> str:
    """Sign a session token valid for settings.jwt_expiry_days."""
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "sub": actor_id,
        "dev": device_id,
        "line": line,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check signature and expiry, then parse the claims.

    Raises:
        JWTError: If the token is expired, tampered with or missing claims
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Session token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid session token") from e

    try:
        return TokenPayload.model_validate(claims)
    except ValueError as e:
        raise JWTError("Session token is missing claims") from e
