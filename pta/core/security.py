"""Session token handling.

Sign-in happens at the auth provider, which hands the browser a signed JWT.
This module only verifies that token and reads the caller's identity out of
it. ``create_session_token`` mints compatible tokens for local tooling and
tests.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from starlette.requests import HTTPConnection

from pta.core.config import settings


@dataclass(frozen=True)
class SessionUser:
    """Identity carried by a verified session token."""

    user_id: UUID
    email: str | None
    expires_at: datetime


def create_session_token(
    user_id: UUID | str,
    email: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed session token in the auth provider's format."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.SESSION_TOKEN_EXPIRE_MINUTES))
    payload = {
        "sub": str(user_id),
        "aud": settings.SESSION_JWT_AUDIENCE,
        "role": "authenticated",
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, settings.SESSION_JWT_SECRET, algorithm=settings.SESSION_JWT_ALGORITHM)


def decode_session_token(token: str) -> SessionUser | None:
    """Verify a session token. Returns None if it is invalid or expired."""
    try:
        payload = jwt.decode(
            token,
            settings.SESSION_JWT_SECRET,
            algorithms=[settings.SESSION_JWT_ALGORITHM],
            audience=settings.SESSION_JWT_AUDIENCE,
            options={"require": ["exp", "sub"]},
        )
    except jwt.InvalidTokenError:
        return None

    try:
        user_id = UUID(payload["sub"])
    except (KeyError, TypeError, ValueError):
        return None

    return SessionUser(
        user_id=user_id,
        email=payload.get("email"),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def get_token_from_request(conn: HTTPConnection) -> str | None:
    """Read the session token from the Authorization header or the session cookie."""
    authorization = conn.headers.get("Authorization")
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            return credentials.strip()
    return conn.cookies.get(settings.SESSION_COOKIE_NAME)


def get_session_from_request(conn: HTTPConnection) -> SessionUser | None:
    """Resolve the caller's session, or None when there is no valid token."""
    token = get_token_from_request(conn)
    if not token:
        return None
    return decode_session_token(token)
