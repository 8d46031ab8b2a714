"""Dependencies for FastAPI routes."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from pta.core.database import get_db
from pta.core.permissions import has_permission
from pta.core.security import SessionUser, decode_session_token, get_token_from_request
from pta.models.user_profile import UserProfile
from pta.services import user_profile as user_profile_service

# Only used so the OpenAPI docs offer a token field; the token may also come from a cookie
bearer_scheme = HTTPBearer(auto_error=False)


async def get_session(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> SessionUser:
    """Get the caller's session, set by SessionMiddleware or decoded here."""
    session = getattr(request.state, "session", None)
    if session is None:
        token = get_token_from_request(request)
        session = decode_session_token(token) if token else None

    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


async def get_current_profile(
    session: Annotated[SessionUser, Depends(get_session)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserProfile:
    """Get the caller's profile. A session without a profile has no role."""
    profile = await user_profile_service.get_profile_by_id(db, session.user_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )
    return profile


def require_permission(permission: str):
    """Dependency factory to check if the caller's role grants a permission."""

    async def permission_checker(
        profile: Annotated[UserProfile, Depends(get_current_profile)],
    ) -> UserProfile:
        if not has_permission(profile.role, permission):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return profile

    return permission_checker


# Common dependency aliases
DbSession = Annotated[AsyncSession, Depends(get_db)]
CurrentSession = Annotated[SessionUser, Depends(get_session)]
CurrentProfile = Annotated[UserProfile, Depends(get_current_profile)]
