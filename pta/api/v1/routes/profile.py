"""Routes for the caller's own profile."""

from fastapi import APIRouter, HTTPException, Response, status

from pta.core.deps import CurrentSession, DbSession
from pta.schemas.user_profile import ProfileUpdate, UserProfileResponse
from pta.services import school as school_service
from pta.services import user_profile as user_profile_service

router = APIRouter(prefix="/profile", tags=["Profile"])

PROFILE_CACHE_CONTROL = "private, max-age=60, stale-while-revalidate=120"


async def _get_own_profile(db, session):
    profile = await user_profile_service.get_profile_by_id(db, session.user_id)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found",
        )
    return profile


@router.get("", response_model=UserProfileResponse)
async def get_profile(
    response: Response,
    db: DbSession,
    session: CurrentSession,
) -> UserProfileResponse:
    """Get the signed-in user's profile, role and school."""
    profile = await _get_own_profile(db, session)
    response.headers["Cache-Control"] = PROFILE_CACHE_CONTROL
    return UserProfileResponse.model_validate(profile)


@router.put("", response_model=UserProfileResponse)
async def update_profile(
    profile_data: ProfileUpdate,
    db: DbSession,
    session: CurrentSession,
) -> UserProfileResponse:
    """Update the signed-in user's name or school. The role cannot be changed here."""
    profile = await _get_own_profile(db, session)

    if "school_id" in profile_data.model_fields_set and profile_data.school_id != profile.school_id:
        # Joining a school is a one-time step; moving between schools is an admin task
        if profile.school_id is not None and not profile.is_admin:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only an admin can move you to another school",
            )
        if profile_data.school_id is not None and not await school_service.get_school_by_id(
            db, profile_data.school_id
        ):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="School not found",
            )

    updated = await user_profile_service.update_profile(db, profile, profile_data)
    return UserProfileResponse.model_validate(updated)
