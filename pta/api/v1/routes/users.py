"""User profile routes."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from pta.core.deps import CurrentProfile, DbSession, require_permission
from pta.core.errors import DATABASE_UNAVAILABLE_ERRORS
from pta.core.permissions import Role, can_access_school, has_permission, scoped_school_id
from pta.models.user_profile import UserProfile
from pta.schemas.user_profile import (
    UserProfileCreate,
    UserProfileResponse,
    UserProfileUpdate,
)
from pta.services import school as school_service
from pta.services import user_profile as user_profile_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])

UserReader = Annotated[UserProfile, Depends(require_permission("users:read"))]
UserWriter = Annotated[UserProfile, Depends(require_permission("users:write"))]


# ============== Helper Functions ==============


def can_view_user(viewer: UserProfile, target: UserProfile) -> bool:
    """Users see themselves; principals see their school; admins see everyone."""
    if viewer.id == target.id:
        return True
    if not has_permission(viewer.role, "users:read"):
        return False
    return can_access_school(viewer, target.school_id)


async def _get_profile_or_404(db, user_id: UUID) -> UserProfile:
    profile = await user_profile_service.get_profile_by_id(db, user_id)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return profile


async def _validate_school(db, school_id: UUID | None) -> None:
    if school_id is not None and not await school_service.get_school_by_id(db, school_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="School not found",
        )


# ============== Endpoints ==============


@router.get("", response_model=list[UserProfileResponse])
async def list_users(
    db: DbSession,
    current_user: UserReader,
    school_id: UUID | None = Query(None, description="Filter by school ID"),
    role: Role | None = Query(None, description="Filter by role"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=500, description="Max number of records"),
) -> list[UserProfileResponse]:
    """
    List user profiles.

    - ADMIN: Can see all users, can filter by school_id
    - PRINCIPAL: Only sees users from their own school
    """
    try:
        profiles = await user_profile_service.get_profiles(
            db,
            school_id=scoped_school_id(current_user, school_id),
            role=role,
            skip=skip,
            limit=limit,
        )
    except DATABASE_UNAVAILABLE_ERRORS:
        logger.warning("Database not available, returning empty users list")
        return []

    return [UserProfileResponse.model_validate(p) for p in profiles]


@router.post("", response_model=UserProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    profile_data: UserProfileCreate,
    db: DbSession,
    current_user: UserWriter,
) -> UserProfileResponse:
    """
    Give an existing auth user a profile and role (admin only).

    The user must already have signed up with the auth provider; `id` is
    their auth user id.
    """
    if await user_profile_service.get_profile_by_id(db, profile_data.id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User profile already exists",
        )

    await _validate_school(db, profile_data.school_id)

    profile = await user_profile_service.create_profile(db, profile_data)
    logger.info("Profile %s (%s) created by %s", profile.id, profile.role, current_user.id)
    return UserProfileResponse.model_validate(profile)


@router.get("/{user_id}", response_model=UserProfileResponse)
async def get_user(
    user_id: UUID,
    db: DbSession,
    current_user: CurrentProfile,
) -> UserProfileResponse:
    """
    Get a specific user profile.

    - Anyone can see their own profile
    - PRINCIPAL: Users from their own school
    - ADMIN: Any user
    """
    if user_id != current_user.id and not has_permission(current_user.role, "users:read"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )

    profile = await _get_profile_or_404(db, user_id)
    if not can_view_user(current_user, profile):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    return UserProfileResponse.model_validate(profile)


@router.put("/{user_id}", response_model=UserProfileResponse)
async def update_user(
    user_id: UUID,
    profile_data: UserProfileUpdate,
    db: DbSession,
    current_user: CurrentProfile,
) -> UserProfileResponse:
    """
    Update a user profile.

    - Anyone can update their own name and school, but not their role
    - ADMIN: Can update any profile, including the role
    """
    is_admin = has_permission(current_user.role, "users:write")

    if user_id != current_user.id and not is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )

    if "role" in profile_data.model_fields_set and not is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You cannot change your own role",
        )

    profile = await _get_profile_or_404(db, user_id)

    if "school_id" in profile_data.model_fields_set and profile_data.school_id != profile.school_id:
        if profile.school_id is not None and not is_admin:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only an admin can move you to another school",
            )
        await _validate_school(db, profile_data.school_id)

    updated = await user_profile_service.update_profile(db, profile, profile_data)
    return UserProfileResponse.model_validate(updated)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    db: DbSession,
    current_user: UserWriter,
) -> None:
    """Delete a user profile (admin only). Admins cannot delete themselves."""
    if user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot delete your own profile",
        )

    profile = await _get_profile_or_404(db, user_id)
    await user_profile_service.delete_profile(db, profile)
    logger.info("Profile %s deleted by %s", user_id, current_user.id)
