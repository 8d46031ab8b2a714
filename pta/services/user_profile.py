"""User profile service."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pta.core.permissions import Role
from pta.models.user_profile import UserProfile
from pta.schemas.user_profile import ProfileUpdate, UserProfileCreate, UserProfileUpdate


async def get_profile_by_id(db: AsyncSession, user_id: UUID) -> UserProfile | None:
    """Get profile by auth user ID."""
    result = await db.execute(
        select(UserProfile)
        .where(UserProfile.id == user_id)
        .options(selectinload(UserProfile.school))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_profiles(
    db: AsyncSession,
    *,
    school_id: UUID | None = None,
    role: Role | None = None,
    skip: int = 0,
    limit: int = 100,
) -> list[UserProfile]:
    """Get list of profiles with optional filters."""
    query = select(UserProfile).options(selectinload(UserProfile.school))

    if school_id is not None:
        query = query.where(UserProfile.school_id == school_id)

    if role is not None:
        query = query.where(UserProfile.role == role)

    query = query.order_by(UserProfile.full_name).offset(skip).limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def create_profile(db: AsyncSession, profile_data: UserProfileCreate) -> UserProfile:
    """Create a profile for an auth user."""
    profile = UserProfile(
        id=profile_data.id,
        full_name=profile_data.full_name,
        role=profile_data.role,
        school_id=profile_data.school_id,
    )

    db.add(profile)
    await db.commit()

    return await get_profile_by_id(db, profile.id)


async def update_profile(
    db: AsyncSession,
    profile: UserProfile,
    profile_data: UserProfileUpdate | ProfileUpdate,
) -> UserProfile:
    """Update a profile."""
    update_data = profile_data.model_dump(exclude_unset=True)

    for field, value in update_data.items():
        setattr(profile, field, value)

    await db.commit()

    return await get_profile_by_id(db, profile.id)


async def delete_profile(db: AsyncSession, profile: UserProfile) -> None:
    """Delete a profile. The auth user itself is left to the auth provider."""
    await db.delete(profile)
    await db.commit()
