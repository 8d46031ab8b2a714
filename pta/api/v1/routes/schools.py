"""School routes."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from pta.core.deps import DbSession, require_permission
from pta.core.errors import DATABASE_UNAVAILABLE_ERRORS
from pta.core.permissions import can_access_school, scoped_school_id
from pta.models.user_profile import UserProfile
from pta.schemas.school import SchoolCreate, SchoolResponse, SchoolUpdate
from pta.services import school as school_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schools", tags=["Schools"])

SchoolReader = Annotated[UserProfile, Depends(require_permission("schools:read"))]
SchoolWriter = Annotated[UserProfile, Depends(require_permission("schools:write"))]


async def _get_school_or_404(db, school_id: UUID):
    school = await school_service.get_school_by_id(db, school_id)
    if not school:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="School not found",
        )
    return school


# ============== Endpoints ==============


@router.get("", response_model=list[SchoolResponse])
async def list_schools(
    db: DbSession,
    current_user: SchoolReader,
) -> list[SchoolResponse]:
    """
    List schools.

    - ADMIN: Can see all schools
    - Others: Can only see their own school
    - Users not yet assigned a school see all of them, to pick the one to join
    """
    school_id = None
    if current_user.school_id is not None:
        school_id = scoped_school_id(current_user, None)

    try:
        schools = await school_service.get_schools(db, school_id=school_id)
    except DATABASE_UNAVAILABLE_ERRORS:
        logger.warning("Database not available, returning empty schools list")
        return []

    return [SchoolResponse.model_validate(s) for s in schools]


@router.post("", response_model=SchoolResponse, status_code=status.HTTP_201_CREATED)
async def create_school(
    school_data: SchoolCreate,
    db: DbSession,
    current_user: SchoolWriter,
) -> SchoolResponse:
    """Create a new school (admin only)."""
    school = await school_service.create_school(db, school_data)
    logger.info("School %s created by %s", school.id, current_user.id)
    return SchoolResponse.model_validate(school)


@router.get("/{school_id}", response_model=SchoolResponse)
async def get_school(
    school_id: UUID,
    db: DbSession,
    current_user: SchoolReader,
) -> SchoolResponse:
    """Get a school by ID."""
    if current_user.school_id is not None and not can_access_school(current_user, school_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="School not found",
        )

    school = await _get_school_or_404(db, school_id)
    return SchoolResponse.model_validate(school)


@router.put("/{school_id}", response_model=SchoolResponse)
async def update_school(
    school_id: UUID,
    school_data: SchoolUpdate,
    db: DbSession,
    current_user: SchoolWriter,
) -> SchoolResponse:
    """Update a school (admin only)."""
    school = await _get_school_or_404(db, school_id)
    updated = await school_service.update_school(db, school, school_data)
    return SchoolResponse.model_validate(updated)


@router.delete("/{school_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_school(
    school_id: UUID,
    db: DbSession,
    current_user: SchoolWriter,
) -> None:
    """Delete a school with all of its classes, parents, students and expenses (admin only)."""
    school = await _get_school_or_404(db, school_id)
    await school_service.delete_school(db, school)
    logger.info("School %s deleted by %s", school_id, current_user.id)
