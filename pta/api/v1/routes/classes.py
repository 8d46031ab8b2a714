"""School classes API routes."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from pta.core.deps import DbSession, require_permission
from pta.core.errors import DATABASE_UNAVAILABLE_ERRORS
from pta.core.permissions import Role, can_access_school, scoped_school_id
from pta.models.user_profile import UserProfile
from pta.schemas.school_class import (
    ClassCreate,
    ClassDetailResponse,
    ClassResponse,
    ClassUpdate,
)
from pta.services import school as school_service
from pta.services import school_class as class_service
from pta.services import user_profile as user_profile_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/classes", tags=["Classes"])

ClassReader = Annotated[UserProfile, Depends(require_permission("classes:read"))]
ClassWriter = Annotated[UserProfile, Depends(require_permission("classes:write"))]


# ============== Helper Functions ==============


async def _get_accessible_class(db, class_id: UUID, current_user: UserProfile):
    school_class = await class_service.get_class_by_id(db, class_id)

    if not school_class or not can_access_school(current_user, school_class.school_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Class not found",
        )
    return school_class


async def _validate_teacher(db, teacher_id: UUID | None, school_id: UUID) -> None:
    if teacher_id is None:
        return

    teacher = await user_profile_service.get_profile_by_id(db, teacher_id)
    if not teacher:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Teacher not found",
        )
    if teacher.role != Role.TEACHER:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Assigned user is not a teacher",
        )
    if teacher.school_id != school_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Teacher belongs to another school",
        )


# ============== Endpoints ==============


@router.get("", response_model=list[ClassResponse])
async def list_classes(
    db: DbSession,
    current_user: ClassReader,
    school_id: UUID | None = Query(None, description="Filter by school ID"),
    teacher_id: UUID | None = Query(None, description="Filter by teacher ID"),
    without_teacher: bool = Query(False, description="Only classes with no teacher"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=500, description="Max number of records"),
) -> list[ClassResponse]:
    """
    List classes.

    - Teachers only see the classes they teach
    - Everyone but admins only sees their own school
    """
    if current_user.role == Role.TEACHER:
        teacher_id = current_user.id

    try:
        classes = await class_service.get_classes(
            db,
            school_id=scoped_school_id(current_user, school_id),
            teacher_id=teacher_id,
            without_teacher=without_teacher,
            skip=skip,
            limit=limit,
        )
    except DATABASE_UNAVAILABLE_ERRORS:
        logger.warning("Database not available, returning empty classes list")
        return []

    return [ClassResponse.model_validate(c) for c in classes]


@router.post("", response_model=ClassDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_class(
    class_data: ClassCreate,
    db: DbSession,
    current_user: ClassWriter,
) -> ClassDetailResponse:
    """Create a class (principal, admin)."""
    if not can_access_school(current_user, class_data.school_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only create classes in your own school",
        )

    school = await school_service.get_school_by_id(db, class_data.school_id)
    if not school:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="School not found",
        )

    await _validate_teacher(db, class_data.teacher_id, class_data.school_id)

    school_class = await class_service.create_class(db, class_data)
    logger.info("Class %s created by %s", school_class.id, current_user.id)
    return ClassDetailResponse.model_validate(school_class)


@router.get("/{class_id}", response_model=ClassDetailResponse)
async def get_class(
    class_id: UUID,
    db: DbSession,
    current_user: ClassReader,
) -> ClassDetailResponse:
    """Get a class with its students."""
    school_class = await _get_accessible_class(db, class_id, current_user)
    return ClassDetailResponse.model_validate(school_class)


@router.put("/{class_id}", response_model=ClassDetailResponse)
async def update_class(
    class_id: UUID,
    class_data: ClassUpdate,
    db: DbSession,
    current_user: ClassWriter,
) -> ClassDetailResponse:
    """Update a class (principal, admin)."""
    school_class = await _get_accessible_class(db, class_id, current_user)

    if "teacher_id" in class_data.model_fields_set:
        await _validate_teacher(db, class_data.teacher_id, school_class.school_id)

    updated = await class_service.update_class(db, school_class, class_data)
    return ClassDetailResponse.model_validate(updated)


@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_class(
    class_id: UUID,
    db: DbSession,
    current_user: ClassWriter,
) -> None:
    """Delete a class and its students (principal, admin)."""
    school_class = await _get_accessible_class(db, class_id, current_user)
    await class_service.delete_class(db, school_class)
    logger.info("Class %s deleted by %s", class_id, current_user.id)
