"""Student API routes."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from pta.core.deps import DbSession, require_permission
from pta.core.errors import DATABASE_UNAVAILABLE_ERRORS
from pta.core.permissions import Role, can_access_school, is_school_scoped, scoped_school_id
from pta.models.student import Student
from pta.models.user_profile import UserProfile
from pta.schemas.student import (
    StudentBulkCreate,
    StudentCreate,
    StudentResponse,
    StudentUpdate,
)
from pta.services import parent as parent_service
from pta.services import school_class as class_service
from pta.services import student as student_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/students", tags=["Students"])

StudentReader = Annotated[UserProfile, Depends(require_permission("students:read"))]
StudentWriter = Annotated[UserProfile, Depends(require_permission("students:write"))]
StudentDeleter = Annotated[UserProfile, Depends(require_permission("students:delete"))]


# ============== Helper Functions ==============


def _student_school_id(student: Student) -> UUID | None:
    if student.school_class is not None:
        return student.school_class.school_id
    if student.parent is not None:
        return student.parent.school_id
    return None


def _can_see_student(student: Student, current_user: UserProfile) -> bool:
    if current_user.role == Role.PARENT:
        return student.parent is not None and student.parent.user_id == current_user.id
    return can_access_school(current_user, _student_school_id(student))


async def _get_accessible_student(db, student_id: UUID, current_user: UserProfile) -> Student:
    student = await student_service.get_student_by_id(db, student_id)

    if not student or not _can_see_student(student, current_user):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found",
        )
    return student


def _require_school_link(
    class_id: UUID | None,
    parent_id: UUID | None,
    current_user: UserProfile,
) -> None:
    """A student is only visible to school staff through their class or parent."""
    if class_id is None and parent_id is None and is_school_scoped(current_user.role):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A student needs a class or a parent",
        )


async def _validate_references(
    db,
    class_id: UUID | None,
    parent_id: UUID | None,
    current_user: UserProfile,
) -> None:
    """Make sure the class and parent exist and belong to the caller's school."""
    if class_id is not None:
        school_class = await class_service.get_class_by_id(db, class_id)
        if not school_class or not can_access_school(current_user, school_class.school_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Class {class_id} not found",
            )

    if parent_id is not None:
        parent = await parent_service.get_parent_by_id(db, parent_id)
        if not parent or not can_access_school(current_user, parent.school_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Parent {parent_id} not found",
            )


# ============== Endpoints ==============


@router.get("", response_model=list[StudentResponse])
async def list_students(
    db: DbSession,
    current_user: StudentReader,
    class_id: UUID | None = Query(None, description="Filter by class ID"),
    parent_id: UUID | None = Query(None, description="Filter by parent ID"),
    search: str | None = Query(None, description="Search by name or student number"),
    without_parent: bool = Query(False, description="Only students with no parent linked"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=500, description="Max number of records"),
) -> list[StudentResponse]:
    """
    List students.

    - Parents only see their own children
    - Everyone but admins only sees their own school
    """
    parent_user_id = None
    school_id = None
    if current_user.role == Role.PARENT:
        # Parents are matched through their login rather than their school
        parent_user_id = current_user.id
    else:
        school_id = scoped_school_id(current_user, None)

    try:
        students = await student_service.get_students(
            db,
            class_id=class_id,
            parent_id=parent_id,
            school_id=school_id,
            parent_user_id=parent_user_id,
            search=search,
            without_parent=without_parent,
            skip=skip,
            limit=limit,
        )
    except DATABASE_UNAVAILABLE_ERRORS:
        logger.warning("Database not available, returning empty students list")
        return []

    return [StudentResponse.model_validate(s) for s in students]


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
async def create_student(
    student_data: StudentCreate,
    db: DbSession,
    current_user: StudentWriter,
) -> StudentResponse:
    """Enroll a student."""
    _require_school_link(student_data.class_id, student_data.parent_id, current_user)
    await _validate_references(db, student_data.class_id, student_data.parent_id, current_user)

    student = await student_service.create_student(db, student_data)
    logger.info("Student %s created by %s", student.id, current_user.id)
    return StudentResponse.model_validate(student)


@router.post("/bulk", response_model=list[StudentResponse], status_code=status.HTTP_201_CREATED)
async def bulk_create_students(
    bulk_data: StudentBulkCreate,
    db: DbSession,
    current_user: StudentWriter,
) -> list[StudentResponse]:
    """
    Enroll several students at once.

    Either all students are created or none are.
    """
    for student_data in bulk_data.students:
        _require_school_link(student_data.class_id, student_data.parent_id, current_user)
        await _validate_references(db, student_data.class_id, student_data.parent_id, current_user)

    students = await student_service.bulk_create_students(db, bulk_data.students)
    logger.info("%d students created by %s", len(students), current_user.id)
    return [StudentResponse.model_validate(s) for s in students]


@router.get("/{student_id}", response_model=StudentResponse)
async def get_student(
    student_id: UUID,
    db: DbSession,
    current_user: StudentReader,
) -> StudentResponse:
    """Get student by ID."""
    student = await _get_accessible_student(db, student_id, current_user)
    return StudentResponse.model_validate(student)


@router.put("/{student_id}", response_model=StudentResponse)
async def update_student(
    student_id: UUID,
    student_data: StudentUpdate,
    db: DbSession,
    current_user: StudentWriter,
) -> StudentResponse:
    """Update a student."""
    student = await _get_accessible_student(db, student_id, current_user)

    fields = student_data.model_fields_set
    _require_school_link(
        student_data.class_id if "class_id" in fields else student.class_id,
        student_data.parent_id if "parent_id" in fields else student.parent_id,
        current_user,
    )
    await _validate_references(
        db,
        student_data.class_id if "class_id" in fields else None,
        student_data.parent_id if "parent_id" in fields else None,
        current_user,
    )

    updated = await student_service.update_student(db, student, student_data)
    return StudentResponse.model_validate(updated)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(
    student_id: UUID,
    db: DbSession,
    current_user: StudentDeleter,
) -> None:
    """Delete a student (principal, admin)."""
    student = await _get_accessible_student(db, student_id, current_user)
    await student_service.delete_student(db, student)
    logger.info("Student %s deleted by %s", student_id, current_user.id)
