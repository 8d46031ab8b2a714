"""Parent API routes."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from pta.core.deps import DbSession, require_permission
from pta.core.errors import DATABASE_UNAVAILABLE_ERRORS
from pta.core.permissions import can_access_school, is_school_scoped, scoped_school_id
from pta.models.user_profile import UserProfile
from pta.schemas.parent import (
    ParentCreate,
    ParentDetailResponse,
    ParentResponse,
    ParentUpdate,
    PaymentStatusUpdate,
)
from pta.services import parent as parent_service
from pta.services import school as school_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/parents", tags=["Parents"])

ParentReader = Annotated[UserProfile, Depends(require_permission("parents:read"))]
ParentWriter = Annotated[UserProfile, Depends(require_permission("parents:write"))]


# ============== Helper Functions ==============


async def _get_accessible_parent(db, parent_id: UUID, current_user: UserProfile):
    parent = await parent_service.get_parent_by_id(db, parent_id)

    if not parent or not can_access_school(current_user, parent.school_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Parent not found",
        )
    return parent


async def _validate_school(db, school_id: UUID | None, current_user: UserProfile) -> None:
    if school_id is None and not is_school_scoped(current_user.role):
        return

    if not can_access_school(current_user, school_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only manage parents of your own school",
        )

    if not await school_service.get_school_by_id(db, school_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="School not found",
        )


# ============== Endpoints ==============


@router.get("", response_model=list[ParentResponse])
async def list_parents(
    db: DbSession,
    current_user: ParentReader,
    school_id: UUID | None = Query(None, description="Filter by school ID"),
    search: str | None = Query(None, description="Search by name, email or contact number"),
    payment_status: bool | None = Query(None, description="Filter by paid/unpaid"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=500, description="Max number of records"),
) -> list[ParentResponse]:
    """List parents of the caller's school."""
    try:
        parents = await parent_service.get_parents(
            db,
            school_id=scoped_school_id(current_user, school_id),
            search=search,
            payment_status=payment_status,
            skip=skip,
            limit=limit,
        )
    except DATABASE_UNAVAILABLE_ERRORS:
        logger.warning("Database not available, returning empty parents list")
        return []

    return [ParentResponse.model_validate(p) for p in parents]


@router.post("", response_model=ParentDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_parent(
    parent_data: ParentCreate,
    db: DbSession,
    current_user: ParentWriter,
) -> ParentDetailResponse:
    """
    Register a parent.

    - The school defaults to the caller's school
    - `user_id` links the record to the parent's login, if they have one
    """
    if parent_data.school_id is None:
        parent_data.school_id = current_user.school_id
    await _validate_school(db, parent_data.school_id, current_user)

    parent = await parent_service.create_parent(db, parent_data)
    logger.info("Parent %s created by %s", parent.id, current_user.id)
    return ParentDetailResponse.model_validate(parent)


@router.post("/payment-status", response_model=list[ParentResponse])
async def set_payment_status(
    status_data: PaymentStatusUpdate,
    db: DbSession,
    current_user: ParentWriter,
) -> list[ParentResponse]:
    """
    Mark several parents as paid or unpaid.

    Their students follow the parent's status.
    """
    parent_ids = list(dict.fromkeys(status_data.parent_ids))
    for parent_id in parent_ids:
        await _get_accessible_parent(db, parent_id, current_user)

    parents = await parent_service.set_payment_status(db, parent_ids, status_data.payment_status)
    logger.info(
        "%d parents marked %s by %s",
        len(parents),
        "paid" if status_data.payment_status else "unpaid",
        current_user.id,
    )
    return [ParentResponse.model_validate(p) for p in parents]


@router.get("/{parent_id}", response_model=ParentDetailResponse)
async def get_parent(
    parent_id: UUID,
    db: DbSession,
    current_user: ParentReader,
) -> ParentDetailResponse:
    """Get a parent with their students and payment history."""
    parent = await _get_accessible_parent(db, parent_id, current_user)
    return ParentDetailResponse.model_validate(parent)


@router.put("/{parent_id}", response_model=ParentDetailResponse)
async def update_parent(
    parent_id: UUID,
    parent_data: ParentUpdate,
    db: DbSession,
    current_user: ParentWriter,
) -> ParentDetailResponse:
    """Update a parent."""
    parent = await _get_accessible_parent(db, parent_id, current_user)

    if "school_id" in parent_data.model_fields_set:
        await _validate_school(db, parent_data.school_id, current_user)

    updated = await parent_service.update_parent(db, parent, parent_data)
    return ParentDetailResponse.model_validate(updated)


@router.delete("/{parent_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_parent(
    parent_id: UUID,
    db: DbSession,
    current_user: ParentWriter,
) -> None:
    """Delete a parent together with their students and payments."""
    parent = await _get_accessible_parent(db, parent_id, current_user)
    await parent_service.delete_parent(db, parent)
    logger.info("Parent %s deleted by %s", parent_id, current_user.id)
