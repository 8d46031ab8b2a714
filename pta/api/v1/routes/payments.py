"""Payment API routes."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from pta.core.deps import DbSession, require_permission
from pta.core.errors import DATABASE_UNAVAILABLE_ERRORS
from pta.core.permissions import Role, can_access_school, scoped_school_id
from pta.models.payment import Payment
from pta.models.user_profile import UserProfile
from pta.schemas.payment import PaymentCreate, PaymentResponse, PaymentUpdate
from pta.services import parent as parent_service
from pta.services import payment as payment_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["Payments"])

PaymentReader = Annotated[UserProfile, Depends(require_permission("payments:read"))]
PaymentWriter = Annotated[UserProfile, Depends(require_permission("payments:write"))]
PaymentDeleter = Annotated[UserProfile, Depends(require_permission("payments:delete"))]


# ============== Helper Functions ==============


def _can_see_payment(payment: Payment, current_user: UserProfile) -> bool:
    parent = payment.parent
    if current_user.role == Role.PARENT:
        return parent is not None and parent.user_id == current_user.id
    return can_access_school(current_user, parent.school_id if parent else None)


async def _get_accessible_payment(db, payment_id: UUID, current_user: UserProfile) -> Payment:
    payment = await payment_service.get_payment_by_id(db, payment_id)

    if not payment or not _can_see_payment(payment, current_user):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Payment not found",
        )
    return payment


# ============== Endpoints ==============


@router.get("", response_model=list[PaymentResponse])
async def list_payments(
    db: DbSession,
    current_user: PaymentReader,
    parent_id: UUID | None = Query(None, description="Filter by parent ID"),
    school_id: UUID | None = Query(None, description="Filter by school ID"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=500, description="Max number of records"),
) -> list[PaymentResponse]:
    """
    List payments, newest first.

    - Parents only see their own payments
    - Everyone but admins only sees their own school
    """
    parent_user_id = None
    if current_user.role == Role.PARENT:
        # Parents are matched through their login rather than their school
        parent_user_id = current_user.id
    else:
        school_id = scoped_school_id(current_user, school_id)

    try:
        payments = await payment_service.get_payments(
            db,
            parent_id=parent_id,
            school_id=school_id,
            parent_user_id=parent_user_id,
            skip=skip,
            limit=limit,
        )
    except DATABASE_UNAVAILABLE_ERRORS:
        logger.warning("Database not available, returning empty payments list")
        return []

    return [PaymentResponse.model_validate(p) for p in payments]


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
async def create_payment(
    payment_data: PaymentCreate,
    db: DbSession,
    current_user: PaymentWriter,
) -> PaymentResponse:
    """
    Record a payment.

    - Amount defaults to the standard membership fee
    - The parent and all of their students are marked as paid
    - The caller is recorded as the one who took the payment
    """
    parent = await parent_service.get_parent_by_id(db, payment_data.parent_id)
    if not parent or not can_access_school(current_user, parent.school_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Parent not found",
        )

    payment = await payment_service.create_payment(db, payment_data, created_by_id=current_user.id)
    logger.info(
        "Payment %s of %s recorded for parent %s by %s",
        payment.id,
        payment.amount,
        payment.parent_id,
        current_user.id,
    )
    return PaymentResponse.model_validate(payment)


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: UUID,
    db: DbSession,
    current_user: PaymentReader,
) -> PaymentResponse:
    """Get payment by ID."""
    payment = await _get_accessible_payment(db, payment_id, current_user)
    return PaymentResponse.model_validate(payment)


@router.put("/{payment_id}", response_model=PaymentResponse)
async def update_payment(
    payment_id: UUID,
    payment_data: PaymentUpdate,
    db: DbSession,
    current_user: PaymentWriter,
) -> PaymentResponse:
    """Correct a recorded payment."""
    payment = await _get_accessible_payment(db, payment_id, current_user)
    updated = await payment_service.update_payment(db, payment, payment_data)
    return PaymentResponse.model_validate(updated)


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payment(
    payment_id: UUID,
    db: DbSession,
    current_user: PaymentDeleter,
) -> None:
    """Delete a payment (admin only)."""
    payment = await _get_accessible_payment(db, payment_id, current_user)
    await payment_service.delete_payment(db, payment)
    logger.info("Payment %s deleted by %s", payment_id, current_user.id)
