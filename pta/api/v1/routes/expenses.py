"""Expense API routes."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from pta.core.deps import DbSession, require_permission
from pta.core.errors import DATABASE_UNAVAILABLE_ERRORS
from pta.core.permissions import can_access_school, scoped_school_id
from pta.models.user_profile import UserProfile
from pta.schemas.expense import ExpenseCreate, ExpenseResponse, ExpenseUpdate
from pta.services import expense as expense_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/expenses", tags=["Expenses"])

ExpenseReader = Annotated[UserProfile, Depends(require_permission("expenses:read"))]
ExpenseWriter = Annotated[UserProfile, Depends(require_permission("expenses:write"))]
ExpenseDeleter = Annotated[UserProfile, Depends(require_permission("expenses:delete"))]


async def _get_accessible_expense(db, expense_id: UUID, current_user: UserProfile):
    expense = await expense_service.get_expense_by_id(db, expense_id)

    if not expense or not can_access_school(current_user, expense.school_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found",
        )
    return expense


@router.get("", response_model=list[ExpenseResponse])
async def list_expenses(
    db: DbSession,
    current_user: ExpenseReader,
    school_id: UUID | None = Query(None, description="Filter by school ID"),
    category: str | None = Query(None, description="Filter by category"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
) -> list[ExpenseResponse]:
    """List expenses, newest first."""
    try:
        expenses = await expense_service.get_expenses(
            db,
            school_id=scoped_school_id(current_user, school_id),
            category=category,
            skip=skip,
            limit=limit,
        )
    except DATABASE_UNAVAILABLE_ERRORS:
        logger.warning("Database not available, returning empty expenses list")
        return []

    return [ExpenseResponse.model_validate(e) for e in expenses]


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: ExpenseCreate,
    db: DbSession,
    current_user: ExpenseWriter,
) -> ExpenseResponse:
    """
    Record an expense.

    - The school defaults to the caller's school
    - The caller is recorded as the one who logged it
    """
    if expense_data.school_id is None:
        expense_data.school_id = current_user.school_id

    if not can_access_school(current_user, expense_data.school_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only record expenses for your own school",
        )

    expense = await expense_service.create_expense(db, expense_data, created_by_id=current_user.id)
    logger.info("Expense %s of %s recorded by %s", expense.id, expense.amount, current_user.id)
    return ExpenseResponse.model_validate(expense)


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: UUID,
    db: DbSession,
    current_user: ExpenseReader,
) -> ExpenseResponse:
    """Get expense by ID."""
    expense = await _get_accessible_expense(db, expense_id, current_user)
    return ExpenseResponse.model_validate(expense)


@router.put("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: UUID,
    expense_data: ExpenseUpdate,
    db: DbSession,
    current_user: ExpenseWriter,
) -> ExpenseResponse:
    """Update an expense."""
    expense = await _get_accessible_expense(db, expense_id, current_user)
    updated = await expense_service.update_expense(db, expense, expense_data)
    return ExpenseResponse.model_validate(updated)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: UUID,
    db: DbSession,
    current_user: ExpenseDeleter,
) -> None:
    """Delete an expense (principal, admin)."""
    expense = await _get_accessible_expense(db, expense_id, current_user)
    await expense_service.delete_expense(db, expense)
    logger.info("Expense %s deleted by %s", expense_id, current_user.id)
