"""Expense service - business logic for expense operations."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pta.models.expense import Expense
from pta.schemas.expense import ExpenseCreate, ExpenseUpdate


async def get_expense_by_id(db: AsyncSession, expense_id: UUID) -> Expense | None:
    """Get expense by ID."""
    query = (
        select(Expense)
        .where(Expense.id == expense_id)
        .options(
            selectinload(Expense.school),
            selectinload(Expense.created_by),
        )
        .execution_options(populate_existing=True)
    )
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_expenses(
    db: AsyncSession,
    *,
    school_id: UUID | None = None,
    category: str | None = None,
    skip: int = 0,
    limit: int = 100,
) -> list[Expense]:
    """Get expenses, newest first."""
    query = select(Expense)

    if school_id is not None:
        query = query.where(Expense.school_id == school_id)
    if category:
        query = query.where(Expense.category == category)

    query = query.options(
        selectinload(Expense.school),
        selectinload(Expense.created_by),
    ).order_by(Expense.created_at.desc())
    query = query.offset(skip).limit(limit)

    result = await db.execute(query)
    return list(result.scalars().all())


async def create_expense(
    db: AsyncSession,
    expense_data: ExpenseCreate,
    created_by_id: UUID,
) -> Expense:
    """Create a new expense."""
    expense = Expense(
        description=expense_data.description,
        amount=expense_data.amount,
        category=expense_data.category,
        receipt_url=expense_data.receipt_url,
        school_id=expense_data.school_id,
        created_by_id=created_by_id,
    )
    db.add(expense)
    await db.commit()

    return await get_expense_by_id(db, expense.id)


async def update_expense(
    db: AsyncSession,
    expense: Expense,
    expense_data: ExpenseUpdate,
) -> Expense:
    """Update an existing expense."""
    update_data = expense_data.model_dump(exclude_unset=True)

    for field, value in update_data.items():
        setattr(expense, field, value)

    await db.commit()

    return await get_expense_by_id(db, expense.id)


async def delete_expense(db: AsyncSession, expense: Expense) -> None:
    """Delete an expense."""
    await db.delete(expense)
    await db.commit()
