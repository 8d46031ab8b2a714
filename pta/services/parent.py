"""Parent service."""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pta.models.parent import Parent
from pta.models.student import Student
from pta.schemas.parent import ParentCreate, ParentUpdate


async def get_parent_by_id(db: AsyncSession, parent_id: UUID) -> Parent | None:
    """Get parent by ID with students and payment history."""
    result = await db.execute(
        select(Parent)
        .where(Parent.id == parent_id)
        .options(
            selectinload(Parent.school),
            selectinload(Parent.students),
            selectinload(Parent.payments),
        )
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_parents(
    db: AsyncSession,
    *,
    school_id: UUID | None = None,
    search: str | None = None,
    payment_status: bool | None = None,
    skip: int = 0,
    limit: int = 100,
) -> list[Parent]:
    """Get parents ordered by name with optional filters."""
    query = select(Parent).options(
        selectinload(Parent.school),
        selectinload(Parent.students),
    )

    if school_id is not None:
        query = query.where(Parent.school_id == school_id)

    if payment_status is not None:
        query = query.where(Parent.payment_status == payment_status)

    if search:
        query = query.where(
            or_(
                Parent.name.ilike(f"%{search}%"),
                Parent.email.ilike(f"%{search}%"),
                Parent.contact_number.ilike(f"%{search}%"),
            )
        )

    query = query.order_by(Parent.name).offset(skip).limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def create_parent(db: AsyncSession, parent_data: ParentCreate) -> Parent:
    """Create a new parent."""
    parent = Parent(
        name=parent_data.name,
        contact_number=parent_data.contact_number,
        email=parent_data.email,
        school_id=parent_data.school_id,
        user_id=parent_data.user_id,
    )

    db.add(parent)
    await db.commit()

    return await get_parent_by_id(db, parent.id)


async def update_parent(db: AsyncSession, parent: Parent, parent_data: ParentUpdate) -> Parent:
    """Update a parent."""
    for field, value in parent_data.model_dump(exclude_unset=True).items():
        setattr(parent, field, value)

    await db.commit()

    return await get_parent_by_id(db, parent.id)


async def delete_parent(db: AsyncSession, parent: Parent) -> None:
    """Delete a parent together with their students and payments."""
    await db.delete(parent)
    await db.commit()


async def set_payment_status(
    db: AsyncSession,
    parent_ids: list[UUID],
    payment_status: bool,
) -> list[Parent]:
    """Mark parents, and their students, as paid or unpaid."""
    payment_date = datetime.now(timezone.utc) if payment_status else None

    await db.execute(
        update(Parent)
        .where(Parent.id.in_(parent_ids))
        .values(payment_status=payment_status, payment_date=payment_date)
    )
    await db.execute(
        update(Student)
        .where(Student.parent_id.in_(parent_ids))
        .values(payment_status=payment_status)
    )
    await db.commit()

    result = await db.execute(
        select(Parent)
        .where(Parent.id.in_(parent_ids))
        .options(selectinload(Parent.school), selectinload(Parent.students))
        .execution_options(populate_existing=True)
        .order_by(Parent.name)
    )
    return list(result.scalars().all())
