"""Payment service - business logic for payment operations."""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pta.models.parent import Parent
from pta.models.payment import Payment
from pta.models.student import Student
from pta.schemas.payment import PaymentCreate, PaymentUpdate


def _with_relations(query):
    return query.options(
        selectinload(Payment.parent),
        selectinload(Payment.created_by),
    )


async def get_payment_by_id(db: AsyncSession, payment_id: UUID) -> Payment | None:
    """Get payment by ID."""
    result = await db.execute(
        _with_relations(select(Payment).where(Payment.id == payment_id))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_payments(
    db: AsyncSession,
    *,
    parent_id: UUID | None = None,
    school_id: UUID | None = None,
    parent_user_id: UUID | None = None,
    skip: int = 0,
    limit: int = 100,
) -> list[Payment]:
    """Get payments, newest first, with optional filters."""
    query = _with_relations(select(Payment))

    if parent_id is not None:
        query = query.where(Payment.parent_id == parent_id)

    if school_id is not None:
        query = query.where(
            Payment.parent_id.in_(select(Parent.id).where(Parent.school_id == school_id))
        )

    if parent_user_id is not None:
        query = query.where(
            Payment.parent_id.in_(select(Parent.id).where(Parent.user_id == parent_user_id))
        )

    query = query.order_by(Payment.created_at.desc()).offset(skip).limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def create_payment(
    db: AsyncSession,
    payment_data: PaymentCreate,
    created_by_id: UUID,
) -> Payment:
    """Record a payment and mark the parent and their students as paid."""
    payment = Payment(
        parent_id=payment_data.parent_id,
        amount=payment_data.amount,
        category=payment_data.category,
        receipt_url=payment_data.receipt_url,
        payment_method=payment_data.payment_method,
        notes=payment_data.notes,
        created_by_id=created_by_id,
    )
    db.add(payment)
    await mark_parent_paid(db, payment_data.parent_id)
    await db.commit()

    return await get_payment_by_id(db, payment.id)


async def mark_parent_paid(db: AsyncSession, parent_id: UUID) -> None:
    """Flag a parent and all of their students as paid. Does not commit."""
    await db.execute(
        update(Parent)
        .where(Parent.id == parent_id)
        .values(payment_status=True, payment_date=datetime.now(timezone.utc))
    )
    await db.execute(
        update(Student).where(Student.parent_id == parent_id).values(payment_status=True)
    )


async def update_payment(
    db: AsyncSession,
    payment: Payment,
    payment_data: PaymentUpdate,
) -> Payment:
    """Update an existing payment."""
    for field, value in payment_data.model_dump(exclude_unset=True).items():
        setattr(payment, field, value)

    await db.commit()

    return await get_payment_by_id(db, payment.id)


async def delete_payment(db: AsyncSession, payment: Payment) -> None:
    """Delete a payment. The parent's payment status is left as is."""
    await db.delete(payment)
    await db.commit()
