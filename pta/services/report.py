"""Report service - business logic for generating reports."""

import logging
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from uuid import UUID

from sqlalchemy import case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pta.core.errors import DATABASE_UNAVAILABLE_ERRORS
from pta.models.expense import Expense
from pta.models.parent import Parent
from pta.models.payment import Payment
from pta.models.school_class import SchoolClass
from pta.models.student import Student

logger = logging.getLogger(__name__)


def _enum_value(value) -> str:
    return value.value if hasattr(value, "value") else value


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


async def get_school_summary(db: AsyncSession, school_id: UUID) -> dict:
    """
    Membership and money totals for a school.

    Returns an empty dict (an all-zero summary) when the database cannot be
    reached.
    """
    try:
        return await _build_school_summary(db, school_id)
    except DATABASE_UNAVAILABLE_ERRORS as exc:
        logger.warning("Database not available, returning empty summary for school %s: %s", school_id, exc)
        return {}


async def _build_school_summary(db: AsyncSession, school_id: UUID) -> dict:
    school_parent_ids = select(Parent.id).where(Parent.school_id == school_id)
    school_class_ids = select(SchoolClass.id).where(SchoolClass.school_id == school_id)

    parents_row = (
        await db.execute(
            select(
                func.count(Parent.id).label("total"),
                func.sum(case((Parent.payment_status.is_(True), 1), else_=0)).label("paid"),
            ).where(Parent.school_id == school_id)
        )
    ).one()
    total_parents = parents_row.total
    paid_parents = parents_row.paid or 0

    total_students = (
        await db.execute(
            select(func.count(Student.id)).where(
                or_(
                    Student.parent_id.in_(school_parent_ids),
                    Student.class_id.in_(school_class_ids),
                )
            )
        )
    ).scalar() or 0

    total_classes = (
        await db.execute(
            select(func.count(SchoolClass.id)).where(SchoolClass.school_id == school_id)
        )
    ).scalar() or 0

    payments_row = (
        await db.execute(
            select(
                func.count(Payment.id).label("count"),
                func.coalesce(func.sum(Payment.amount), 0).label("total"),
            ).where(Payment.parent_id.in_(school_parent_ids))
        )
    ).one()
    total_payments = payments_row.count
    total_amount = Decimal(payments_row.total or 0)

    total_expenses = Decimal(
        (
            await db.execute(
                select(func.coalesce(func.sum(Expense.amount), 0)).where(
                    Expense.school_id == school_id
                )
            )
        ).scalar()
        or 0
    )

    payment_rate = round(paid_parents / total_parents * 100, 2) if total_parents else 0.0
    average_payment = (
        (total_amount / total_payments).quantize(Decimal("0.01")) if total_payments else Decimal("0")
    )

    return {
        "total_parents": total_parents,
        "paid_parents": paid_parents,
        "payment_rate": payment_rate,
        "total_students": total_students,
        "total_classes": total_classes,
        "total_payments": total_payments,
        "total_amount": total_amount,
        "average_payment": average_payment,
        "total_expenses": total_expenses,
        "net_balance": total_amount - total_expenses,
    }


async def get_teacher_report(db: AsyncSession, teacher_id: UUID) -> list[SchoolClass]:
    """Classes of a teacher with each student and the student's parent."""
    result = await db.execute(
        select(SchoolClass)
        .where(SchoolClass.teacher_id == teacher_id)
        .options(selectinload(SchoolClass.students).selectinload(Student.parent))
        .order_by(SchoolClass.name)
    )
    return list(result.scalars().all())


async def get_payment_analytics(
    db: AsyncSession,
    *,
    school_id: UUID | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> dict:
    """Payments within an inclusive date range, with totals by method and category."""
    query = select(Payment)

    if school_id is not None:
        query = query.where(
            Payment.parent_id.in_(select(Parent.id).where(Parent.school_id == school_id))
        )
    if start_date is not None:
        query = query.where(Payment.created_at >= _start_of_day(start_date))
    if end_date is not None:
        query = query.where(Payment.created_at < _start_of_day(end_date + timedelta(days=1)))

    result = await db.execute(query.order_by(Payment.created_at.desc()))
    payments = list(result.scalars().all())

    total_amount = Decimal("0")
    by_method: dict[str, Decimal] = {}
    by_category: dict[str, Decimal] = {}

    for payment in payments:
        total_amount += payment.amount
        method = _enum_value(payment.payment_method)
        category = _enum_value(payment.category)
        by_method[method] = by_method.get(method, Decimal("0")) + payment.amount
        by_category[category] = by_category.get(category, Decimal("0")) + payment.amount

    return {
        "total_payments": len(payments),
        "total_amount": total_amount,
        "by_method": by_method,
        "by_category": by_category,
        "payments": payments,
    }
