"""School class service."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pta.models.school_class import SchoolClass
from pta.schemas.school_class import ClassCreate, ClassUpdate


async def get_class_by_id(db: AsyncSession, class_id: UUID) -> SchoolClass | None:
    """Get class by ID with its school, teacher and students."""
    result = await db.execute(
        select(SchoolClass)
        .where(SchoolClass.id == class_id)
        .options(
            selectinload(SchoolClass.school),
            selectinload(SchoolClass.teacher),
            selectinload(SchoolClass.students),
        )
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_classes(
    db: AsyncSession,
    *,
    school_id: UUID | None = None,
    teacher_id: UUID | None = None,
    without_teacher: bool = False,
    skip: int = 0,
    limit: int = 100,
) -> list[SchoolClass]:
    """Get classes ordered by name with optional filters."""
    query = select(SchoolClass).options(
        selectinload(SchoolClass.school),
        selectinload(SchoolClass.teacher),
    )

    if school_id is not None:
        query = query.where(SchoolClass.school_id == school_id)

    if teacher_id is not None:
        query = query.where(SchoolClass.teacher_id == teacher_id)

    if without_teacher:
        query = query.where(SchoolClass.teacher_id.is_(None))

    query = query.order_by(SchoolClass.name).offset(skip).limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def create_class(db: AsyncSession, class_data: ClassCreate) -> SchoolClass:
    """Create a new class."""
    school_class = SchoolClass(
        name=class_data.name,
        school_id=class_data.school_id,
        grade_level=class_data.grade_level,
        teacher_id=class_data.teacher_id,
    )

    db.add(school_class)
    await db.commit()

    return await get_class_by_id(db, school_class.id)


async def update_class(
    db: AsyncSession,
    school_class: SchoolClass,
    class_data: ClassUpdate,
) -> SchoolClass:
    """Update a class."""
    for field, value in class_data.model_dump(exclude_unset=True).items():
        setattr(school_class, field, value)

    await db.commit()

    return await get_class_by_id(db, school_class.id)


async def delete_class(db: AsyncSession, school_class: SchoolClass) -> None:
    """Delete a class together with its students."""
    await db.delete(school_class)
    await db.commit()
