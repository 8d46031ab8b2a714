"""School service."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pta.models.school import School
from pta.schemas.school import SchoolCreate, SchoolUpdate


async def get_school_by_id(db: AsyncSession, school_id: UUID) -> School | None:
    """Get school by ID."""
    result = await db.execute(select(School).where(School.id == school_id))
    return result.scalar_one_or_none()


async def get_schools(db: AsyncSession, *, school_id: UUID | None = None) -> list[School]:
    """Get schools ordered by name, optionally only one school."""
    query = select(School)
    if school_id is not None:
        query = query.where(School.id == school_id)
    result = await db.execute(query.order_by(School.name))
    return list(result.scalars().all())


async def create_school(db: AsyncSession, school_data: SchoolCreate) -> School:
    """Create a new school."""
    school = School(name=school_data.name, address=school_data.address)
    db.add(school)
    await db.commit()
    await db.refresh(school)
    return school


async def update_school(db: AsyncSession, school: School, school_data: SchoolUpdate) -> School:
    """Update a school."""
    for field, value in school_data.model_dump(exclude_unset=True).items():
        setattr(school, field, value)

    await db.commit()
    await db.refresh(school)
    return school


async def delete_school(db: AsyncSession, school: School) -> None:
    """Delete a school and, through the database, everything belonging to it."""
    await db.delete(school)
    await db.commit()
