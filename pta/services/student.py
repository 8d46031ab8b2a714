"""Student service."""

from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pta.models.parent import Parent
from pta.models.school_class import SchoolClass
from pta.models.student import Student
from pta.schemas.student import StudentCreate, StudentUpdate


def _with_relations(query):
    return query.options(
        selectinload(Student.school_class),
        selectinload(Student.parent),
    )


async def get_student_by_id(db: AsyncSession, student_id: UUID) -> Student | None:
    """Get student by ID."""
    result = await db.execute(
        _with_relations(select(Student).where(Student.id == student_id))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_students(
    db: AsyncSession,
    *,
    class_id: UUID | None = None,
    parent_id: UUID | None = None,
    school_id: UUID | None = None,
    parent_user_id: UUID | None = None,
    search: str | None = None,
    without_parent: bool = False,
    skip: int = 0,
    limit: int = 100,
) -> list[Student]:
    """Get students ordered by name with optional filters."""
    query = _with_relations(select(Student))

    if class_id is not None:
        query = query.where(Student.class_id == class_id)

    if parent_id is not None:
        query = query.where(Student.parent_id == parent_id)

    if school_id is not None:
        # A student belongs to the school of their class or of their parent
        query = query.where(
            or_(
                Student.class_id.in_(
                    select(SchoolClass.id).where(SchoolClass.school_id == school_id)
                ),
                Student.parent_id.in_(select(Parent.id).where(Parent.school_id == school_id)),
            )
        )

    if parent_user_id is not None:
        query = query.where(
            Student.parent_id.in_(select(Parent.id).where(Parent.user_id == parent_user_id))
        )

    if without_parent:
        query = query.where(Student.parent_id.is_(None))

    if search:
        query = query.where(
            or_(
                Student.name.ilike(f"%{search}%"),
                Student.student_number.ilike(f"%{search}%"),
            )
        )

    query = query.order_by(Student.name).offset(skip).limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


def _build_student(student_data: StudentCreate) -> Student:
    return Student(
        name=student_data.name,
        class_id=student_data.class_id,
        parent_id=student_data.parent_id,
        student_number=student_data.student_number,
    )


async def create_student(db: AsyncSession, student_data: StudentCreate) -> Student:
    """Create a new student."""
    student = _build_student(student_data)

    db.add(student)
    await db.commit()

    return await get_student_by_id(db, student.id)


async def bulk_create_students(
    db: AsyncSession,
    students_data: list[StudentCreate],
) -> list[Student]:
    """Create several students in one transaction."""
    students = [_build_student(data) for data in students_data]

    db.add_all(students)
    await db.commit()

    result = await db.execute(
        _with_relations(select(Student).where(Student.id.in_([s.id for s in students])))
        .execution_options(populate_existing=True)
        .order_by(Student.name)
    )
    return list(result.scalars().all())


async def update_student(
    db: AsyncSession,
    student: Student,
    student_data: StudentUpdate,
) -> Student:
    """Update a student."""
    for field, value in student_data.model_dump(exclude_unset=True).items():
        setattr(student, field, value)

    await db.commit()

    return await get_student_by_id(db, student.id)


async def delete_student(db: AsyncSession, student: Student) -> None:
    """Delete a student."""
    await db.delete(student)
    await db.commit()
