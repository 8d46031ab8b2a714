"""Test configuration and fixtures."""

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pta.core.database import Base, get_db
from pta.core.permissions import Role
from pta.core.security import create_session_token
from pta.models.parent import Parent
from pta.models.school import School
from pta.models.school_class import SchoolClass
from pta.models.student import Student
from pta.models.user_profile import UserProfile
from main import app

# In-memory SQLite by default; point TEST_DATABASE_URL at a Postgres test database to run against it
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

if TEST_DATABASE_URL.startswith("sqlite"):
    # One shared connection so every session sees the same in-memory database
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(test_engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

else:
    from sqlalchemy.pool import NullPool

    test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)

test_session_maker = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
    """Override database dependency for tests."""
    async with test_session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def setup_database() -> AsyncGenerator[None, None]:
    """Create test database tables before each test that needs it."""
    app.dependency_overrides[get_db] = override_get_db

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()

    app.dependency_overrides.pop(get_db, None)


@pytest_asyncio.fixture
async def db(setup_database: None) -> AsyncGenerator[AsyncSession, None]:
    """Get database session for tests."""
    async with test_session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(setup_database: None) -> AsyncGenerator[AsyncClient, None]:
    """Get async HTTP client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


def auth_header(token: str) -> dict[str, str]:
    """Create authorization header."""
    return {"Authorization": f"Bearer {token}"}


def token_for(profile: UserProfile) -> str:
    """Issue a session token for a profile's auth user."""
    return create_session_token(profile.id)


async def make_profile(
    db: AsyncSession,
    role: Role,
    school: School | None,
    full_name: str | None = None,
) -> UserProfile:
    """Create a user profile with the given role."""
    profile = UserProfile(
        role=role,
        school_id=school.id if school else None,
        full_name=full_name or f"{role.value.title()} User",
    )
    db.add(profile)
    await db.commit()
    await db.refresh(profile)
    return profile


# ============== Schools ==============


@pytest_asyncio.fixture
async def school(db: AsyncSession) -> School:
    """Create the school most tests run in."""
    school = School(name="Rizal Elementary School", address="1 Mabini St")
    db.add(school)
    await db.commit()
    await db.refresh(school)
    return school


@pytest_asyncio.fixture
async def other_school(db: AsyncSession) -> School:
    """Create a second school for isolation tests."""
    school = School(name="Bonifacio High School")
    db.add(school)
    await db.commit()
    await db.refresh(school)
    return school


# ============== Profiles ==============


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession) -> UserProfile:
    """Create an admin spanning all schools."""
    return await make_profile(db, Role.ADMIN, None, "Admin User")


@pytest_asyncio.fixture
async def principal_user(db: AsyncSession, school: School) -> UserProfile:
    return await make_profile(db, Role.PRINCIPAL, school, "Principal User")


@pytest_asyncio.fixture
async def treasurer_user(db: AsyncSession, school: School) -> UserProfile:
    return await make_profile(db, Role.TREASURER, school, "Treasurer User")


@pytest_asyncio.fixture
async def teacher_user(db: AsyncSession, school: School) -> UserProfile:
    return await make_profile(db, Role.TEACHER, school, "Teacher User")


@pytest_asyncio.fixture
async def parent_user(db: AsyncSession, school: School) -> UserProfile:
    return await make_profile(db, Role.PARENT, school, "Parent User")


@pytest.fixture
def admin_token(admin_user: UserProfile) -> str:
    return token_for(admin_user)


@pytest.fixture
def principal_token(principal_user: UserProfile) -> str:
    return token_for(principal_user)


@pytest.fixture
def treasurer_token(treasurer_user: UserProfile) -> str:
    return token_for(treasurer_user)


@pytest.fixture
def teacher_token(teacher_user: UserProfile) -> str:
    return token_for(teacher_user)


@pytest.fixture
def parent_token(parent_user: UserProfile) -> str:
    return token_for(parent_user)


# ============== School Data ==============


@pytest_asyncio.fixture
async def school_class(db: AsyncSession, school: School, teacher_user: UserProfile) -> SchoolClass:
    """Create a class taught by the teacher fixture."""
    school_class = SchoolClass(
        name="Grade 1 - Sampaguita",
        school_id=school.id,
        grade_level="1",
        teacher_id=teacher_user.id,
    )
    db.add(school_class)
    await db.commit()
    await db.refresh(school_class)
    return school_class


@pytest_asyncio.fixture
async def parent(db: AsyncSession, school: School, parent_user: UserProfile) -> Parent:
    """Create a parent record linked to the parent user's login."""
    parent = Parent(
        name="Maria Santos",
        contact_number="+639171234567",
        email="maria@example.com",
        school_id=school.id,
        user_id=parent_user.id,
    )
    db.add(parent)
    await db.commit()
    await db.refresh(parent)
    return parent


@pytest_asyncio.fixture
async def student(db: AsyncSession, school_class: SchoolClass, parent: Parent) -> Student:
    """Create a student in the class fixture, child of the parent fixture."""
    student = Student(
        name="Juan Santos",
        class_id=school_class.id,
        parent_id=parent.id,
        student_number="2026-0001",
    )
    db.add(student)
    await db.commit()
    await db.refresh(student)
    return student
