"""CLI commands for management tasks."""

import asyncio
import sys
from uuid import UUID

from sqlalchemy import select

from pta.core.database import async_session_maker
from pta.core.permissions import Role
from pta.core.security import create_session_token
from pta.models.school import School
from pta.models.user_profile import UserProfile


def _parse_uuid(value: str, name: str) -> UUID:
    try:
        return UUID(value)
    except ValueError:
        print(f"Error: {name} must be a UUID, got {value!r}")
        sys.exit(1)


async def create_school(name: str, address: str | None = None) -> None:
    """Create a school."""
    async with async_session_maker() as db:
        school = School(name=name, address=address)
        db.add(school)
        await db.commit()
        await db.refresh(school)

        print("✓ School created successfully!")
        print(f"  ID: {school.id}")
        print(f"  Name: {school.name}")


async def create_admin(user_id: UUID, full_name: str, school_id: UUID | None = None) -> None:
    """Give an auth user the admin role."""
    async with async_session_maker() as db:
        existing = await db.get(UserProfile, user_id)
        if existing:
            print(f"Error: User {user_id} already has a profile ({existing.role})!")
            sys.exit(1)

        if school_id is not None:
            result = await db.execute(select(School).where(School.id == school_id))
            if result.scalar_one_or_none() is None:
                print(f"Error: School {school_id} does not exist!")
                sys.exit(1)

        admin = UserProfile(
            id=user_id,
            full_name=full_name,
            role=Role.ADMIN,
            school_id=school_id,
        )

        db.add(admin)
        await db.commit()

        print("✓ Admin created successfully!")
        print(f"  ID: {admin.id}")
        print(f"  Name: {admin.full_name}")


def issue_token(user_id: UUID) -> None:
    """Print a session token for local testing against the API."""
    print(create_session_token(user_id))


def main() -> None:
    """CLI entry point."""
    if len(sys.argv) < 2:
        print("Usage: python -m pta.cli <command>")
        print("Commands:")
        print("  create-school <name> [address]")
        print("  create-admin <user_id> <full_name> [school_id]")
        print("  issue-token <user_id>")
        sys.exit(1)

    command = sys.argv[1]

    if command == "create-school":
        if len(sys.argv) not in (3, 4):
            print("Usage: python -m pta.cli create-school <name> [address]")
            sys.exit(1)

        address = sys.argv[3] if len(sys.argv) == 4 else None
        asyncio.run(create_school(sys.argv[2], address))
    elif command == "create-admin":
        if len(sys.argv) not in (4, 5):
            print("Usage: python -m pta.cli create-admin <user_id> <full_name> [school_id]")
            sys.exit(1)

        user_id = _parse_uuid(sys.argv[2], "user_id")
        school_id = _parse_uuid(sys.argv[4], "school_id") if len(sys.argv) == 5 else None
        asyncio.run(create_admin(user_id, sys.argv[3], school_id))
    elif command == "issue-token":
        if len(sys.argv) != 3:
            print("Usage: python -m pta.cli issue-token <user_id>")
            sys.exit(1)

        issue_token(_parse_uuid(sys.argv[2], "user_id"))
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
