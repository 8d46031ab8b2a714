"""User roles and permissions."""

from enum import Enum
from uuid import UUID


class Role(str, Enum):
    """User roles in the system."""

    PARENT = "parent"  # Sees own children and payments
    TEACHER = "teacher"  # Sees own classes and their students
    TREASURER = "treasurer"  # Records payments and expenses
    PRINCIPAL = "principal"  # Runs the school, approves expenses
    ADMIN = "admin"  # Full access across schools


# Never a real school id; filtering on it matches no rows
UNASSIGNED_SCHOOL_ID = UUID(int=0)

# Permissions by role
ROLE_PERMISSIONS = {
    Role.PARENT: [
        "schools:read",
        "classes:read",
        "students:read",
        "payments:read",
    ],
    Role.TEACHER: [
        "schools:read",
        "classes:read",
        "students:read",
        "students:write",
        "parents:read",
        "payments:read",
        "reports:read",
    ],
    Role.TREASURER: [
        "schools:read",
        "classes:read",
        "students:read",
        "students:write",
        "parents:read",
        "parents:write",
        "payments:read",
        "payments:write",
        "expenses:read",
        "expenses:write",
        "reports:read",
        "reports:finance",
    ],
    Role.PRINCIPAL: [
        "schools:read",
        "classes:read",
        "classes:write",
        "students:read",
        "students:write",
        "students:delete",
        "parents:read",
        "parents:write",
        "payments:read",
        "expenses:read",
        "expenses:write",
        "expenses:delete",
        "users:read",
        "reports:read",
        "reports:finance",
    ],
    Role.ADMIN: [
        "schools:read",
        "schools:write",
        "classes:read",
        "classes:write",
        "students:read",
        "students:write",
        "students:delete",
        "parents:read",
        "parents:write",
        "payments:read",
        "payments:write",
        "payments:delete",
        "expenses:read",
        "expenses:write",
        "expenses:delete",
        "users:read",
        "users:write",
        "reports:read",
        "reports:finance",
    ],
}


def has_permission(role: Role | str, permission: str) -> bool:
    """Check if a role has a specific permission."""
    try:
        role = Role(role)
    except ValueError:
        return False
    return permission in ROLE_PERMISSIONS.get(role, [])


def roles_with_permission(permission: str) -> list[Role]:
    """List the roles granted a permission, in declaration order."""
    return [role for role in Role if permission in ROLE_PERMISSIONS[role]]


def is_school_scoped(role: Role | str) -> bool:
    """Check if list queries for this role are pinned to the caller's school."""
    return role != Role.ADMIN


def scoped_school_id(profile, requested: UUID | None) -> UUID | None:
    """
    Pin a school filter to the caller's own school for school-scoped roles.

    A school-scoped user without a school gets a filter that matches nothing.
    """
    if not is_school_scoped(profile.role):
        return requested
    if profile.school_id is None:
        return UNASSIGNED_SCHOOL_ID
    return profile.school_id


def can_access_school(profile, school_id: UUID | None) -> bool:
    """Check if the caller may see or change data of a specific school."""
    if not is_school_scoped(profile.role):
        return True
    return profile.school_id is not None and profile.school_id == school_id
