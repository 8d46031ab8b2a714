"""Pydantic schemas."""

from pta.schemas.school import (
    SchoolCreate,
    SchoolUpdate,
    SchoolResponse,
)
from pta.schemas.user_profile import (
    UserProfileCreate,
    UserProfileUpdate,
    ProfileUpdate,
    UserProfileResponse,
)

__all__ = [
    # School
    "SchoolCreate",
    "SchoolUpdate",
    "SchoolResponse",
    # User profile
    "UserProfileCreate",
    "UserProfileUpdate",
    "ProfileUpdate",
    "UserProfileResponse",
]
