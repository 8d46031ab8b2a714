"""User profile schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pta.core.permissions import Role
from pta.schemas.school import SchoolInfo
from pta.schemas.validators import reject_null


class UserProfileCreate(BaseModel):
    """Schema for creating a profile for an existing auth user."""

    id: UUID  # Auth provider user id
    full_name: str | None = Field(None, max_length=255)
    role: Role
    school_id: UUID | None = None


class UserProfileUpdate(BaseModel):
    """Schema for updating a profile (admin)."""

    full_name: str | None = Field(None, max_length=255)
    role: Role | None = None
    school_id: UUID | None = None

    @field_validator("role")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)


class ProfileUpdate(BaseModel):
    """Schema for users updating their own profile."""

    full_name: str | None = Field(None, max_length=255)
    school_id: UUID | None = None


class UserInfo(BaseModel):
    """Nested user info, e.g. for who recorded a payment."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    full_name: str | None


class UserProfileResponse(BaseModel):
    """User profile response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    role: Role
    school_id: UUID | None
    full_name: str | None
    created_at: datetime
    school: SchoolInfo | None = None
