"""School class schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pta.schemas.school import SchoolInfo
from pta.schemas.user_profile import UserInfo
from pta.schemas.validators import reject_null


class ClassCreate(BaseModel):
    """Schema for creating a class."""

    name: str = Field(..., min_length=1, max_length=255)
    school_id: UUID
    grade_level: str | None = Field(None, max_length=50)
    teacher_id: UUID | None = None


class ClassUpdate(BaseModel):
    """Schema for updating a class."""

    name: str | None = Field(None, min_length=1, max_length=255)
    grade_level: str | None = Field(None, max_length=50)
    teacher_id: UUID | None = None

    @field_validator("name")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)


class ClassInfo(BaseModel):
    """Nested class info."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    grade_level: str | None


class ClassStudentInfo(BaseModel):
    """Student as listed inside a class."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    payment_status: bool


class ClassResponse(BaseModel):
    """Class response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    school_id: UUID | None
    grade_level: str | None
    teacher_id: UUID | None
    created_at: datetime
    school: SchoolInfo | None = None
    teacher: UserInfo | None = None


class ClassDetailResponse(ClassResponse):
    """Class with its students."""

    students: list[ClassStudentInfo] = []
