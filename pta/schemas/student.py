"""Student schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pta.schemas.school_class import ClassInfo
from pta.schemas.validators import reject_null


class StudentCreate(BaseModel):
    """Schema for creating a new student."""

    name: str = Field(..., min_length=1, max_length=255)
    class_id: UUID | None = None
    parent_id: UUID | None = None
    student_number: str | None = Field(None, min_length=1, max_length=50)


class StudentBulkCreate(BaseModel):
    """Schema for enrolling several students at once."""

    students: list[StudentCreate] = Field(..., min_length=1, max_length=500)


class StudentUpdate(BaseModel):
    """Schema for updating a student."""

    name: str | None = Field(None, min_length=1, max_length=255)
    class_id: UUID | None = None
    parent_id: UUID | None = None
    student_number: str | None = Field(None, min_length=1, max_length=50)
    payment_status: bool | None = None

    @field_validator("name", "payment_status")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)


class StudentParentInfo(BaseModel):
    """Nested parent info in student response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    contact_number: str | None
    payment_status: bool


class StudentResponse(BaseModel):
    """Student response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    class_id: UUID | None
    parent_id: UUID | None
    payment_status: bool
    student_number: str | None
    created_at: datetime
    school_class: ClassInfo | None = None
    parent: StudentParentInfo | None = None
