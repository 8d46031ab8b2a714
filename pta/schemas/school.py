"""School schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pta.schemas.validators import reject_null


class SchoolCreate(BaseModel):
    """Schema for creating a school."""

    name: str = Field(..., min_length=1, max_length=255)
    address: str | None = Field(None, max_length=500)


class SchoolUpdate(BaseModel):
    """Schema for updating a school."""

    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)


class SchoolInfo(BaseModel):
    """Nested school info embedded in other responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class SchoolResponse(BaseModel):
    """School response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    address: str | None
    created_at: datetime
