"""Parent schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pta.models.payment import PaymentMethod
from pta.schemas.school import SchoolInfo
from pta.schemas.validators import ContactNumber, Email, reject_null


class ParentCreate(BaseModel):
    """Schema for creating a parent."""

    name: str = Field(..., min_length=1, max_length=255)
    contact_number: ContactNumber | None = None
    email: Email | None = None
    school_id: UUID | None = None
    user_id: UUID | None = None  # Auth user, when the parent has a login


class ParentUpdate(BaseModel):
    """Schema for updating a parent."""

    name: str | None = Field(None, min_length=1, max_length=255)
    contact_number: ContactNumber | None = None
    email: Email | None = None
    school_id: UUID | None = None
    user_id: UUID | None = None  # Link or unlink the parent's login

    @field_validator("name")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)


class PaymentStatusUpdate(BaseModel):
    """Schema for marking several parents paid or unpaid."""

    parent_ids: list[UUID] = Field(..., min_length=1)
    payment_status: bool


class ParentStudentInfo(BaseModel):
    """Nested student info in parent response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    class_id: UUID | None
    payment_status: bool


class ParentPaymentInfo(BaseModel):
    """Nested payment info in parent detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    amount: Decimal
    payment_method: PaymentMethod
    created_at: datetime


class ParentResponse(BaseModel):
    """Parent response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID | None
    name: str
    contact_number: str | None
    email: str | None
    payment_status: bool
    payment_date: datetime | None
    school_id: UUID | None
    created_at: datetime
    school: SchoolInfo | None = None
    students: list[ParentStudentInfo] = []


class ParentDetailResponse(ParentResponse):
    """Parent with payment history."""

    payments: list[ParentPaymentInfo] = []
