"""Expense schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pta.schemas.school import SchoolInfo
from pta.schemas.user_profile import UserInfo
from pta.schemas.validators import reject_null


class ExpenseCreate(BaseModel):
    """Schema for creating an expense."""

    description: str = Field(..., min_length=1, max_length=1000)
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    category: str = Field(..., min_length=1, max_length=100)
    receipt_url: str | None = Field(None, max_length=2000)
    school_id: UUID | None = None


class ExpenseUpdate(BaseModel):
    """Schema for updating an expense."""

    description: str | None = Field(None, min_length=1, max_length=1000)
    amount: Decimal | None = Field(None, gt=0, decimal_places=2)
    category: str | None = Field(None, min_length=1, max_length=100)
    receipt_url: str | None = Field(None, max_length=2000)

    @field_validator("description", "amount", "category")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)


class ExpenseResponse(BaseModel):
    """Schema for expense response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    description: str
    amount: Decimal
    category: str
    receipt_url: str | None
    school_id: UUID | None
    created_by_id: UUID | None
    created_at: datetime
    school: SchoolInfo | None = None
    created_by: UserInfo | None = None
