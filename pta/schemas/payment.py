"""Payment schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pta.models.payment import DEFAULT_PAYMENT_AMOUNT, PaymentCategory, PaymentMethod
from pta.schemas.user_profile import UserInfo
from pta.schemas.validators import reject_null


class PaymentCreate(BaseModel):
    """Schema for recording a payment."""

    parent_id: UUID
    amount: Decimal = Field(default=DEFAULT_PAYMENT_AMOUNT, gt=0, decimal_places=2)
    category: PaymentCategory = PaymentCategory.MEMBERSHIP
    receipt_url: str | None = Field(None, max_length=2000)
    payment_method: PaymentMethod = PaymentMethod.CASH
    notes: str | None = Field(None, max_length=2000)


class PaymentUpdate(BaseModel):
    """Schema for updating a payment."""

    amount: Decimal | None = Field(default=None, gt=0, decimal_places=2)
    category: PaymentCategory | None = None
    receipt_url: str | None = Field(None, max_length=2000)
    payment_method: PaymentMethod | None = None
    notes: str | None = Field(None, max_length=2000)

    @field_validator("amount", "category", "payment_method")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)


class PaymentParentInfo(BaseModel):
    """Nested parent info for payment response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    contact_number: str | None
    school_id: UUID | None


class PaymentResponse(BaseModel):
    """Schema for payment response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    parent_id: UUID | None
    amount: Decimal
    category: PaymentCategory
    receipt_url: str | None
    payment_method: PaymentMethod
    notes: str | None
    created_by_id: UUID | None
    created_at: datetime
    parent: PaymentParentInfo | None = None
    created_by: UserInfo | None = None
