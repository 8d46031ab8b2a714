"""Payment model."""

from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pta.core.database import BaseModel

# Annual PTA membership dues
DEFAULT_PAYMENT_AMOUNT = Decimal("250")


class PaymentCategory(str, Enum):
    """What the money was collected for."""

    MEMBERSHIP = "membership"
    FUNDRAISING = "fundraising"
    DONATION = "donation"
    EVENT = "event"
    SUPPLIES = "supplies"
    UNIFORM = "uniform"
    OTHER = "other"


class PaymentMethod(str, Enum):
    """How payment was received."""

    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    CHECK = "check"
    GCASH = "gcash"
    OTHER = "other"


class Payment(BaseModel):
    """Money received from a parent."""

    __tablename__ = "payments"

    parent_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("parents.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        default=DEFAULT_PAYMENT_AMOUNT,
    )
    category: Mapped[PaymentCategory] = mapped_column(
        String(20),
        nullable=False,
        default=PaymentCategory.MEMBERSHIP,
        server_default="membership",
    )
    receipt_url: Mapped[str | None] = mapped_column(Text)
    created_by_id: Mapped[UUID | None] = mapped_column(
        "created_by",
        Uuid,
        ForeignKey("user_profiles.id", ondelete="SET NULL"),
        nullable=True,
    )  # User who recorded the payment
    payment_method: Mapped[PaymentMethod] = mapped_column(
        String(20),
        default=PaymentMethod.CASH,
        server_default="cash",
    )
    notes: Mapped[str | None] = mapped_column(Text)

    # Relationships
    parent: Mapped["Parent | None"] = relationship("Parent", back_populates="payments")
    created_by: Mapped["UserProfile | None"] = relationship("UserProfile")

    def __repr__(self) -> str:
        return f"<Payment(id={self.id}, amount={self.amount})>"
