"""Expense model."""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pta.core.database import BaseModel


class Expense(BaseModel):
    """Money spent by the PTA."""

    __tablename__ = "expenses"

    description: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    receipt_url: Mapped[str | None] = mapped_column(Text)
    created_by_id: Mapped[UUID | None] = mapped_column(
        "created_by",
        Uuid,
        ForeignKey("user_profiles.id", ondelete="SET NULL"),
        nullable=True,
    )  # User who recorded the expense
    school_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    # Relationships
    school: Mapped["School | None"] = relationship("School", back_populates="expenses")
    created_by: Mapped["UserProfile | None"] = relationship("UserProfile")

    def __repr__(self) -> str:
        return f"<Expense(id={self.id}, amount={self.amount})>"
