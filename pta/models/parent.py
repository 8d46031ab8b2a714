"""Parent model."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pta.core.database import BaseModel


class Parent(BaseModel):
    """Parent (PTA member) - pays dues on behalf of their children."""

    __tablename__ = "parents"

    user_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        nullable=True,  # Set when the parent has a login
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_number: Mapped[str | None] = mapped_column(String(50))
    email: Mapped[str | None] = mapped_column(String(255), unique=True)
    payment_status: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default="false",
    )
    payment_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    school_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    # Relationships
    school: Mapped["School | None"] = relationship("School", back_populates="parents")
    students: Mapped[list["Student"]] = relationship(
        "Student",
        back_populates="parent",
        cascade="save-update, merge, delete",
        passive_deletes=True,
    )
    payments: Mapped[list["Payment"]] = relationship(
        "Payment",
        back_populates="parent",
        cascade="save-update, merge, delete",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Parent(id={self.id}, name={self.name})>"
