"""School model."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pta.core.database import BaseModel


class School(BaseModel):
    """School model - represents a tenant in the system."""

    __tablename__ = "schools"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(Text)

    # Relationships
    classes: Mapped[list["SchoolClass"]] = relationship(
        "SchoolClass",
        back_populates="school",
        cascade="save-update, merge, delete",
        passive_deletes=True,
    )
    parents: Mapped[list["Parent"]] = relationship(
        "Parent",
        back_populates="school",
        cascade="save-update, merge, delete",
        passive_deletes=True,
    )
    expenses: Mapped[list["Expense"]] = relationship(
        "Expense",
        back_populates="school",
        cascade="save-update, merge, delete",
        passive_deletes=True,
    )
    user_profiles: Mapped[list["UserProfile"]] = relationship(
        "UserProfile", back_populates="school", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<School(id={self.id}, name={self.name})>"
