"""SchoolClass model."""

from uuid import UUID

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pta.core.database import BaseModel


class SchoolClass(BaseModel):
    """A class (section) of a school, optionally led by a teacher."""

    __tablename__ = "classes"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    school_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    grade_level: Mapped[str | None] = mapped_column(String(50))
    teacher_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("user_profiles.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Relationships
    school: Mapped["School | None"] = relationship("School", back_populates="classes")
    teacher: Mapped["UserProfile | None"] = relationship("UserProfile", back_populates="classes")
    students: Mapped[list["Student"]] = relationship(
        "Student",
        back_populates="school_class",
        cascade="save-update, merge, delete",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<SchoolClass(id={self.id}, name={self.name})>"
