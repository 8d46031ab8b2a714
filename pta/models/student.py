"""Student model."""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pta.core.database import BaseModel


class Student(BaseModel):
    """Student, linked to a class and to the parent who pays for them."""

    __tablename__ = "students"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    class_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("classes.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    parent_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("parents.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    payment_status: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default="false",
    )
    student_number: Mapped[str | None] = mapped_column(String(50), unique=True)

    # Relationships
    school_class: Mapped["SchoolClass | None"] = relationship(
        "SchoolClass", back_populates="students"
    )
    parent: Mapped["Parent | None"] = relationship("Parent", back_populates="students")

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, name={self.name})>"
