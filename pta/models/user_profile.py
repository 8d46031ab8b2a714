"""User profile model."""

from uuid import UUID

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pta.core.database import BaseModel
from pta.core.permissions import Role


class UserProfile(BaseModel):
    """
    Application profile of an authenticated user.

    The id is the auth provider's user id; credentials live with the provider.
    """

    __tablename__ = "user_profiles"

    role: Mapped[Role] = mapped_column(String(20), nullable=False)
    school_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("schools.id", ondelete="SET NULL"),
        nullable=True,  # NULL for admins and users not yet assigned
        index=True,
    )
    full_name: Mapped[str | None] = mapped_column(String(255))

    # Relationships
    school: Mapped["School | None"] = relationship("School", back_populates="user_profiles")
    classes: Mapped[list["SchoolClass"]] = relationship(
        "SchoolClass", back_populates="teacher", passive_deletes=True
    )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def __repr__(self) -> str:
        return f"<UserProfile(id={self.id}, role={self.role})>"
