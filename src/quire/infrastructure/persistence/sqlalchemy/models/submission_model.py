"""SQLAlchemy model for member submissions."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quire.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)

if TYPE_CHECKING:
    from quire.infrastructure.persistence.sqlalchemy.models.user_model import (
        UserModel,
    )


class SubmissionModel(Base, TimestampMixin):
    """Database model for submissions.

    ``category`` and ``status`` are stored as their enum values and
    constrained at the database level as well.
    """

    __tablename__ = "submissions"
    __table_args__ = (
        CheckConstraint(
            "status IN ('PENDING', 'APPROVED', 'REJECTED')",
            name="ck_submissions_status",
        ),
        CheckConstraint(
            "category IN ('MY_NEWS', 'SAYING_HELLO', 'MY_SAY')",
            name="ck_submissions_category",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default="PENDING",
        index=True,
    )

    reviewed_by: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    review_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    author: Mapped[UserModel] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<SubmissionModel(id={self.id}, status={self.status})>"
