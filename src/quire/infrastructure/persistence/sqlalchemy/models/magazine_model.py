"""SQLAlchemy models for magazine issues and their items."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quire.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from quire.infrastructure.persistence.sqlalchemy.models.submission_model import (
    SubmissionModel,
)


class MagazineModel(Base, TimestampMixin):
    """Database model for magazine issues.

    Data Integrity Constraints:
    - published_at is set if and only if is_public is true

    The integer primary key is monotonic and breaks ties between issues
    published at the same instant.
    """

    __tablename__ = "magazines"
    __table_args__ = (
        CheckConstraint(
            "(is_public AND published_at IS NOT NULL) OR "
            "(NOT is_public AND published_at IS NULL)",
            name="ck_magazines_published_at_iff_public",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    slug: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    version: Mapped[str] = mapped_column(String(32), nullable=False)

    is_public: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        index=True,
    )
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )
    published_by: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
    created_by: Mapped[UUID] = mapped_column(Uuid, nullable=False)

    items: Mapped[list[MagazineItemModel]] = relationship(
        back_populates="magazine",
        cascade="all, delete-orphan",
        order_by="MagazineItemModel.position",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<MagazineModel(id={self.id}, is_public={self.is_public})>"


class MagazineItemModel(Base):
    """Placement of one submission in one magazine.

    The unique constraint on submission_id is what prevents two
    concurrent assemblies from claiming the same submission.
    """

    __tablename__ = "magazine_items"
    __table_args__ = (
        UniqueConstraint("submission_id", name="uq_magazine_items_submission_id"),
        UniqueConstraint(
            "magazine_id",
            "position",
            name="uq_magazine_items_magazine_position",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    magazine_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("magazines.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    submission_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("submissions.id"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    magazine: Mapped[MagazineModel] = relationship(back_populates="items")
    submission: Mapped[SubmissionModel] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return (
            f"<MagazineItemModel(magazine_id={self.magazine_id}, "
            f"submission_id={self.submission_id})>"
        )
