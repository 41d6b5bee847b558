"""SQLAlchemy model for the credential store."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from quire.domain.shared.time import utc_now
from quire_auth.persistence.sqlalchemy.base import AuthBase


class UserCredentialModel(AuthBase):
    """One bcrypt hash per member.

    ``user_id`` carries no foreign key: the auth tables live in their own
    metadata and never join against ``users``.
    """

    __tablename__ = "user_credentials"

    user_id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    password_changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<UserCredentialModel(user_id={self.user_id})>"
