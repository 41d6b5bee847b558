"""SQLAlchemy model for the refresh-token ledger."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from quire_auth.persistence.sqlalchemy.base import AuthBase


class RefreshTokenModel(AuthBase):
    """
    One row per issued refresh token.

    ``used_at`` is set when the token is rotated, ``revoked_at`` when its
    lineage is ended (logout, replay, role or password change).

    Table: refresh_tokens
    """

    __tablename__ = "refresh_tokens"

    # JWT "jti"
    token_id: Mapped[str] = mapped_column(String(64), primary_key=True)

    family_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)

    issued_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    revoked_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return (
            f"<RefreshTokenModel(token_id={self.token_id}, "
            f"family_id={self.family_id})>"
        )
