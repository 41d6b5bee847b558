"""SQLAlchemy implementation of RefreshTokenRepository."""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from quire.domain.shared.time import ensure_tz_aware
from quire_auth.persistence.sqlalchemy.models import RefreshTokenModel
from quire_auth.repositories import RefreshTokenRecord, RefreshTokenRepository

logger = logging.getLogger(__name__)


class RefreshTokenRepositorySQLAlchemy(RefreshTokenRepository):
    """Refresh-token ledger backed by the ``refresh_tokens`` table.

    ``consume`` is a single conditional UPDATE, so the database decides
    which of two concurrent rotations wins.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, record: RefreshTokenRecord) -> None:
        self._session.add(
            RefreshTokenModel(
                token_id=record.token_id,
                family_id=record.family_id,
                user_id=str(record.user_id),
                issued_at=record.issued_at,
                expires_at=record.expires_at,
                used_at=record.used_at,
                revoked_at=record.revoked_at,
            ),
        )
        await self._session.flush()

    async def find_by_token_id(self, token_id: str) -> RefreshTokenRecord | None:
        result = await self._session.execute(
            select(RefreshTokenModel)
            .where(RefreshTokenModel.token_id == token_id)
            .execution_options(populate_existing=True),
        )
        model = result.scalar_one_or_none()
        return self._to_record(model) if model else None

    async def consume(self, token_id: str, used_at: datetime) -> bool:
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.token_id == token_id,
                RefreshTokenModel.used_at.is_(None),
                RefreshTokenModel.revoked_at.is_(None),
            )
            .values(used_at=used_at)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def revoke_family(self, family_id: str, revoked_at: datetime) -> int:
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.family_id == family_id,
                RefreshTokenModel.revoked_at.is_(None),
            )
            .values(revoked_at=revoked_at)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    async def revoke_all_for_user(self, user_id: UUID, revoked_at: datetime) -> int:
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.user_id == str(user_id),
                RefreshTokenModel.revoked_at.is_(None),
            )
            .values(revoked_at=revoked_at)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    async def delete_expired(self, before: datetime) -> int:
        stmt = (
            delete(RefreshTokenModel)
            .where(RefreshTokenModel.expires_at < before)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        logger.info("Deleted %d expired refresh token(s)", result.rowcount)
        return result.rowcount

    @staticmethod
    def _to_record(model: RefreshTokenModel) -> RefreshTokenRecord:
        return RefreshTokenRecord(
            token_id=model.token_id,
            family_id=model.family_id,
            user_id=UUID(model.user_id),
            issued_at=ensure_tz_aware(model.issued_at),
            expires_at=ensure_tz_aware(model.expires_at),
            used_at=ensure_tz_aware(model.used_at),
            revoked_at=ensure_tz_aware(model.revoked_at),
        )
