"""SQLAlchemy implementation of UserCredentialRepository."""

import logging
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from quire.domain.shared.time import ensure_tz_aware, utc_now
from quire_auth.persistence.sqlalchemy.models import UserCredentialModel
from quire_auth.repositories import UserCredentialData, UserCredentialRepository

logger = logging.getLogger(__name__)


class UserCredentialRepositorySQLAlchemy(UserCredentialRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(
        self,
        user_id: UUID,
        email: str,
        password_hash: str,
    ) -> UserCredentialData:
        model = await self._session.get(UserCredentialModel, user_id)
        if model is None:
            model = UserCredentialModel(user_id=user_id)
            self._session.add(model)
            logger.info("Stored credentials for user %s", user_id)
        model.email = email.strip().lower()
        model.password_hash = password_hash
        model.password_changed_at = utc_now()
        await self._session.flush()
        return self._to_data(model)

    async def find_by_user_id(self, user_id: UUID) -> UserCredentialData | None:
        model = await self._session.get(
            UserCredentialModel,
            user_id,
            populate_existing=True,
        )
        return self._to_data(model) if model else None

    async def find_by_email(self, email: str) -> UserCredentialData | None:
        stmt = select(UserCredentialModel).where(
            UserCredentialModel.email == email.strip().lower(),
        )
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._to_data(model) if model else None

    async def update_password(self, user_id: UUID, password_hash: str) -> bool:
        stmt = (
            update(UserCredentialModel)
            .where(UserCredentialModel.user_id == user_id)
            .values(password_hash=password_hash, password_changed_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount:
            logger.info("Password hash replaced for user %s", user_id)
        return result.rowcount == 1

    async def update_last_login(self, user_id: UUID) -> None:
        stmt = (
            update(UserCredentialModel)
            .where(UserCredentialModel.user_id == user_id)
            .values(last_login_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)

    @staticmethod
    def _to_data(model: UserCredentialModel) -> UserCredentialData:
        return UserCredentialData(
            user_id=model.user_id,
            email=model.email,
            password_hash=model.password_hash,
            last_login_at=ensure_tz_aware(model.last_login_at),
        )
