"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Optional, Union
from uuid import UUID

from sqlalchemy import exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quire.domain.shared.time import ensure_tz_aware
from quire.domain.user import Email, EmailAlreadyExistsError, User, UserRepository
from quire.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


def _normalized(email: Union[str, Email]) -> str:
    return email.value if isinstance(email, Email) else Email(email).value


class UserRepositorySQLAlchemy(UserRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        model = await self._session.get(UserModel, user_id, populate_existing=True)
        return self._to_domain(model) if model else None

    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == _normalized(email))
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        stmt = select(exists().where(UserModel.email == _normalized(email)))
        return bool((await self._session.execute(stmt)).scalar())

    async def save(self, user: User) -> None:
        model = await self._session.get(UserModel, user.id)
        if model is None:
            model = UserModel(id=user.id, created_at=user.created_at)
            self._session.add(model)
            logger.info("Registered user %s", user.id)

        model.email = user.email
        model.display_name = user.display_name
        model.role = user.role.value
        model.is_active = user.is_active
        model.updated_at = user.updated_at

        try:
            await self._session.flush()
        except IntegrityError as e:
            if "email" in str(e.orig).lower():
                raise EmailAlreadyExistsError(user.email) from e
            raise

    async def list_all(self) -> list[User]:
        stmt = select(UserModel).order_by(UserModel.created_at, UserModel.email)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars()]

    async def count(self) -> int:
        stmt = select(func.count()).select_from(UserModel)
        return (await self._session.execute(stmt)).scalar_one()

    @staticmethod
    def _to_domain(model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            display_name=model.display_name,
            role=model.role,
            is_active=model.is_active,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )
