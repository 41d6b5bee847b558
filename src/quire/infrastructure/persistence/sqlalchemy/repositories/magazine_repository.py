"""SQLAlchemy implementation of MagazineRepository."""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import Select, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quire.domain.editorial import (
    AlreadyAssignedError,
    Magazine,
    MagazineItem,
    MagazineRepository,
)
from quire.domain.shared.time import ensure_tz_aware
from quire.infrastructure.persistence.sqlalchemy.models import (
    MagazineItemModel,
    MagazineModel,
)
from quire.infrastructure.persistence.sqlalchemy.repositories.submission_repository import (  # NOQA: E501
    map_submission_to_domain,
)

logger = logging.getLogger(__name__)


def _select_magazines() -> Select:
    # Drafts added in this session still get items and authors eagerly loaded
    return select(MagazineModel).execution_options(populate_existing=True)


class MagazineRepositorySQLAlchemy(MagazineRepository):
    """SQLAlchemy implementation of the magazine repository.

    Concurrency guards live in the database:
    - ``uq_magazine_items_submission_id`` rejects double assignment
    - ``mark_published`` is a conditional UPDATE on ``is_public = false``
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, magazine: Magazine) -> None:
        model = MagazineModel(
            title=magazine.title,
            description=magazine.description,
            slug=magazine.slug,
            version=magazine.version,
            is_public=magazine.is_public,
            published_at=magazine.published_at,
            published_by=magazine.published_by,
            created_by=magazine.created_by,
            created_at=magazine.created_at,
            updated_at=magazine.created_at,
            items=[
                MagazineItemModel(
                    submission_id=item.submission_id,
                    position=item.position,
                )
                for item in magazine.items
            ],
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            if "submission_id" in str(e.orig):
                raise AlreadyAssignedError(magazine.submission_ids) from e
            raise

        magazine.assign_id(model.id)
        logger.info(
            "Created draft magazine %s with %d submission(s)",
            model.id,
            len(magazine.items),
        )

    async def find_by_id(self, magazine_id: int) -> Optional[Magazine]:
        stmt = _select_magazines().where(MagazineModel.id == magazine_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def find_by_slug(self, slug: str) -> Optional[Magazine]:
        stmt = _select_magazines().where(MagazineModel.slug == slug)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def find_assigned_submission_ids(self, submission_ids: list[int]) -> set[int]:
        if not submission_ids:
            return set()
        stmt = select(MagazineItemModel.submission_id).where(
            MagazineItemModel.submission_id.in_(submission_ids),
        )
        result = await self._session.execute(stmt)
        return set(result.scalars().all())

    async def mark_published(
        self,
        magazine_id: int,
        published_at: datetime,
        published_by: UUID,
    ) -> bool:
        stmt = (
            update(MagazineModel)
            .where(
                MagazineModel.id == magazine_id,
                MagazineModel.is_public.is_(False),
            )
            .values(
                is_public=True,
                published_at=published_at,
                published_by=published_by,
                updated_at=published_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def list_drafts(self) -> list[Magazine]:
        stmt = (
            _select_magazines()
            .where(MagazineModel.is_public.is_(False))
            .order_by(MagazineModel.created_at.desc(), MagazineModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def list_published(self, limit: int = 20, offset: int = 0) -> list[Magazine]:
        stmt = (
            _select_magazines()
            .where(MagazineModel.is_public.is_(True))
            .order_by(MagazineModel.published_at.desc(), MagazineModel.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def latest_published(self) -> Optional[Magazine]:
        magazines = await self.list_published(limit=1)
        return magazines[0] if magazines else None

    async def count_by_visibility(self) -> tuple[int, int]:
        stmt = select(MagazineModel.is_public, func.count()).group_by(
            MagazineModel.is_public,
        )
        result = await self._session.execute(stmt)
        drafts = published = 0
        for is_public, count in result.all():
            if is_public:
                published = count
            else:
                drafts = count
        return drafts, published

    def _map_to_domain(self, model: MagazineModel) -> Magazine:
        return Magazine.reconstitute(
            id=model.id,
            title=model.title,
            description=model.description,
            slug=model.slug,
            version=model.version,
            items=[
                MagazineItem(
                    submission=map_submission_to_domain(item.submission),
                    position=item.position,
                )
                for item in model.items
            ],
            created_by=model.created_by,
            created_at=ensure_tz_aware(model.created_at),
            is_public=model.is_public,
            published_at=ensure_tz_aware(model.published_at),
            published_by=model.published_by,
        )
