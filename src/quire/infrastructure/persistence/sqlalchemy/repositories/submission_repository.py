"""SQLAlchemy implementation of SubmissionRepository."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import Select, exists, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from quire.domain.editorial import (
    Submission,
    SubmissionPlacement,
    SubmissionRepository,
    SubmissionStatus,
)
from quire.domain.shared.time import ensure_tz_aware
from quire.infrastructure.persistence.sqlalchemy.models import (
    MagazineItemModel,
    MagazineModel,
    SubmissionModel,
)

logger = logging.getLogger(__name__)


def _select_submissions() -> Select:
    # Rows already in the session still get their author eagerly loaded
    return select(SubmissionModel).execution_options(populate_existing=True)


def map_submission_to_domain(model: SubmissionModel) -> Submission:
    """Rebuild a Submission aggregate from its row (author eagerly loaded)."""
    return Submission(
        id=model.id,
        author_id=model.author_id,
        category=model.category,
        body=model.body,
        status=model.status,
        created_at=ensure_tz_aware(model.created_at),
        reviewed_by=model.reviewed_by,
        reviewed_at=ensure_tz_aware(model.reviewed_at),
        review_notes=model.review_notes,
        author_name=model.author.display_name if model.author else None,
    )


class SubmissionRepositorySQLAlchemy(SubmissionRepository):
    """SQLAlchemy implementation of the submission repository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, submission: Submission) -> None:
        model = SubmissionModel(
            author_id=submission.author_id,
            category=submission.category.value,
            body=submission.body,
            status=submission.status.value,
            created_at=submission.created_at,
            updated_at=submission.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        submission.assign_id(model.id)
        logger.info(
            "Created submission %s (%s) by %s",
            model.id,
            submission.category.value,
            submission.author_id,
        )

    async def find_by_id(self, submission_id: int) -> Optional[Submission]:
        stmt = _select_submissions().where(SubmissionModel.id == submission_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return map_submission_to_domain(model) if model else None

    async def find_by_ids(self, submission_ids: list[int]) -> dict[int, Submission]:
        if not submission_ids:
            return {}
        stmt = _select_submissions().where(SubmissionModel.id.in_(submission_ids))
        result = await self._session.execute(stmt)
        return {
            model.id: map_submission_to_domain(model)
            for model in result.scalars().all()
        }

    async def save_review(self, submission: Submission) -> bool:
        stmt = (
            update(SubmissionModel)
            .where(
                SubmissionModel.id == submission.id,
                SubmissionModel.status == SubmissionStatus.PENDING.value,
            )
            .values(
                status=submission.status.value,
                reviewed_by=submission.reviewed_by,
                reviewed_at=submission.reviewed_at,
                review_notes=submission.review_notes,
                updated_at=submission.reviewed_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def list_by_status(
        self,
        status: Optional[SubmissionStatus] = None,
        unassigned_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Submission]:
        stmt = _select_submissions()
        if status is not None:
            stmt = stmt.where(SubmissionModel.status == status.value)
        if unassigned_only:
            stmt = stmt.where(
                ~exists().where(MagazineItemModel.submission_id == SubmissionModel.id),
            )
        stmt = (
            stmt.order_by(SubmissionModel.created_at.desc(), SubmissionModel.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self._session.execute(stmt)
        return [map_submission_to_domain(model) for model in result.scalars().all()]

    async def list_by_author(self, author_id: UUID) -> list[SubmissionPlacement]:
        stmt = (
            select(
                SubmissionModel,
                MagazineModel.id,
                MagazineModel.title,
                MagazineModel.published_at,
            )
            .outerjoin(
                MagazineItemModel,
                MagazineItemModel.submission_id == SubmissionModel.id,
            )
            .outerjoin(MagazineModel, MagazineModel.id == MagazineItemModel.magazine_id)
            .where(SubmissionModel.author_id == author_id)
            .order_by(SubmissionModel.created_at.desc(), SubmissionModel.id.desc())
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return [
            SubmissionPlacement(
                submission=map_submission_to_domain(model),
                magazine_id=magazine_id,
                magazine_title=magazine_title,
                magazine_published_at=ensure_tz_aware(published_at),
            )
            for model, magazine_id, magazine_title, published_at in result.all()
        ]

    async def count_by_status(self) -> dict[SubmissionStatus, int]:
        stmt = select(SubmissionModel.status, func.count()).group_by(
            SubmissionModel.status,
        )
        result = await self._session.execute(stmt)
        counts = {status: 0 for status in SubmissionStatus}
        for status, count in result.all():
            counts[SubmissionStatus(status)] = count
        return counts
