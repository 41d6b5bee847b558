"""Magazine lifecycle: assembling drafts, publishing, statistics."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from quire.application.dtos import DraftDashboard
from quire.application.services._deadline import within_deadline
from quire.domain.audit import AuditAction, AuditEntry
from quire.domain.editorial import (
    AlreadyAssignedError,
    AlreadyPublishedError,
    EditorialStatistics,
    InvalidMagazineError,
    InvalidSubmissionStateError,
    Magazine,
    MagazineNotFoundError,
    SubmissionNotFoundError,
    SubmissionStatus,
)
from quire.domain.shared.exceptions import ErrorCode
from quire.domain.shared.time import utc_now

if TYPE_CHECKING:
    from quire.domain.audit import AuditRepository
    from quire.domain.editorial import MagazineRepository, SubmissionRepository

logger = logging.getLogger(__name__)


class MagazineLifecycleService:
    """
    Drives issues from draft to published and reports editorial statistics.

    Must only be reached after the caller passed a MODERATOR gate (public
    read methods excepted). Every storage-bound call runs under
    ``deadline_seconds``; a missed deadline surfaces as
    ``ServiceUnavailableError`` and the caller's transaction is rolled back.

    Concurrency is settled by storage: a unique constraint on magazine
    items for assembly and a conditional update for publishing.
    """

    def __init__(  # NOQA: PLR0913
        self,
        magazine_repository: MagazineRepository,
        submission_repository: SubmissionRepository,
        audit_repository: AuditRepository,
        deadline_seconds: float | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._magazines = magazine_repository
        self._submissions = submission_repository
        self._audit = audit_repository
        self._deadline = deadline_seconds
        self._clock = clock

    async def list_draft_magazines(self) -> list[Magazine]:
        """All drafts, newest first."""
        return await within_deadline(
            self._magazines.list_drafts(),
            self._deadline,
            "list_draft_magazines",
        )

    async def assemble_draft(
        self,
        submission_ids: Sequence[int],
        title: str,
        created_by: UUID,
        description: Optional[str] = None,
    ) -> Magazine:
        """Create a draft issue from approved, unplaced submissions.

        Submissions keep the order in which their ids were given.

        Raises
        ------
        InvalidMagazineError
            If the id list is empty or has duplicates, or the title is bad
        SubmissionNotFoundError
            If any id is unknown
        InvalidSubmissionStateError
            If any submission is not APPROVED
        AlreadyAssignedError
            If any submission is already in another magazine
        ServiceUnavailableError
            If storage does not answer within the deadline
        """
        ids = list(submission_ids)
        if not ids:
            msg = "At least one submission is required"
            raise InvalidMagazineError(msg, ErrorCode.EMPTY_MAGAZINE)
        if len(set(ids)) != len(ids):
            msg = "Each submission can only appear once in a magazine"
            raise InvalidMagazineError(msg)

        return await within_deadline(
            self._assemble_draft(ids, title, created_by, description),
            self._deadline,
            "assemble_draft",
        )

    async def _assemble_draft(
        self,
        ids: list[int],
        title: str,
        created_by: UUID,
        description: Optional[str],
    ) -> Magazine:
        found = await self._submissions.find_by_ids(ids)
        missing = [i for i in ids if i not in found]
        if missing:
            raise SubmissionNotFoundError(missing)

        submissions = [found[i] for i in ids]
        for submission in submissions:
            if not submission.is_approved:
                raise InvalidSubmissionStateError(
                    submission.id,
                    current_status=submission.status.value,
                    required_status=SubmissionStatus.APPROVED.value,
                )

        assigned = await self._magazines.find_assigned_submission_ids(ids)
        if assigned:
            raise AlreadyAssignedError(assigned)

        magazine = Magazine.assemble(
            title=title,
            submissions=submissions,
            created_by=created_by,
            description=description,
        )
        # Raises AlreadyAssignedError if a concurrent assembly won the race
        await self._magazines.add(magazine)

        await self._audit.record(
            AuditEntry(
                action=AuditAction.MAGAZINE_CREATED,
                entity_type="magazine",
                entity_id=str(magazine.id),
                actor_id=created_by,
                details={"title": magazine.title, "submission_ids": ids},
            ),
        )
        logger.info(
            "Assembled draft magazine %s from %d submission(s)",
            magazine.id,
            len(ids),
        )
        return magazine

    async def publish(self, magazine_id: int, published_by: UUID) -> Magazine:
        """Make a draft public. Irreversible; succeeds exactly once per issue.

        Raises
        ------
        MagazineNotFoundError
            If the id is unknown
        AlreadyPublishedError
            If the issue is already public, including when a concurrent
            request published it first
        ServiceUnavailableError
            If storage does not answer within the deadline
        """
        return await within_deadline(
            self._publish(magazine_id, published_by),
            self._deadline,
            "publish",
        )

    async def _publish(self, magazine_id: int, published_by: UUID) -> Magazine:
        magazine = await self._magazines.find_by_id(magazine_id)
        if magazine is None:
            raise MagazineNotFoundError(magazine_id)

        magazine.publish(published_by, now=self._clock())

        won = await self._magazines.mark_published(
            magazine_id,
            published_at=magazine.published_at,
            published_by=published_by,
        )
        if not won:
            raise AlreadyPublishedError(magazine_id)

        await self._audit.record(
            AuditEntry(
                action=AuditAction.MAGAZINE_PUBLISHED,
                entity_type="magazine",
                entity_id=str(magazine_id),
                actor_id=published_by,
                details={"title": magazine.title},
            ),
        )
        logger.info("Published magazine %s", magazine_id)
        return magazine

    async def get_statistics(self) -> EditorialStatistics:
        """Counts computed fresh from storage on every call."""
        return await within_deadline(
            self._get_statistics(),
            self._deadline,
            "get_statistics",
        )

    async def _get_statistics(self) -> EditorialStatistics:
        drafts, published = await self._magazines.count_by_visibility()
        by_status = await self._submissions.count_by_status()
        return EditorialStatistics(
            draft_count=drafts,
            published_count=published,
            pending_submissions=by_status.get(SubmissionStatus.PENDING, 0),
            approved_submissions=by_status.get(SubmissionStatus.APPROVED, 0),
            rejected_submissions=by_status.get(SubmissionStatus.REJECTED, 0),
        )

    async def export_dashboard(self) -> DraftDashboard:
        """Drafts plus statistics for the moderator dashboard."""
        magazines = await self.list_draft_magazines()
        stats = await self.get_statistics()
        return DraftDashboard(magazines=magazines, stats=stats)

    async def latest_public(self) -> Optional[Magazine]:
        """The most recently published issue, or None if nothing is public yet."""
        return await within_deadline(
            self._magazines.latest_published(),
            self._deadline,
            "latest_public",
        )

    async def list_public_magazines(
        self,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Magazine]:
        return await within_deadline(
            self._magazines.list_published(limit=limit, offset=offset),
            self._deadline,
            "list_public_magazines",
        )

    async def get_public_magazine(self, magazine_id: int) -> Magazine:
        """Fetch a public issue; drafts are reported as not found."""
        magazine = await self._magazines.find_by_id(magazine_id)
        if magazine is None or not magazine.is_public:
            raise MagazineNotFoundError(magazine_id)
        return magazine

    async def get_public_magazine_by_slug(self, slug: str) -> Magazine:
        magazine = await self._magazines.find_by_slug(slug)
        if magazine is None or not magazine.is_public:
            raise MagazineNotFoundError(slug)
        return magazine

    async def get_magazine(self, magazine_id: int) -> Magazine:
        """Fetch any issue, draft or public (moderator view)."""
        magazine = await self._magazines.find_by_id(magazine_id)
        if magazine is None:
            raise MagazineNotFoundError(magazine_id)
        return magazine
