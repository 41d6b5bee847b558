"""Submission intake and moderation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Union
from uuid import UUID

from quire.application.services._deadline import within_deadline
from quire.domain.audit import AuditAction, AuditEntry
from quire.domain.editorial import (
    InvalidSubmissionStateError,
    Submission,
    SubmissionCategory,
    SubmissionNotFoundError,
    SubmissionPlacement,
    SubmissionStatus,
)
from quire.domain.shared.exceptions import ValidationError
from quire.domain.user import InactiveUserError, UserNotFoundError

if TYPE_CHECKING:
    from quire.domain.audit import AuditRepository
    from quire.domain.editorial import SubmissionRepository
    from quire.domain.user import UserRepository

logger = logging.getLogger(__name__)

_REVIEW_ACTIONS: dict[SubmissionStatus, AuditAction] = {
    SubmissionStatus.APPROVED: AuditAction.SUBMISSION_APPROVED,
    SubmissionStatus.REJECTED: AuditAction.SUBMISSION_REJECTED,
}


class SubmissionService:
    """Members submit; moderators approve or reject, once."""

    def __init__(
        self,
        submission_repository: SubmissionRepository,
        user_repository: UserRepository,
        audit_repository: AuditRepository,
        deadline_seconds: float | None = None,
    ):
        self._submissions = submission_repository
        self._users = user_repository
        self._audit = audit_repository
        self._deadline = deadline_seconds

    async def submit(
        self,
        author_id: UUID,
        category: Union[str, SubmissionCategory],
        body: str,
    ) -> Submission:
        """Create a PENDING submission on behalf of an active member."""
        author = await self._users.find_by_id(author_id)
        if author is None:
            raise UserNotFoundError(str(author_id))
        if not author.is_active:
            raise InactiveUserError(str(author_id))

        submission = Submission.create(
            author_id=author.id,
            category=category,
            body=body,
            author_name=author.display_name,
        )
        await within_deadline(
            self._submissions.add(submission),
            self._deadline,
            "submit",
        )
        await self._audit.record(
            AuditEntry(
                action=AuditAction.SUBMISSION_CREATED,
                entity_type="submission",
                entity_id=str(submission.id),
                actor_id=author.id,
                details={"category": submission.category.value},
            ),
        )
        return submission

    async def review(
        self,
        submission_id: int,
        decision: Union[str, SubmissionStatus],
        reviewer_id: UUID,
        notes: Optional[str] = None,
    ) -> Submission:
        """Approve or reject a PENDING submission.

        Raises
        ------
        ValidationError
            If ``decision`` is not APPROVED or REJECTED
        SubmissionNotFoundError
            If the submission does not exist
        InvalidSubmissionStateError
            If it was already reviewed (including by a concurrent request)
        """
        msg = "A review decision must be APPROVED or REJECTED"
        try:
            target = SubmissionStatus(decision)
        except ValueError as e:
            raise ValidationError(msg) from e
        if target not in _REVIEW_ACTIONS:
            raise ValidationError(msg)

        return await within_deadline(
            self._review(submission_id, target, reviewer_id, notes),
            self._deadline,
            "review",
        )

    async def _review(
        self,
        submission_id: int,
        target: SubmissionStatus,
        reviewer_id: UUID,
        notes: Optional[str],
    ) -> Submission:
        submission = await self._submissions.find_by_id(submission_id)
        if submission is None:
            raise SubmissionNotFoundError(submission_id)

        previous = submission.status
        submission.review(target, reviewer_id, notes)

        if not await self._submissions.save_review(submission):
            current = await self._submissions.find_by_id(submission_id)
            raise InvalidSubmissionStateError(
                submission_id,
                current_status=(current.status if current else previous).value,
                required_status=SubmissionStatus.PENDING.value,
            )

        await self._audit.record(
            AuditEntry(
                action=_REVIEW_ACTIONS[target],
                entity_type="submission",
                entity_id=str(submission_id),
                actor_id=reviewer_id,
                details={"notes": submission.review_notes} if notes else {},
            ),
        )
        logger.info(
            "Submission %s moved %s -> %s by %s",
            submission_id,
            previous.value,
            target.value,
            reviewer_id,
        )
        return submission

    async def get(self, submission_id: int) -> Submission:
        submission = await self._submissions.find_by_id(submission_id)
        if submission is None:
            raise SubmissionNotFoundError(submission_id)
        return submission

    async def list_for_moderation(
        self,
        status: Optional[SubmissionStatus] = None,
        unassigned_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Submission]:
        return await within_deadline(
            self._submissions.list_by_status(
                status=status,
                unassigned_only=unassigned_only,
                limit=limit,
                offset=offset,
            ),
            self._deadline,
            "list_for_moderation",
        )

    async def list_for_author(self, author_id: UUID) -> list[SubmissionPlacement]:
        return await within_deadline(
            self._submissions.list_by_author(author_id),
            self._deadline,
            "list_for_author",
        )
