from datetime import datetime
from typing import Optional, Union
from uuid import UUID

from quire.domain.editorial.exceptions import (
    InvalidSubmissionContentError,
    InvalidSubmissionStateError,
)
from quire.domain.editorial.value_objects import SubmissionCategory, SubmissionStatus
from quire.domain.shared.time import utc_now

MAX_BODY_LENGTH = 5000
MAX_REVIEW_NOTES_LENGTH = 1000


class Submission:
    """
    A unit of member-authored content awaiting or past moderation.

    Author, category and body are fixed at creation. The only mutation is
    the moderation decision, made once by a moderator or admin.
    """

    def __init__(  # NOQA: PLR0913
        self,
        author_id: UUID,
        category: Union[str, SubmissionCategory],
        body: str,
        status: Union[str, SubmissionStatus] = SubmissionStatus.PENDING,
        id: Optional[int] = None,
        created_at: Optional[datetime] = None,
        reviewed_by: Optional[UUID] = None,
        reviewed_at: Optional[datetime] = None,
        review_notes: Optional[str] = None,
        author_name: Optional[str] = None,
    ):
        self._id = id
        self._author_id = author_id
        self._category = SubmissionCategory(category)
        self._body = self._validate_body(body)
        self._status = SubmissionStatus(status)
        self._created_at = created_at or utc_now()
        self._reviewed_by = reviewed_by
        self._reviewed_at = reviewed_at
        self._review_notes = review_notes
        self._author_name = author_name

    @staticmethod
    def _validate_body(body: str) -> str:
        text = (body or "").strip()
        if not text:
            msg = "Submission body cannot be empty"
            raise InvalidSubmissionContentError(msg)
        if len(text) > MAX_BODY_LENGTH:
            msg = f"Submission body cannot exceed {MAX_BODY_LENGTH} characters"
            raise InvalidSubmissionContentError(msg)
        return text

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def author_id(self) -> UUID:
        return self._author_id

    @property
    def author_name(self) -> Optional[str]:
        return self._author_name

    @property
    def category(self) -> SubmissionCategory:
        return self._category

    @property
    def body(self) -> str:
        return self._body

    @property
    def status(self) -> SubmissionStatus:
        return self._status

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def reviewed_by(self) -> Optional[UUID]:
        return self._reviewed_by

    @property
    def reviewed_at(self) -> Optional[datetime]:
        return self._reviewed_at

    @property
    def review_notes(self) -> Optional[str]:
        return self._review_notes

    @property
    def is_pending(self) -> bool:
        return self._status == SubmissionStatus.PENDING

    @property
    def is_approved(self) -> bool:
        return self._status == SubmissionStatus.APPROVED

    def assign_id(self, submission_id: int) -> None:
        """Record the identifier handed out by storage on first insert."""
        if self._id is not None and self._id != submission_id:
            msg = f"Submission already has id {self._id}"
            raise ValueError(msg)
        self._id = submission_id

    def review(
        self,
        decision: Union[str, SubmissionStatus],
        reviewer_id: UUID,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> None:
        """Apply a moderation decision.

        Raises
        ------
        InvalidSubmissionStateError
            If the submission was already reviewed or the decision is not
            a valid target status
        """
        target = SubmissionStatus(decision)
        if not self._status.can_transition_to(target):
            raise InvalidSubmissionStateError(
                self._id,
                current_status=self._status.value,
                required_status=SubmissionStatus.PENDING.value,
            )
        if notes is not None:
            notes = notes.strip() or None
        if notes and len(notes) > MAX_REVIEW_NOTES_LENGTH:
            msg = f"Review notes cannot exceed {MAX_REVIEW_NOTES_LENGTH} characters"
            raise InvalidSubmissionContentError(msg)

        self._status = target
        self._reviewed_by = reviewer_id
        self._reviewed_at = now or utc_now()
        self._review_notes = notes

    @classmethod
    def create(
        cls,
        author_id: UUID,
        category: Union[str, SubmissionCategory],
        body: str,
        author_name: Optional[str] = None,
    ) -> "Submission":
        return cls(
            author_id=author_id,
            category=category,
            body=body,
            author_name=author_name,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Submission):
            return NotImplemented
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id) if self._id is not None else id(self)

    def __repr__(self) -> str:
        return (
            f"Submission(id={self._id}, category={self._category.value}, "
            f"status={self._status.value})"
        )
