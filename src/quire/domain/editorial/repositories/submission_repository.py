"""Submission repository interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from quire.domain.editorial.aggregates.submission import Submission
from quire.domain.editorial.value_objects import SubmissionStatus


@dataclass(frozen=True)
class SubmissionPlacement:
    """A submission together with the issue it was placed in, if any."""

    submission: Submission
    magazine_id: Optional[int] = None
    magazine_title: Optional[str] = None
    magazine_published_at: Optional[datetime] = None

    @property
    def is_published(self) -> bool:
        return self.magazine_published_at is not None


class SubmissionRepository(ABC):
    """Repository interface for Submission aggregates."""

    @abstractmethod
    async def add(self, submission: Submission) -> None:
        """
        Insert a new submission and assign its storage identifier.

        Parameters
        ----------
        submission
            A submission without an id; ``assign_id`` is called on it
        """

    @abstractmethod
    async def find_by_id(self, submission_id: int) -> Optional[Submission]:
        """Find a submission by id."""

    @abstractmethod
    async def find_by_ids(self, submission_ids: list[int]) -> dict[int, Submission]:
        """
        Load several submissions at once.

        Returns
        -------
        Mapping of id to submission; unknown ids are absent
        """

    @abstractmethod
    async def save_review(self, submission: Submission) -> bool:
        """
        Persist a moderation decision made on a PENDING submission.

        The write only applies while the stored status is still PENDING,
        so two concurrent reviews cannot both succeed.

        Returns
        -------
        True if the decision was written, False if the submission was
        no longer pending
        """

    @abstractmethod
    async def list_by_status(
        self,
        status: Optional[SubmissionStatus] = None,
        unassigned_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Submission]:
        """List submissions, newest first, optionally filtered."""

    @abstractmethod
    async def list_by_author(self, author_id: UUID) -> list[SubmissionPlacement]:
        """List an author's submissions, newest first, with placement info."""

    @abstractmethod
    async def count_by_status(self) -> dict[SubmissionStatus, int]:
        """Count submissions per status; every status is present."""
