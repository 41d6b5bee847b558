"""Magazine repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from quire.domain.editorial.aggregates.magazine import Magazine


class MagazineRepository(ABC):
    """Repository interface for Magazine aggregates."""

    @abstractmethod
    async def add(self, magazine: Magazine) -> None:
        """
        Insert a new draft magazine with its items.

        Storage enforces that a submission belongs to at most one
        magazine.

        Raises
        ------
        AlreadyAssignedError
            If any of the magazine's submissions is already placed in
            another magazine
        """

    @abstractmethod
    async def find_by_id(self, magazine_id: int) -> Optional[Magazine]:
        """Find a magazine (draft or public) by id."""

    @abstractmethod
    async def find_by_slug(self, slug: str) -> Optional[Magazine]:
        """Find a magazine (draft or public) by slug."""

    @abstractmethod
    async def find_assigned_submission_ids(self, submission_ids: list[int]) -> set[int]:
        """Return those of the given submission ids already placed in an issue."""

    @abstractmethod
    async def mark_published(
        self,
        magazine_id: int,
        published_at: datetime,
        published_by: UUID,
    ) -> bool:
        """
        Flip a draft to public.

        The write only applies while the stored magazine is still a draft.

        Returns
        -------
        True if this call published the magazine, False otherwise
        """

    @abstractmethod
    async def list_drafts(self) -> list[Magazine]:
        """List drafts, newest first (created_at, then id, descending)."""

    @abstractmethod
    async def list_published(self, limit: int = 20, offset: int = 0) -> list[Magazine]:
        """List public magazines (published_at, then id, descending)."""

    @abstractmethod
    async def latest_published(self) -> Optional[Magazine]:
        """Return the most recently published magazine, or None."""

    @abstractmethod
    async def count_by_visibility(self) -> tuple[int, int]:
        """Return ``(draft_count, published_count)``."""
