import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID, uuid4

from quire.domain.editorial.aggregates.submission import Submission
from quire.domain.editorial.exceptions import (
    AlreadyPublishedError,
    InvalidMagazineError,
    InvalidSubmissionStateError,
)
from quire.domain.editorial.value_objects import SubmissionStatus
from quire.domain.shared.exceptions import ErrorCode
from quire.domain.shared.time import utc_now

MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 2000

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    return _SLUG_STRIP.sub("-", text.lower()).strip("-") or "issue"


@dataclass(frozen=True)
class MagazineItem:
    """A submission placed at a fixed position within an issue."""

    submission: Submission
    position: int

    @property
    def submission_id(self) -> Optional[int]:
        return self.submission.id


class Magazine:
    """
    Magazine issue aggregate.

    Created as a draft holding approved submissions in a fixed order and
    published exactly once. ``published_at`` is set if and only if the
    issue is public; publishing is irreversible.
    """

    def __init__(  # NOQA: PLR0913
        self,
        title: str,
        items: Sequence[MagazineItem],
        created_by: UUID,
        description: Optional[str] = None,
        slug: Optional[str] = None,
        version: Optional[str] = None,
        is_public: bool = False,
        published_at: Optional[datetime] = None,
        published_by: Optional[UUID] = None,
        id: Optional[int] = None,
        created_at: Optional[datetime] = None,
    ):
        if is_public != (published_at is not None):
            msg = "published_at must be set if and only if the magazine is public"
            raise ValueError(msg)

        self._id = id
        self._title = self._validate_title(title)
        self._description = self._validate_description(description)
        self._items = tuple(sorted(items, key=lambda item: item.position))
        self._created_by = created_by
        self._created_at = created_at or utc_now()
        self._slug = slug or (
            f"{slugify(self._title)}-{self._created_at:%Y%m%d}-{uuid4().hex[:6]}"
        )
        self._version = version or f"v{self._created_at:%Y.%m.%d}"
        self._is_public = is_public
        self._published_at = published_at
        self._published_by = published_by

    @staticmethod
    def _validate_title(title: str) -> str:
        text = (title or "").strip()
        if not text:
            msg = "Magazine title cannot be empty"
            raise InvalidMagazineError(msg)
        if len(text) > MAX_TITLE_LENGTH:
            msg = f"Magazine title cannot exceed {MAX_TITLE_LENGTH} characters"
            raise InvalidMagazineError(msg)
        return text

    @staticmethod
    def _validate_description(description: Optional[str]) -> Optional[str]:
        if description is None:
            return None
        text = description.strip()
        if len(text) > MAX_DESCRIPTION_LENGTH:
            msg = (
                f"Magazine description cannot exceed "
                f"{MAX_DESCRIPTION_LENGTH} characters"
            )
            raise InvalidMagazineError(msg)
        return text or None

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def slug(self) -> str:
        return self._slug

    @property
    def version(self) -> str:
        return self._version

    @property
    def items(self) -> tuple[MagazineItem, ...]:
        return self._items

    @property
    def submission_ids(self) -> list[int]:
        return [item.submission.id for item in self._items if item.submission.id]

    @property
    def created_by(self) -> UUID:
        return self._created_by

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def is_public(self) -> bool:
        return self._is_public

    @property
    def is_draft(self) -> bool:
        return not self._is_public

    @property
    def published_at(self) -> Optional[datetime]:
        return self._published_at

    @property
    def published_by(self) -> Optional[UUID]:
        return self._published_by

    def assign_id(self, magazine_id: int) -> None:
        """Record the identifier handed out by storage on first insert."""
        if self._id is not None and self._id != magazine_id:
            msg = f"Magazine already has id {self._id}"
            raise ValueError(msg)
        self._id = magazine_id

    def publish(self, published_by: UUID, now: Optional[datetime] = None) -> None:
        """Make the issue public.

        Raises
        ------
        AlreadyPublishedError
            If the issue is already public
        """
        if self._is_public:
            raise AlreadyPublishedError(self._id)
        self._is_public = True
        self._published_at = now or utc_now()
        self._published_by = published_by

    @classmethod
    def assemble(
        cls,
        title: str,
        submissions: Sequence[Submission],
        created_by: UUID,
        description: Optional[str] = None,
    ) -> "Magazine":
        """Build a draft issue from approved submissions, keeping their order.

        Raises
        ------
        InvalidMagazineError
            If no submissions are given
        InvalidSubmissionStateError
            If any submission is not APPROVED
        """
        if not submissions:
            msg = "At least one submission is required"
            raise InvalidMagazineError(msg, ErrorCode.EMPTY_MAGAZINE)

        for submission in submissions:
            if not submission.is_approved:
                raise InvalidSubmissionStateError(
                    submission.id,
                    current_status=submission.status.value,
                    required_status=SubmissionStatus.APPROVED.value,
                )

        items = [
            MagazineItem(submission=submission, position=position)
            for position, submission in enumerate(submissions)
        ]
        return cls(
            title=title,
            description=description,
            items=items,
            created_by=created_by,
        )

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: int,
        title: str,
        description: Optional[str],
        slug: str,
        version: str,
        items: Sequence[MagazineItem],
        created_by: UUID,
        created_at: datetime,
        is_public: bool,
        published_at: Optional[datetime],
        published_by: Optional[UUID],
    ) -> "Magazine":
        return cls(
            id=id,
            title=title,
            description=description,
            slug=slug,
            version=version,
            items=items,
            created_by=created_by,
            created_at=created_at,
            is_public=is_public,
            published_at=published_at,
            published_by=published_by,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Magazine):
            return NotImplemented
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id) if self._id is not None else id(self)

    def __repr__(self) -> str:
        state = "published" if self._is_public else "draft"
        return f"Magazine(id={self._id}, title={self._title!r}, {state})"
