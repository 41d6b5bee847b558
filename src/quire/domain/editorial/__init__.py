"""Editorial domain - submissions, moderation and magazine issues.

Lifecycle of a submission:
    PENDING -> APPROVED -> placed in a draft Magazine -> published
    PENDING -> REJECTED (terminal)

A submission belongs to at most one magazine. A magazine is assembled
from approved submissions only and is published exactly once.
"""

from quire.domain.editorial.aggregates import Magazine, MagazineItem, Submission
from quire.domain.editorial.exceptions import (
    AlreadyAssignedError,
    AlreadyPublishedError,
    InvalidMagazineError,
    InvalidSubmissionContentError,
    InvalidSubmissionStateError,
    MagazineNotFoundError,
    SubmissionNotFoundError,
)
from quire.domain.editorial.repositories import (
    MagazineRepository,
    SubmissionPlacement,
    SubmissionRepository,
)
from quire.domain.editorial.value_objects import (
    EditorialStatistics,
    SubmissionCategory,
    SubmissionStatus,
)

__all__ = [
    "AlreadyAssignedError",
    "AlreadyPublishedError",
    "EditorialStatistics",
    "InvalidMagazineError",
    "InvalidSubmissionContentError",
    "InvalidSubmissionStateError",
    "Magazine",
    "MagazineItem",
    "MagazineNotFoundError",
    "MagazineRepository",
    "Submission",
    "SubmissionCategory",
    "SubmissionNotFoundError",
    "SubmissionPlacement",
    "SubmissionRepository",
    "SubmissionStatus",
]
