"""Editorial domain exceptions."""

from collections.abc import Iterable

from quire.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class InvalidSubmissionContentError(ValidationError):
    """Submission body or review note out of bounds."""


class InvalidMagazineError(ValidationError):
    """Title, description or item selection rejected at assembly."""


class SubmissionNotFoundError(EntityNotFoundError):
    """Raised when one or more submissions cannot be found."""

    def __init__(self, submission_ids: int | Iterable[int]) -> None:
        ids = (
            [submission_ids]
            if isinstance(submission_ids, int)
            else sorted(submission_ids)
        )
        self.submission_ids = ids
        joined = ", ".join(str(i) for i in ids)
        super().__init__(
            message=f"Submission not found: {joined}",
            code=ErrorCode.SUBMISSION_NOT_FOUND,
            details={"submission_ids": ids},
        )


class MagazineNotFoundError(EntityNotFoundError):
    """Raised when a magazine cannot be found (or is not visible)."""

    def __init__(self, magazine_id: int | str) -> None:
        self.magazine_id = magazine_id
        super().__init__(
            message=f"Magazine '{magazine_id}' not found",
            code=ErrorCode.MAGAZINE_NOT_FOUND,
            details={"magazine_id": magazine_id},
        )


class InvalidSubmissionStateError(ConflictError):
    """Raised when a submission is not in the state an operation requires."""

    def __init__(
        self,
        submission_id: int | None,
        current_status: str,
        required_status: str,
    ) -> None:
        self.submission_id = submission_id
        self.current_status = current_status
        self.required_status = required_status
        super().__init__(
            message=(
                f"Submission {submission_id} is {current_status}, "
                f"expected {required_status}"
            ),
            code=ErrorCode.INVALID_SUBMISSION_STATE,
            details={
                "submission_id": submission_id,
                "current_status": current_status,
                "required_status": required_status,
            },
        )


class AlreadyAssignedError(ConflictError):
    """Raised when a submission already belongs to another magazine."""

    def __init__(self, submission_ids: Iterable[int]) -> None:
        ids = sorted(submission_ids)
        self.submission_ids = ids
        joined = ", ".join(str(i) for i in ids)
        super().__init__(
            message=f"Submission already included in another magazine: {joined}",
            code=ErrorCode.ALREADY_ASSIGNED,
            details={"submission_ids": ids},
        )


class AlreadyPublishedError(ConflictError):
    """Raised when publishing a magazine that is already public."""

    def __init__(self, magazine_id: int | None) -> None:
        self.magazine_id = magazine_id
        super().__init__(
            message=f"Magazine {magazine_id} is already published",
            code=ErrorCode.ALREADY_PUBLISHED,
            details={"magazine_id": magazine_id},
        )
