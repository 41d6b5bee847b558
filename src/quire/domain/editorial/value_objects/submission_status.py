"""Moderation status of a submission."""

from enum import Enum


class SubmissionStatus(str, Enum):
    """Moderation state.

    PENDING -> APPROVED and PENDING -> REJECTED are the only transitions.
    REJECTED is terminal; APPROVED submissions become eligible for an issue.
    """

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_final(self) -> bool:
        return self is not SubmissionStatus.PENDING

    def can_transition_to(self, target: "SubmissionStatus") -> bool:
        return target in _TRANSITIONS[self]


_LABELS: dict[SubmissionStatus, str] = {
    SubmissionStatus.PENDING: "Awaiting review",
    SubmissionStatus.APPROVED: "Approved",
    SubmissionStatus.REJECTED: "Rejected",
}

_TRANSITIONS: dict[SubmissionStatus, frozenset[SubmissionStatus]] = {
    SubmissionStatus.PENDING: frozenset(
        {SubmissionStatus.APPROVED, SubmissionStatus.REJECTED},
    ),
    SubmissionStatus.APPROVED: frozenset(),
    SubmissionStatus.REJECTED: frozenset(),
}
