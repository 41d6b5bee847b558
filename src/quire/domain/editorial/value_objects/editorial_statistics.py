"""Derived editorial statistics snapshot."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EditorialStatistics:
    """Counts of magazines and submissions at a single point in time.

    Never persisted; recomputed on every request.
    """

    draft_count: int
    published_count: int
    pending_submissions: int
    approved_submissions: int
    rejected_submissions: int

    @property
    def total_magazines(self) -> int:
        return self.draft_count + self.published_count

    @property
    def total_submissions(self) -> int:
        return (
            self.pending_submissions
            + self.approved_submissions
            + self.rejected_submissions
        )
