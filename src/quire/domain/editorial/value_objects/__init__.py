"""Value objects for the editorial domain."""

from quire.domain.editorial.value_objects.editorial_statistics import (
    EditorialStatistics,
)
from quire.domain.editorial.value_objects.submission_category import (
    SubmissionCategory,
)
from quire.domain.editorial.value_objects.submission_status import (
    SubmissionStatus,
)

__all__ = [
    "EditorialStatistics",
    "SubmissionCategory",
    "SubmissionStatus",
]
