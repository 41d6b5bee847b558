from quire.domain.editorial.repositories.magazine_repository import (
    MagazineRepository,
)
from quire.domain.editorial.repositories.submission_repository import (
    SubmissionPlacement,
    SubmissionRepository,
)

__all__ = ["MagazineRepository", "SubmissionPlacement", "SubmissionRepository"]
