"""SQLAlchemy repository implementations."""

from quire.infrastructure.persistence.sqlalchemy.repositories.audit_repository import (
    AuditRepositorySQLAlchemy,
)
from quire.infrastructure.persistence.sqlalchemy.repositories.magazine_repository import (  # NOQA: E501
    MagazineRepositorySQLAlchemy,
)
from quire.infrastructure.persistence.sqlalchemy.repositories.submission_repository import (  # NOQA: E501
    SubmissionRepositorySQLAlchemy,
)
from quire.infrastructure.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "AuditRepositorySQLAlchemy",
    "MagazineRepositorySQLAlchemy",
    "SubmissionRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
