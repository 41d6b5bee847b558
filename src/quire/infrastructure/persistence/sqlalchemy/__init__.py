"""SQLAlchemy persistence for the quire domain."""

from quire.infrastructure.persistence.sqlalchemy.models import Base
from quire.infrastructure.persistence.sqlalchemy.repositories import (
    AuditRepositorySQLAlchemy,
    MagazineRepositorySQLAlchemy,
    SubmissionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

__all__ = [
    "AuditRepositorySQLAlchemy",
    "Base",
    "MagazineRepositorySQLAlchemy",
    "SubmissionRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
