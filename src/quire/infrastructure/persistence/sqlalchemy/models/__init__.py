"""SQLAlchemy models.

Importing this package registers every table on ``Base.metadata``.
"""

from quire.infrastructure.persistence.sqlalchemy.models.audit_log_model import (
    AuditLogModel,
)
from quire.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from quire.infrastructure.persistence.sqlalchemy.models.magazine_model import (
    MagazineItemModel,
    MagazineModel,
)
from quire.infrastructure.persistence.sqlalchemy.models.submission_model import (
    SubmissionModel,
)
from quire.infrastructure.persistence.sqlalchemy.models.user_model import UserModel

__all__ = [
    "AuditLogModel",
    "Base",
    "MagazineItemModel",
    "MagazineModel",
    "SubmissionModel",
    "TimestampMixin",
    "UserModel",
]
