from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from quire.domain.shared.time import utc_now


class AuditAction(str, Enum):
    USER_REGISTERED = "USER_REGISTERED"
    USER_LOGIN = "USER_LOGIN"
    USER_ROLE_CHANGED = "USER_ROLE_CHANGED"
    USER_DEACTIVATED = "USER_DEACTIVATED"
    USER_ACTIVATED = "USER_ACTIVATED"
    PASSWORD_CHANGED = "PASSWORD_CHANGED"
    SUBMISSION_CREATED = "SUBMISSION_CREATED"
    SUBMISSION_APPROVED = "SUBMISSION_APPROVED"
    SUBMISSION_REJECTED = "SUBMISSION_REJECTED"
    MAGAZINE_CREATED = "MAGAZINE_CREATED"
    MAGAZINE_PUBLISHED = "MAGAZINE_PUBLISHED"


@dataclass(frozen=True)
class AuditEntry:
    """One recorded action. Written in the transaction of the change itself."""

    action: AuditAction
    entity_type: str
    entity_id: str
    actor_id: Optional[UUID] = None
    details: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=utc_now)
    id: Optional[int] = None
