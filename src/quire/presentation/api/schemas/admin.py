"""Admin schemas for user management and the audit trail."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UpdateRoleRequest(BaseModel):
    """Request schema for updating a user's role."""

    role: str = Field(..., description="USER, MODERATOR or ADMIN")

    model_config = ConfigDict(
        json_schema_extra={"example": {"role": "MODERATOR"}},
    )


class UserSummaryResponse(BaseModel):
    """Response schema for a user summary."""

    id: UUID
    email: str
    display_name: str
    role: str
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuditEntryResponse(BaseModel):
    """One line of the audit trail."""

    id: int | None
    action: str
    entity_type: str
    entity_id: str
    actor_id: UUID | None
    details: dict[str, Any]
    created_at: datetime
