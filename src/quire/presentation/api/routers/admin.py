"""Admin router: user roles, account status and the audit trail."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from quire.domain.audit import AuditAction, AuditEntry
from quire.domain.user import User
from quire.infrastructure.persistence.sqlalchemy import AuditRepositorySQLAlchemy
from quire.presentation.api.dependencies import (
    AdminUser,
    DBSession,
    UserAdminServiceDep,
)
from quire.presentation.api.schemas.admin import (
    AuditEntryResponse,
    UpdateRoleRequest,
    UserSummaryResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])

ADMIN_RESPONSES: dict[int | str, dict] = {
    401: {"description": "Not authenticated"},
    403: {"description": "Admin access required"},
}


def _user_to_summary(user: User) -> UserSummaryResponse:
    return UserSummaryResponse(
        id=user.id,
        email=user.email,
        display_name=user.display_name,
        role=user.role.value,
        is_active=user.is_active,
        created_at=user.created_at,
    )


def _audit_to_response(entry: AuditEntry) -> AuditEntryResponse:
    return AuditEntryResponse(
        id=entry.id,
        action=entry.action.value,
        entity_type=entry.entity_type,
        entity_id=entry.entity_id,
        actor_id=entry.actor_id,
        details=entry.details,
        created_at=entry.created_at,
    )


@router.get("/users", summary="List all users", responses=ADMIN_RESPONSES)
async def list_users(
    _admin: AdminUser,
    service: UserAdminServiceDep,
) -> list[UserSummaryResponse]:
    return [_user_to_summary(u) for u in await service.list_users()]


@router.patch(
    "/users/{user_id}/role",
    summary="Update user role",
    responses={
        **ADMIN_RESPONSES,
        400: {"description": "Invalid role"},
        404: {"description": "User not found"},
        409: {"description": "Cannot demote yourself"},
    },
)
async def update_user_role(
    user_id: UUID,
    request: UpdateRoleRequest,
    admin: AdminUser,
    service: UserAdminServiceDep,
    session: DBSession,
) -> UserSummaryResponse:
    """Change a role. The user's sessions are revoked."""
    user = await service.change_role(
        actor_id=admin.user_id,
        user_id=user_id,
        role=request.role,
    )
    await session.commit()
    return _user_to_summary(user)


@router.post(
    "/users/{user_id}/deactivate",
    summary="Deactivate a user",
    responses={
        **ADMIN_RESPONSES,
        404: {"description": "User not found"},
        409: {"description": "Cannot deactivate yourself"},
    },
)
async def deactivate_user(
    user_id: UUID,
    admin: AdminUser,
    service: UserAdminServiceDep,
    session: DBSession,
) -> UserSummaryResponse:
    user = await service.deactivate(actor_id=admin.user_id, user_id=user_id)
    await session.commit()
    return _user_to_summary(user)


@router.post(
    "/users/{user_id}/activate",
    summary="Reactivate a user",
    responses={**ADMIN_RESPONSES, 404: {"description": "User not found"}},
)
async def activate_user(
    user_id: UUID,
    admin: AdminUser,
    service: UserAdminServiceDep,
    session: DBSession,
) -> UserSummaryResponse:
    user = await service.activate(actor_id=admin.user_id, user_id=user_id)
    await session.commit()
    return _user_to_summary(user)


@router.get("/audit-log", summary="Recent audit entries", responses=ADMIN_RESPONSES)
async def list_audit_log(
    _admin: AdminUser,
    session: DBSession,
    action: Annotated[AuditAction | None, Query(description="Filter by action")] = None,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
) -> list[AuditEntryResponse]:
    entries = await AuditRepositorySQLAlchemy(session).list_recent(
        limit=limit,
        action=action,
    )
    return [_audit_to_response(e) for e in entries]
