"""SQLAlchemy implementation of AuditRepository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from quire.domain.audit import AuditAction, AuditEntry, AuditRepository
from quire.domain.shared.time import ensure_tz_aware
from quire.infrastructure.persistence.sqlalchemy.models import AuditLogModel


class AuditRepositorySQLAlchemy(AuditRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def record(self, entry: AuditEntry) -> None:
        self._session.add(
            AuditLogModel(
                actor_id=entry.actor_id,
                action=entry.action.value,
                entity_type=entry.entity_type,
                entity_id=entry.entity_id,
                details=entry.details,
                created_at=entry.created_at,
            ),
        )
        await self._session.flush()

    async def list_recent(
        self,
        limit: int = 100,
        action: Optional[AuditAction] = None,
    ) -> list[AuditEntry]:
        stmt = select(AuditLogModel)
        if action is not None:
            stmt = stmt.where(AuditLogModel.action == action.value)
        stmt = stmt.order_by(AuditLogModel.created_at.desc(), AuditLogModel.id.desc())
        result = await self._session.execute(stmt.limit(limit))
        return [
            AuditEntry(
                id=model.id,
                actor_id=model.actor_id,
                action=AuditAction(model.action),
                entity_type=model.entity_type,
                entity_id=model.entity_id,
                details=dict(model.details or {}),
                created_at=ensure_tz_aware(model.created_at),
            )
            for model in result.scalars().all()
        ]
