"""Audit repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from quire.domain.audit.audit_entry import AuditAction, AuditEntry


class AuditRepository(ABC):
    """Append-only store for audit entries."""

    @abstractmethod
    async def record(self, entry: AuditEntry) -> None:
        """Append an entry within the current transaction."""

    @abstractmethod
    async def list_recent(
        self,
        limit: int = 100,
        action: Optional[AuditAction] = None,
    ) -> list[AuditEntry]:
        """List entries, newest first."""
