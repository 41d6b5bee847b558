"""Audit domain - an append-only trail of security and editorial actions."""

from quire.domain.audit.audit_entry import AuditAction, AuditEntry
from quire.domain.audit.audit_repository import AuditRepository

__all__ = ["AuditAction", "AuditEntry", "AuditRepository"]
