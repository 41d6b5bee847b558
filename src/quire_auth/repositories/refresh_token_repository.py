"""Abstract repository interface for the refresh-token ledger.

Refresh tokens are signed JWTs, but single-use rotation and revocation
need server-side state: one row per issued refresh token, grouped by
lineage (``family_id``).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class RefreshTokenRecord:
    token_id: str
    family_id: str
    user_id: UUID
    issued_at: datetime
    expires_at: datetime
    used_at: datetime | None = None
    revoked_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.used_at is None and self.revoked_at is None


class RefreshTokenRepository(ABC):
    """Ledger of issued refresh tokens."""

    @abstractmethod
    async def add(self, record: RefreshTokenRecord) -> None:
        """Record a newly issued refresh token."""

    @abstractmethod
    async def find_by_token_id(self, token_id: str) -> RefreshTokenRecord | None:
        """Find a ledger row by ``jti``."""

    @abstractmethod
    async def consume(self, token_id: str, used_at: datetime) -> bool:
        """
        Mark a refresh token as used, exactly once.

        The write only applies while the row is neither used nor revoked,
        so of two concurrent rotations only one can succeed.

        Returns
        -------
        True if this call consumed the token; False if it was unknown,
        already used or revoked
        """

    @abstractmethod
    async def revoke_family(self, family_id: str, revoked_at: datetime) -> int:
        """Revoke every still-active token of a lineage. Returns rows touched."""

    @abstractmethod
    async def revoke_all_for_user(self, user_id: UUID, revoked_at: datetime) -> int:
        """Revoke every still-active token of a user. Returns rows touched."""

    @abstractmethod
    async def delete_expired(self, before: datetime) -> int:
        """Delete rows that expired before the given time. Returns rows deleted."""
