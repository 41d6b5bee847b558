"""Credential store port.

Password hashes live here rather than on the user record, keyed by user id.
The member's normalized email is kept alongside as a secondary lookup key.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserCredentialData:
    user_id: UUID
    email: str
    password_hash: str
    last_login_at: datetime | None = None


class UserCredentialRepository(ABC):
    @abstractmethod
    async def save(
        self,
        user_id: UUID,
        email: str,
        password_hash: str,
    ) -> UserCredentialData:
        """Store the credential for ``user_id``, replacing any previous one."""

    @abstractmethod
    async def find_by_user_id(self, user_id: UUID) -> UserCredentialData | None: ...

    @abstractmethod
    async def find_by_email(self, email: str) -> UserCredentialData | None:
        """Lookup by normalized (stripped, lower-cased) email."""

    @abstractmethod
    async def update_password(self, user_id: UUID, password_hash: str) -> bool:
        """Swap the stored hash.

        Returns
        -------
        bool
            False when no credential exists for ``user_id``
        """

    @abstractmethod
    async def update_last_login(self, user_id: UUID) -> None: ...
