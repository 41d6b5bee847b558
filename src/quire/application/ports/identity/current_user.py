"""CurrentUser - the authenticated caller as seen by application services."""

from dataclasses import dataclass
from uuid import UUID

from quire.domain.user import UserRole


@dataclass(frozen=True)
class CurrentUser:
    """Immutable representation of the current authenticated user.

    Built from verified access-token claims; no storage lookup involved.
    """

    user_id: UUID
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_moderator(self) -> bool:
        return self.role.at_least(UserRole.MODERATOR)

    def __str__(self) -> str:
        return f"CurrentUser({self.user_id})"
