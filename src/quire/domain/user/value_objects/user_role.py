"""Ordered user role hierarchy."""

from enum import Enum
from typing import Union


class UserRole(str, Enum):
    """Permission tiers, ordered USER < MODERATOR < ADMIN."""

    USER = "USER"
    MODERATOR = "MODERATOR"
    ADMIN = "ADMIN"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    def at_least(self, minimum: "UserRole") -> bool:
        """Return True if this role is ``minimum`` or ranks above it.

        Every role-gated operation goes through this single comparison.
        """
        return self.rank >= minimum.rank

    @classmethod
    def parse(cls, value: Union[str, "UserRole"]) -> "UserRole":
        """Parse a role from its string value.

        Raises
        ------
        ValueError
            If the value is not one of the enumerated roles
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            msg = f"Unknown role: {value!r}"
            raise ValueError(msg) from None


_RANKS: dict[UserRole, int] = {
    UserRole.USER: 0,
    UserRole.MODERATOR: 1,
    UserRole.ADMIN: 2,
}

_LABELS: dict[UserRole, str] = {
    UserRole.USER: "Member",
    UserRole.MODERATOR: "Moderator",
    UserRole.ADMIN: "Administrator",
}
