"""Value objects for the user domain."""

from quire.domain.user.value_objects.email import Email
from quire.domain.user.value_objects.user_role import UserRole

__all__ = [
    "Email",
    "UserRole",
]
