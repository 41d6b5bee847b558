"""User domain - manages member identity and roles.

This domain handles:
- User aggregate (identity, display name, role, active flag)
- The ordered role hierarchy used by every authorization check

Design notes:
- User ID is a random UUID4 generated at creation (opaque, unpredictable)
- Email is unique and case-normalized through the Email value object
- Password hashes live in quire_auth's credential store, not here
- Repository interface defined here, implementation in infrastructure
"""

from quire.domain.user.aggregates import User
from quire.domain.user.exceptions import (
    CannotModifySelfError,
    EmailAlreadyExistsError,
    InactiveUserError,
    InvalidDisplayNameError,
    InvalidEmailError,
    UserNotFoundError,
)
from quire.domain.user.repositories import UserRepository
from quire.domain.user.value_objects import Email, UserRole

__all__ = [
    "CannotModifySelfError",
    "Email",
    "EmailAlreadyExistsError",
    "InactiveUserError",
    "InvalidDisplayNameError",
    "InvalidEmailError",
    "User",
    "UserNotFoundError",
    "UserRepository",
    "UserRole",
]
