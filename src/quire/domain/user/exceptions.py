"""User domain exceptions."""

from quire.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    default_code = ErrorCode.INVALID_EMAIL


class InvalidDisplayNameError(ValidationError):
    """Display name empty or longer than 100 characters."""


class EmailAlreadyExistsError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            f"Email already registered: {email}",
            ErrorCode.EMAIL_ALREADY_EXISTS,
        )


class UserNotFoundError(EntityNotFoundError):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(
            f"User not found: {user_id}",
            ErrorCode.USER_NOT_FOUND,
            {"user_id": str(user_id)},
        )


class InactiveUserError(BusinessRuleViolation):
    """The account has been deactivated."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(
            "This account has been deactivated",
            ErrorCode.INACTIVE_USER,
            {"user_id": str(user_id)},
        )


class CannotModifySelfError(ConflictError):
    """Administrators cannot demote or deactivate their own account."""

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(
            f"Cannot {action} your own account",
            ErrorCode.CANNOT_MODIFY_SELF,
        )
