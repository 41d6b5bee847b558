"""Domain error hierarchy.

Every error raised by the domain and application layers is a
:class:`DomainException` carrying a stable :class:`ErrorCode`. The API maps
codes to HTTP statuses in one place; the family a class belongs to
(validation, not found, conflict...) is the fallback when a code has no
explicit mapping.
"""

from enum import Enum
from typing import Any, ClassVar, Optional


class ErrorCode(str, Enum):
    """Codes returned to API clients in the ``code`` field. Never renamed."""

    # Rejected input
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_ROLE = "INVALID_ROLE"
    EMPTY_MAGAZINE = "EMPTY_MAGAZINE"

    # Missing or invisible entities
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    SUBMISSION_NOT_FOUND = "SUBMISSION_NOT_FOUND"
    MAGAZINE_NOT_FOUND = "MAGAZINE_NOT_FOUND"

    # State conflicts, including lost races
    CONFLICT = "CONFLICT"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
    INVALID_SUBMISSION_STATE = "INVALID_SUBMISSION_STATE"
    ALREADY_ASSIGNED = "ALREADY_ASSIGNED"
    ALREADY_PUBLISHED = "ALREADY_PUBLISHED"
    CANNOT_MODIFY_SELF = "CANNOT_MODIFY_SELF"

    # Identity
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    WEAK_PASSWORD = "WEAK_PASSWORD"
    FORBIDDEN = "FORBIDDEN"

    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    INACTIVE_USER = "INACTIVE_USER"

    # Retry later
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    SIGNING_KEY_UNAVAILABLE = "SIGNING_KEY_UNAVAILABLE"

    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Base class for expected, user-facing failures.

    Parameters
    ----------
    message
        Safe to show to end users. Falls back to ``default_message``.
    code
        Overrides the class's ``default_code``.
    details
        Structured context for logs; never sent to clients.
    """

    default_code: ClassVar[ErrorCode] = ErrorCode.INTERNAL_ERROR
    default_message: ClassVar[str] = "Something went wrong"

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[ErrorCode] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = dict(details or {})
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code.value})"


class ValidationError(DomainException):
    default_code = ErrorCode.VALIDATION_ERROR
    default_message = "Invalid input"


class BusinessRuleViolation(DomainException):
    default_code = ErrorCode.BUSINESS_RULE_VIOLATION
    default_message = "The operation is not allowed"


class EntityNotFoundError(DomainException):
    default_code = ErrorCode.ENTITY_NOT_FOUND
    default_message = "Not found"


class ConflictError(DomainException):
    default_code = ErrorCode.CONFLICT
    default_message = "The operation conflicts with the current state"


class ServiceUnavailableError(DomainException):
    """Storage unreachable or too slow. Safe to retry for reads only."""

    default_code = ErrorCode.SERVICE_UNAVAILABLE
    default_message = "The service is temporarily unavailable, please retry"
