"""Shared domain components.

This module exports shared exceptions and utilities used across
domain boundaries.
"""

from quire.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ServiceUnavailableError,
    ValidationError,
)
from quire.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    # Error codes
    "ErrorCode",
    # Base exception
    "DomainException",
    # Exception categories
    "ValidationError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "ConflictError",
    "ServiceUnavailableError",
    # Utilities
    "ensure_tz_aware",
    "utc_now",
]
