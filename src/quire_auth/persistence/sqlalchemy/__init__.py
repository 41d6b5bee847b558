"""SQLAlchemy implementation for quire_auth persistence.

Provides:
- AuthBase: Declarative base for auth models
- UserCredentialModel / UserCredentialRepositorySQLAlchemy
- RefreshTokenModel / RefreshTokenRepositorySQLAlchemy
"""

from quire_auth.persistence.sqlalchemy.base import AuthBase
from quire_auth.persistence.sqlalchemy.models import (
    RefreshTokenModel,
    UserCredentialModel,
)
from quire_auth.persistence.sqlalchemy.repositories import (
    RefreshTokenRepositorySQLAlchemy,
    UserCredentialRepositorySQLAlchemy,
)

__all__ = [
    "AuthBase",
    "RefreshTokenModel",
    "RefreshTokenRepositorySQLAlchemy",
    "UserCredentialModel",
    "UserCredentialRepositorySQLAlchemy",
]
