"""Repository interfaces for quire_auth.

Abstract interfaces implemented by persistence technologies; the
SQLAlchemy implementations live in quire_auth.persistence.sqlalchemy.
"""

from quire_auth.repositories.refresh_token_repository import (
    RefreshTokenRecord,
    RefreshTokenRepository,
)
from quire_auth.repositories.user_credential_repository import (
    UserCredentialData,
    UserCredentialRepository,
)

__all__ = [
    "RefreshTokenRecord",
    "RefreshTokenRepository",
    "UserCredentialData",
    "UserCredentialRepository",
]
