"""Quire Auth - session and credential infrastructure.

This package handles:
- Password hashing (bcrypt, configurable cost factor)
- JWT access/refresh token creation and verification
- Refresh-token rotation (single use, per lineage) and revocation
- Credential and refresh-token storage (pluggable persistence)

Architecture:
    quire_auth/
    ├── services/           # Pure logic (password hashing, JWT, sessions)
    ├── repositories/       # Abstract interfaces
    ├── persistence/        # Implementations by technology
    │   └── sqlalchemy/     # SQLAlchemy implementation
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from quire_auth import JWTService, TokenService
    from quire_auth.persistence.sqlalchemy import (
        AuthBase,
        RefreshTokenRepositorySQLAlchemy,
    )
"""

from quire_auth.exceptions import (
    AuthenticationRequiredError,
    AuthError,
    AuthorizationDeniedError,
    CryptoError,
    InvalidCredentialsError,
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    TokenMalformedError,
    WeakPasswordError,
)
from quire_auth.repositories import (
    RefreshTokenRecord,
    RefreshTokenRepository,
    UserCredentialData,
    UserCredentialRepository,
)
from quire_auth.schemas import Session, TokenClaims, TokenPair
from quire_auth.services import JWTService, PasswordHashingService, TokenService

__all__ = [
    # Services
    "JWTService",
    "PasswordHashingService",
    "TokenService",
    # Repositories (interfaces)
    "RefreshTokenRecord",
    "RefreshTokenRepository",
    "UserCredentialData",
    "UserCredentialRepository",
    # Schemas
    "Session",
    "TokenClaims",
    "TokenPair",
    # Exceptions
    "AuthError",
    "AuthenticationRequiredError",
    "AuthorizationDeniedError",
    "CryptoError",
    "InvalidCredentialsError",
    "TokenError",
    "TokenExpiredError",
    "TokenInvalidError",
    "TokenMalformedError",
    "WeakPasswordError",
]
