"""FastAPI dependency injection for the Quire API.

Provides dependencies for:
- Database sessions
- Authentication services and role gates (current user from the access token)
- Application service instances
"""

import logging
from collections.abc import Awaitable, Callable
from functools import lru_cache
from typing import Annotated, AsyncGenerator

from fastapi import Cookie, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from quire.application.ports.identity import CurrentUser
from quire.application.services import (
    AuthenticationService,
    AuthorizationService,
    MagazineLifecycleService,
    SubmissionService,
    UserAdministrationService,
)
from quire.domain.user import UserRole
from quire.infrastructure.persistence.sqlalchemy import (
    AuditRepositorySQLAlchemy,
    Base,
    MagazineRepositorySQLAlchemy,
    SubmissionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from quire.presentation.api.config import get_api_settings
from quire.presentation.api.cookies import ACCESS_TOKEN_COOKIE
from quire_auth import JWTService, PasswordHashingService, TokenError, TokenService
from quire_auth.persistence.sqlalchemy import (
    AuthBase,
    RefreshTokenRepositorySQLAlchemy,
    UserCredentialRepositorySQLAlchemy,
)
from quire_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens (cookie is preferred, header accepted)
security = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


# -----------------------------------------------------------------------------
# Database Engine & Session
# -----------------------------------------------------------------------------


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Async engine for ``settings.database_url``.

    Waiting for a pooled connection is bounded by the storage timeout so an
    exhausted pool surfaces as 503 instead of hanging the request.
    """
    return create_async_engine(
        settings.database_url,
        echo=False,
        pool_pre_ping=True,
        pool_timeout=settings.storage_timeout_seconds,
    )


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """Engine for the environment's settings (CLI commands)."""
    return build_engine(get_settings())


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return build_session_maker(get_engine())


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    One session (one transaction) per request, from the engine that
    ``create_app`` built for its settings. Handlers commit explicitly;
    anything left uncommitted is rolled back when the session closes.

    Yields
    ------
    AsyncSession for database operations
    """
    async with request.app.state.session_maker() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Defaults to the environment's engine.
    """
    engine = engine or get_engine()
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.run_sync(AuthBase.metadata.create_all)

    logger.info("Database schema is up to date (missing tables created if needed)")


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
        refresh_token_expire_days=settings.jwt_refresh_token_expire_days,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    return PasswordHashingService(rounds=settings.password_hash_rounds)


def get_token_service(
    session: DBSession,
    jwt_service: JWTService = Depends(get_jwt_service),
) -> TokenService:
    return TokenService(
        jwt_service=jwt_service,
        refresh_token_repository=RefreshTokenRepositorySQLAlchemy(session),
    )


TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]


def get_authorization_service(token_service: TokenServiceDep) -> AuthorizationService:
    return AuthorizationService(token_service)


def get_authentication_service(
    session: DBSession,
    token_service: TokenServiceDep,
    password_service: PasswordHashingService = Depends(get_password_service),
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    This service orchestrates registration, login and session renewal.
    """
    return AuthenticationService(
        user_repository=UserRepositorySQLAlchemy(session),
        credential_repository=UserCredentialRepositorySQLAlchemy(session),
        password_service=password_service,
        token_service=token_service,
        audit_repository=AuditRepositorySQLAlchemy(session),
    )


AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


# -----------------------------------------------------------------------------
# Current User (role gates)
# -----------------------------------------------------------------------------


def require_role(min_role: UserRole) -> Callable[..., Awaitable[CurrentUser]]:
    """
    Build a dependency that admits callers whose role ranks at least ``min_role``.

    The access token is read from the session cookie first. If the cookie
    token fails verification and an ``Authorization: Bearer`` header is also
    present, the header decides. Failures propagate as quire_auth errors and
    are mapped to 401/403 by the exception handlers, before the handler body
    runs.
    """

    async def dependency(
        credentials: HTTPAuthorizationCredentials | None = Depends(security),
        access_token_cookie: Annotated[
            str | None,
            Cookie(alias=ACCESS_TOKEN_COOKIE),
        ] = None,
        authorization: AuthorizationService = Depends(get_authorization_service),
    ) -> CurrentUser:
        bearer = credentials.credentials if credentials else None
        if not (access_token_cookie and bearer) or bearer == access_token_cookie:
            return authorization.authorize(access_token_cookie or bearer, min_role)

        try:
            return authorization.authorize(access_token_cookie, min_role)
        except TokenError as e:
            logger.debug("Access cookie rejected (%s), trying Bearer header", e.kind)
        return authorization.authorize(bearer, min_role)

    dependency.__name__ = f"require_{min_role.value.lower()}"
    return dependency


CurrentMember = Annotated[CurrentUser, Depends(require_role(UserRole.USER))]
ModeratorUser = Annotated[CurrentUser, Depends(require_role(UserRole.MODERATOR))]
AdminUser = Annotated[CurrentUser, Depends(require_role(UserRole.ADMIN))]


# -----------------------------------------------------------------------------
# Application Services
# -----------------------------------------------------------------------------


def get_submission_service(
    session: DBSession,
    settings: SettingsDep,
) -> SubmissionService:
    return SubmissionService(
        submission_repository=SubmissionRepositorySQLAlchemy(session),
        user_repository=UserRepositorySQLAlchemy(session),
        audit_repository=AuditRepositorySQLAlchemy(session),
        deadline_seconds=settings.storage_timeout_seconds,
    )


def get_magazine_service(
    session: DBSession,
    settings: SettingsDep,
) -> MagazineLifecycleService:
    return MagazineLifecycleService(
        magazine_repository=MagazineRepositorySQLAlchemy(session),
        submission_repository=SubmissionRepositorySQLAlchemy(session),
        audit_repository=AuditRepositorySQLAlchemy(session),
        deadline_seconds=settings.storage_timeout_seconds,
    )


def get_user_administration_service(
    session: DBSession,
    token_service: TokenServiceDep,
    password_service: PasswordHashingService = Depends(get_password_service),
) -> UserAdministrationService:
    return UserAdministrationService(
        user_repository=UserRepositorySQLAlchemy(session),
        credential_repository=UserCredentialRepositorySQLAlchemy(session),
        password_service=password_service,
        token_service=token_service,
        audit_repository=AuditRepositorySQLAlchemy(session),
    )


SubmissionServiceDep = Annotated[SubmissionService, Depends(get_submission_service)]
MagazineServiceDep = Annotated[
    MagazineLifecycleService,
    Depends(get_magazine_service),
]
UserAdminServiceDep = Annotated[
    UserAdministrationService,
    Depends(get_user_administration_service),
]
