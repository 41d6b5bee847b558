"""Authentication service for registration, login and session renewal."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from quire.domain.audit import AuditAction, AuditEntry
from quire.domain.user import EmailAlreadyExistsError, User, UserRole
from quire_auth import (
    InvalidCredentialsError,
    PasswordHashingService,
    Session,
    TokenInvalidError,
    TokenPair,
    TokenService,
)
from quire_auth.repositories import UserCredentialRepository

if TYPE_CHECKING:
    from quire.domain.audit import AuditRepository
    from quire.domain.user import UserRepository

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates quire_auth infrastructure (password hashing, session
    tokens) with the User domain to provide:
    - Member registration
    - Login with password
    - Session renewal (refresh-token rotation)
    - Logout and password change

    Callers own the transaction and commit after each call.
    """

    def __init__(  # NOQA: PLR0913
        self,
        user_repository: UserRepository,
        credential_repository: UserCredentialRepository,
        password_service: PasswordHashingService,
        token_service: TokenService,
        audit_repository: AuditRepository,
    ):
        self._user_repo = user_repository
        self._credential_repo = credential_repository
        self._password_service = password_service
        self._token_service = token_service
        self._audit_repo = audit_repository

    async def register(
        self,
        email: str,
        password: str,
        display_name: str,
    ) -> tuple[User, TokenPair]:
        """Create a member account and sign it in.

        New accounts always get the USER role; elevation is an admin action.

        Raises
        ------
        EmailAlreadyExistsError
            If the email is already registered
        WeakPasswordError
            If the password doesn't meet requirements
        """
        if await self._user_repo.exists_by_email(email):
            raise EmailAlreadyExistsError(email)

        password_hash = self._password_service.hash(password)
        user = User.create(email, display_name=display_name, role=UserRole.USER)
        await self._user_repo.save(user)
        await self._credential_repo.save(
            user_id=user.id,
            email=user.email,
            password_hash=password_hash,
        )
        await self._audit_repo.record(
            AuditEntry(
                action=AuditAction.USER_REGISTERED,
                entity_type="user",
                entity_id=str(user.id),
                actor_id=user.id,
            ),
        )

        tokens = await self._token_service.issue_tokens(user.id, user.role.value)

        logger.info("User registered: %s", user.id)
        return user, tokens

    async def login(self, email: str, password: str) -> tuple[User, TokenPair]:
        """Verify credentials and start a new session.

        Unknown email, wrong password and deactivated account all fail
        the same way.

        Raises
        ------
        InvalidCredentialsError
        """
        user = await self._user_repo.find_by_email(email)
        if user is None:
            raise InvalidCredentialsError

        credential = await self._credential_repo.find_by_user_id(user.id)
        if credential is None:
            raise InvalidCredentialsError

        if not self._password_service.verify(password, credential.password_hash):
            logger.info("Failed login for user: %s", user.id)
            raise InvalidCredentialsError

        if not user.is_active:
            logger.info("Login attempt on deactivated account: %s", user.id)
            raise InvalidCredentialsError

        if self._password_service.needs_rehash(credential.password_hash):
            await self._credential_repo.update_password(
                user.id,
                self._password_service.hash(password),
            )

        await self._credential_repo.update_last_login(user.id)
        await self._audit_repo.record(
            AuditEntry(
                action=AuditAction.USER_LOGIN,
                entity_type="user",
                entity_id=str(user.id),
                actor_id=user.id,
            ),
        )

        tokens = await self._token_service.issue_tokens(user.id, user.role.value)

        logger.info("User logged in: %s", user.id)
        return user, tokens

    async def refresh(self, refresh_token: str) -> tuple[User, TokenPair]:
        """Rotate a refresh token, embedding the user's current role.

        Raises
        ------
        TokenExpiredError, TokenInvalidError, TokenMalformedError
            If the token is unusable, reused, or the account is gone
        """
        claims = self._token_service.verify_refresh_token(refresh_token)

        user = await self._user_repo.find_by_id(claims.user_id)
        if user is None or not user.is_active:
            await self._token_service.revoke_all_for_user(claims.user_id)
            msg = "User not found or deactivated"
            raise TokenInvalidError(msg)

        tokens = await self._token_service.rotate_refresh_token(
            refresh_token,
            role=user.role.value,
        )

        logger.debug("Tokens refreshed for user: %s", user.id)
        return user, tokens

    async def logout(self, session: Session) -> None:
        await self._token_service.revoke(session)

    async def change_password(
        self,
        user_id: UUID,
        current_password: str,
        new_password: str,
    ) -> None:
        """Change a password and end every existing session of the user.

        Raises
        ------
        InvalidCredentialsError
            If the current password is wrong
        WeakPasswordError
            If the new password doesn't meet requirements
        """
        credential = await self._credential_repo.find_by_user_id(user_id)
        if credential is None:
            msg = "User credentials not found"
            raise InvalidCredentialsError(msg)
        if not self._password_service.verify(
            current_password,
            credential.password_hash,
        ):
            msg = "Current password is incorrect"
            raise InvalidCredentialsError(msg)

        new_hash = self._password_service.hash(new_password)
        await self._credential_repo.update_password(user_id, new_hash)
        await self._token_service.revoke_all_for_user(user_id)
        await self._audit_repo.record(
            AuditEntry(
                action=AuditAction.PASSWORD_CHANGED,
                entity_type="user",
                entity_id=str(user_id),
                actor_id=user_id,
            ),
        )

        logger.info("Password changed for user: %s", user_id)
