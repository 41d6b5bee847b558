"""Administrative user management and admin bootstrap."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Union
from uuid import UUID

from quire.domain.audit import AuditAction, AuditEntry
from quire.domain.shared.exceptions import ErrorCode, ValidationError
from quire.domain.user import (
    CannotModifySelfError,
    User,
    UserNotFoundError,
    UserRole,
)
from quire_auth import WeakPasswordError

if TYPE_CHECKING:
    from quire.domain.audit import AuditRepository
    from quire.domain.user import UserRepository
    from quire_auth import PasswordHashingService, TokenService
    from quire_auth.repositories import UserCredentialRepository

logger = logging.getLogger(__name__)

BOOTSTRAP_MIN_PASSWORD_LENGTH = 12

# Passwords that appear in sample configs and tutorials
SAMPLE_PASSWORDS = frozenset(
    {
        "123456789012",
        "adminadmin123",
        "adminpassword",
        "administrator",
        "changemeplease",
        "changeme1234",
        "correcthorsebatterystaple",
        "letmein12345",
        "password1234",
        "password12345",
        "qwertyuiop12",
        "quireadmin123",
    },
)


class UserAdministrationService:
    """Role changes, (de)activation and the first admin account.

    Role changes and deactivation end every session of the target user so
    the new permissions apply from the next token refresh at the latest.
    """

    def __init__(  # NOQA: PLR0913
        self,
        user_repository: UserRepository,
        credential_repository: UserCredentialRepository,
        password_service: PasswordHashingService,
        token_service: TokenService,
        audit_repository: AuditRepository,
    ):
        self._users = user_repository
        self._credentials = credential_repository
        self._passwords = password_service
        self._tokens = token_service
        self._audit = audit_repository

    async def list_users(self) -> list[User]:
        return await self._users.list_all()

    async def change_role(
        self,
        actor_id: UUID,
        user_id: UUID,
        role: Union[str, UserRole],
    ) -> User:
        """Assign a new role to a user.

        Raises
        ------
        ValidationError
            If ``role`` is not a known role
        CannotModifySelfError
            If an admin tries to lower their own role
        UserNotFoundError
            If the user does not exist
        """
        try:
            new_role = UserRole.parse(role)
        except ValueError as e:
            raise ValidationError(str(e), ErrorCode.INVALID_ROLE) from e
        if actor_id == user_id and new_role != UserRole.ADMIN:
            raise CannotModifySelfError("demote")

        user = await self._get(user_id)
        previous = user.role
        if previous == new_role:
            return user

        user.change_role(new_role)
        await self._users.save(user)
        await self._tokens.revoke_all_for_user(user.id)
        await self._audit.record(
            AuditEntry(
                action=AuditAction.USER_ROLE_CHANGED,
                entity_type="user",
                entity_id=str(user.id),
                actor_id=actor_id,
                details={"from": previous.value, "to": new_role.value},
            ),
        )
        logger.info(
            "User %s role changed %s -> %s by %s",
            user.id,
            previous.value,
            new_role.value,
            actor_id,
        )
        return user

    async def deactivate(self, actor_id: UUID, user_id: UUID) -> User:
        """Block sign-in for a user and end their sessions."""
        if actor_id == user_id:
            raise CannotModifySelfError("deactivate")

        user = await self._get(user_id)
        if not user.is_active:
            return user

        user.deactivate()
        await self._users.save(user)
        await self._tokens.revoke_all_for_user(user.id)
        await self._audit.record(
            AuditEntry(
                action=AuditAction.USER_DEACTIVATED,
                entity_type="user",
                entity_id=str(user.id),
                actor_id=actor_id,
            ),
        )
        logger.info("User %s deactivated by %s", user.id, actor_id)
        return user

    async def activate(self, actor_id: UUID, user_id: UUID) -> User:
        user = await self._get(user_id)
        if user.is_active:
            return user

        user.activate()
        await self._users.save(user)
        await self._audit.record(
            AuditEntry(
                action=AuditAction.USER_ACTIVATED,
                entity_type="user",
                entity_id=str(user.id),
                actor_id=actor_id,
            ),
        )
        logger.info("User %s activated by %s", user.id, actor_id)
        return user

    async def bootstrap_admin(
        self,
        email: str,
        display_name: str,
        password: str,
    ) -> tuple[User, bool]:
        """Create the admin account, or promote an existing one.

        The password is always (re)set to the one given.

        Returns
        -------
        The admin user and whether it was newly created

        Raises
        ------
        WeakPasswordError
            If the password is shorter than 12 characters or a known sample
        """
        self.check_bootstrap_password(password)

        user = await self._users.find_by_email(email)
        created = user is None
        if user is None:
            user = User.create(email, display_name=display_name, role=UserRole.ADMIN)
        else:
            user.change_role(UserRole.ADMIN)
            user.activate()
        await self._users.save(user)

        await self._credentials.save(
            user_id=user.id,
            email=user.email,
            password_hash=self._passwords.hash(password),
        )
        if not created:
            await self._tokens.revoke_all_for_user(user.id)

        await self._audit.record(
            AuditEntry(
                action=(
                    AuditAction.USER_REGISTERED
                    if created
                    else AuditAction.USER_ROLE_CHANGED
                ),
                entity_type="user",
                entity_id=str(user.id),
                details={"bootstrap": True, "to": UserRole.ADMIN.value},
            ),
        )
        logger.info(
            "Admin account %s: %s",
            "created" if created else "promoted",
            user.id,
        )
        return user, created

    def check_bootstrap_password(self, password: str) -> None:
        """Stricter rules than member passwords: long and not a sample."""
        self._passwords.validate_strength(
            password,
            min_length=BOOTSTRAP_MIN_PASSWORD_LENGTH,
        )
        if password.strip().lower() in SAMPLE_PASSWORDS:
            msg = "This password appears in sample configurations; choose another"
            raise WeakPasswordError(msg)

    async def _get(self, user_id: UUID) -> User:
        user = await self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user
