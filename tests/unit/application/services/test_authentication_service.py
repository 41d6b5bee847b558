"""Unit tests for AuthenticationService."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from quire.application.services import AuthenticationService
from quire.domain.audit import AuditAction, AuditRepository
from quire.domain.user import EmailAlreadyExistsError, UserRepository, UserRole
from quire_auth import (
    InvalidCredentialsError,
    PasswordHashingService,
    Session,
    TokenClaims,
    TokenInvalidError,
    TokenPair,
    TokenService,
    WeakPasswordError,
)
from quire_auth.repositories import UserCredentialData, UserCredentialRepository
from tests.shared.fixtures.factories import TestUserFactory

PASSWORD = "correct-horse-42"
PAIR = TokenPair(
    access_token="access",
    refresh_token="refresh",
    access_expires_in=900,
    refresh_expires_in=604800,
)


def _audited_actions(audit_repo: AsyncMock) -> list[AuditAction]:
    return [c.args[0].action for c in audit_repo.record.await_args_list]


class TestAuthenticationServiceBase:
    def setup_method(self):
        self.user_repo = AsyncMock(spec=UserRepository)
        self.credential_repo = AsyncMock(spec=UserCredentialRepository)
        self.password_service = PasswordHashingService(rounds=4)
        self.token_service = Mock(spec=TokenService)
        self.token_service.issue_tokens.return_value = PAIR
        self.token_service.rotate_refresh_token.return_value = PAIR
        self.audit_repo = AsyncMock(spec=AuditRepository)
        self.service = AuthenticationService(
            user_repository=self.user_repo,
            credential_repository=self.credential_repo,
            password_service=self.password_service,
            token_service=self.token_service,
            audit_repository=self.audit_repo,
        )

    def _credential(self, user_id, password: str = PASSWORD) -> UserCredentialData:
        return UserCredentialData(
            user_id=user_id,
            email="alice@example.com",
            password_hash=self.password_service.hash(password),
            last_login_at=None,
        )


class TestRegister(TestAuthenticationServiceBase):
    @pytest.mark.asyncio
    async def test_register_creates_member_and_signs_in(self):
        self.user_repo.exists_by_email.return_value = False

        user, tokens = await self.service.register(
            email="New@Example.com",
            password=PASSWORD,
            display_name="Newcomer",
        )

        assert user.email == "new@example.com"
        assert user.role == UserRole.USER
        assert tokens is PAIR
        self.user_repo.save.assert_awaited_once_with(user)
        saved = self.credential_repo.save.await_args.kwargs
        assert saved["email"] == "new@example.com"
        assert self.password_service.verify(PASSWORD, saved["password_hash"])
        self.token_service.issue_tokens.assert_awaited_once_with(user.id, "USER")
        assert _audited_actions(self.audit_repo) == [AuditAction.USER_REGISTERED]

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self):
        self.user_repo.exists_by_email.return_value = True

        with pytest.raises(EmailAlreadyExistsError):
            await self.service.register("alice@example.com", PASSWORD, "Alice")

        self.user_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_register_weak_password(self):
        self.user_repo.exists_by_email.return_value = False

        with pytest.raises(WeakPasswordError):
            await self.service.register("new@example.com", "short", "Newcomer")

        self.user_repo.save.assert_not_awaited()
        self.token_service.issue_tokens.assert_not_awaited()


class TestLogin(TestAuthenticationServiceBase):
    @pytest.mark.asyncio
    async def test_login_success(self):
        alice = TestUserFactory.alice()
        self.user_repo.find_by_email.return_value = alice
        self.credential_repo.find_by_user_id.return_value = self._credential(alice.id)

        user, tokens = await self.service.login(alice.email, PASSWORD)

        assert user is alice
        assert tokens is PAIR
        self.credential_repo.update_last_login.assert_awaited_once_with(alice.id)
        self.token_service.issue_tokens.assert_awaited_once_with(alice.id, "USER")
        assert _audited_actions(self.audit_repo) == [AuditAction.USER_LOGIN]

    @pytest.mark.asyncio
    async def test_unknown_email(self):
        self.user_repo.find_by_email.return_value = None

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await self.service.login("nobody@example.com", PASSWORD)

        assert exc_info.value.message == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_wrong_password(self):
        alice = TestUserFactory.alice()
        self.user_repo.find_by_email.return_value = alice
        self.credential_repo.find_by_user_id.return_value = self._credential(alice.id)

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await self.service.login(alice.email, "wrong-password")

        assert exc_info.value.message == "Invalid email or password"
        self.token_service.issue_tokens.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_deactivated_account_fails_like_wrong_password(self):
        alice = TestUserFactory.alice(is_active=False)
        self.user_repo.find_by_email.return_value = alice
        self.credential_repo.find_by_user_id.return_value = self._credential(alice.id)

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await self.service.login(alice.email, PASSWORD)

        assert exc_info.value.message == "Invalid email or password"
        self.token_service.issue_tokens.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_outdated_hash_is_upgraded(self):
        alice = TestUserFactory.alice()
        self.user_repo.find_by_email.return_value = alice
        self.credential_repo.find_by_user_id.return_value = UserCredentialData(
            user_id=alice.id,
            email=alice.email,
            password_hash=PasswordHashingService(rounds=5).hash(PASSWORD),
            last_login_at=None,
        )

        await self.service.login(alice.email, PASSWORD)

        self.credential_repo.update_password.assert_awaited_once()


class TestRefresh(TestAuthenticationServiceBase):
    def _claims(self, user_id) -> TokenClaims:
        now = datetime.now(tz=timezone.utc)
        return TokenClaims(
            user_id=user_id,
            role="USER",
            issued_at=now,
            expires_at=now + timedelta(days=7),
            token_type="refresh",
            token_id=uuid4().hex,
            family_id=uuid4().hex,
        )

    @pytest.mark.asyncio
    async def test_refresh_embeds_current_role(self):
        """A promotion since login shows up in the rotated tokens."""
        promoted = TestUserFactory.alice(role=UserRole.MODERATOR)
        self.token_service.verify_refresh_token.return_value = self._claims(
            promoted.id,
        )
        self.user_repo.find_by_id.return_value = promoted

        user, tokens = await self.service.refresh("refresh-token")

        assert user is promoted
        assert tokens is PAIR
        self.token_service.rotate_refresh_token.assert_awaited_once_with(
            "refresh-token",
            role="MODERATOR",
        )

    @pytest.mark.asyncio
    async def test_refresh_for_deactivated_user_ends_sessions(self):
        alice = TestUserFactory.alice(is_active=False)
        self.token_service.verify_refresh_token.return_value = self._claims(alice.id)
        self.user_repo.find_by_id.return_value = alice

        with pytest.raises(TokenInvalidError):
            await self.service.refresh("refresh-token")

        self.token_service.revoke_all_for_user.assert_awaited_once_with(alice.id)
        self.token_service.rotate_refresh_token.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_refresh_for_deleted_user(self):
        user_id = uuid4()
        self.token_service.verify_refresh_token.return_value = self._claims(user_id)
        self.user_repo.find_by_id.return_value = None

        with pytest.raises(TokenInvalidError):
            await self.service.refresh("refresh-token")


class TestLogoutAndPassword(TestAuthenticationServiceBase):
    @pytest.mark.asyncio
    async def test_logout_revokes_session(self):
        session = Session(access_token="a", refresh_token="r")

        await self.service.logout(session)

        self.token_service.revoke.assert_awaited_once_with(session)

    @pytest.mark.asyncio
    async def test_change_password_ends_all_sessions(self):
        alice = TestUserFactory.alice()
        self.credential_repo.find_by_user_id.return_value = self._credential(alice.id)

        await self.service.change_password(alice.id, PASSWORD, "a-brand-new-secret")

        user_id, new_hash = self.credential_repo.update_password.await_args.args
        assert user_id == alice.id
        assert self.password_service.verify("a-brand-new-secret", new_hash)
        self.token_service.revoke_all_for_user.assert_awaited_once_with(alice.id)
        assert _audited_actions(self.audit_repo) == [AuditAction.PASSWORD_CHANGED]

    @pytest.mark.asyncio
    async def test_change_password_wrong_current(self):
        alice = TestUserFactory.alice()
        self.credential_repo.find_by_user_id.return_value = self._credential(alice.id)

        with pytest.raises(InvalidCredentialsError):
            await self.service.change_password(alice.id, "not-it", "a-brand-new-secret")

        self.credential_repo.update_password.assert_not_awaited()
        self.token_service.revoke_all_for_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_change_password_weak_new_password(self):
        alice = TestUserFactory.alice()
        self.credential_repo.find_by_user_id.return_value = self._credential(alice.id)

        with pytest.raises(WeakPasswordError):
            await self.service.change_password(alice.id, PASSWORD, "short")

        self.token_service.revoke_all_for_user.assert_not_awaited()
