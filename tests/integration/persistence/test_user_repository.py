"""Integration tests for UserRepositorySQLAlchemy with SQLite."""

import pytest

from quire.domain.user import EmailAlreadyExistsError, User, UserRole
from quire.infrastructure.persistence.sqlalchemy import UserRepositorySQLAlchemy


@pytest.fixture
def user_repo(db_session):
    return UserRepositorySQLAlchemy(db_session)


class TestUserRepositorySQLAlchemy:
    @pytest.mark.asyncio
    async def test_save_and_find_by_id(self, user_repo):
        user = User.create("writer@example.com", "Writer")

        await user_repo.save(user)
        found = await user_repo.find_by_id(user.id)

        assert found == user
        assert found.email == "writer@example.com"
        assert found.display_name == "Writer"
        assert found.role == UserRole.USER
        assert found.is_active is True

    @pytest.mark.asyncio
    async def test_find_by_email_is_case_insensitive(self, user_repo):
        user = User.create("Writer@Example.com", "Writer")
        await user_repo.save(user)

        found = await user_repo.find_by_email("WRITER@example.COM")

        assert found is not None
        assert found.id == user.id
        assert await user_repo.exists_by_email("writer@example.com") is True
        assert await user_repo.exists_by_email("nobody@example.com") is False

    @pytest.mark.asyncio
    async def test_duplicate_email_is_rejected(self, user_repo):
        await user_repo.save(User.create("same@example.com", "First"))

        with pytest.raises(EmailAlreadyExistsError):
            await user_repo.save(User.create("same@example.com", "Second"))

    @pytest.mark.asyncio
    async def test_save_updates_role_and_status(self, user_repo):
        user = User.create("writer@example.com", "Writer")
        await user_repo.save(user)

        user.change_role(UserRole.MODERATOR)
        user.deactivate()
        await user_repo.save(user)
        found = await user_repo.find_by_id(user.id)

        assert found.role == UserRole.MODERATOR
        assert found.is_active is False

    @pytest.mark.asyncio
    async def test_list_all_and_count(self, user_repo, members):
        users = await user_repo.list_all()

        assert await user_repo.count() == 3
        assert {u.id for u in users} == {u.id for u in members.values()}
