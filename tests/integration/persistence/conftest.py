"""Fixtures for repository tests against real SQLAlchemy sessions."""

import pytest_asyncio

from quire.infrastructure.persistence.sqlalchemy import UserRepositorySQLAlchemy
from tests.shared.fixtures.database import (  # NOQA: F401
    async_engine,
    db_session,
    postgres_container,
    postgres_engine,
    session_maker,
    sqlite_engine,
)
from tests.shared.fixtures.factories import TestUserFactory


@pytest_asyncio.fixture
async def members(db_session):
    """Alice, Bob and a moderator, flushed into the test session."""
    repo = UserRepositorySQLAlchemy(db_session)
    users = {
        "alice": TestUserFactory.alice(),
        "bob": TestUserFactory.bob(),
        "moderator": TestUserFactory.moderator(),
    }
    for user in users.values():
        await repo.save(user)
    return users
