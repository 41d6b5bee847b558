"""Shared pytest fixtures for all test domains."""

from tests.shared.fixtures.database import (
    async_engine,
    db_session,
    postgres_container,
    postgres_engine,
    session_maker,
    sqlite_engine,
)
from tests.shared.fixtures.factories import (
    TestUserFactory,
    make_magazine,
    make_submission,
)

__all__ = [
    "async_engine",
    "db_session",
    "make_magazine",
    "make_submission",
    "postgres_container",
    "postgres_engine",
    "session_maker",
    "sqlite_engine",
    "TestUserFactory",
]
