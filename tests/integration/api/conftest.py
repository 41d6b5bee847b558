"""Pytest fixtures for API integration tests.

Every test gets its own SQLite file with a moderator and an admin already
registered. Requests go through FastAPI's TestClient; one client holds one
member's cookies, so multi-user tests open one client per member.
"""

from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from quire.infrastructure.persistence.sqlalchemy import UserRepositorySQLAlchemy
from quire.presentation.api.app import API_V1_PREFIX, create_app
from quire.presentation.api.dependencies import get_db_session
from quire_auth import PasswordHashingService
from quire_auth.persistence.sqlalchemy import UserCredentialRepositorySQLAlchemy
from quire_config.settings import Settings
from tests.shared.fixtures.database import (  # NOQA: F401
    create_schema,
    make_session_maker,
    run_in_new_loop,
    sqlite_engine,
)
from tests.shared.fixtures.factories import TEST_PASSWORD, TestUserFactory

MEMBER_EMAIL = "reader@example.com"


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled and cheap password hashing."""
    return Settings(
        jwt_secret_key=SecretStr("api-test-signing-key-0123456789abcdef"),
        postgres_password=SecretStr("test-password"),
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        api_cookie_secure=False,  # Allow HTTP in tests
        password_hash_rounds=4,
    )


async def _seed_staff(session_maker, password_hash: str) -> None:
    async with session_maker() as session:
        users = UserRepositorySQLAlchemy(session)
        credentials = UserCredentialRepositorySQLAlchemy(session)
        for user in (TestUserFactory.moderator(), TestUserFactory.admin()):
            await users.save(user)
            await credentials.save(user.id, user.email, password_hash)
        await session.commit()


@pytest.fixture
def api_session_maker(sqlite_engine, api_settings):
    """Schema plus seeded staff accounts on a per-test SQLite file."""
    session_maker = make_session_maker(sqlite_engine)
    password_hash = PasswordHashingService(
        rounds=api_settings.password_hash_rounds,
    ).hash(TEST_PASSWORD)

    run_in_new_loop(create_schema(sqlite_engine))
    run_in_new_loop(_seed_staff(session_maker, password_hash))
    yield session_maker
    run_in_new_loop(sqlite_engine.dispose())


@pytest.fixture
def app(api_settings, api_session_maker):
    app = create_app(settings=api_settings)

    async def override_get_db_session():
        async with api_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    return app


@pytest.fixture
def make_client(app) -> Callable[[], TestClient]:
    """Open a fresh client (empty cookie jar) on the test app."""
    return lambda: TestClient(app)


@pytest.fixture
def test_client(make_client) -> TestClient:
    return make_client()


@pytest.fixture
def login_as(make_client, api_v1_prefix) -> Callable[..., TestClient]:
    """Return a client signed in as ``email`` (session cookies in its jar)."""

    def _login(email: str, password: str = TEST_PASSWORD) -> TestClient:
        client = make_client()
        response = client.post(
            f"{api_v1_prefix}/auth/login",
            json={"email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        return client

    return _login


@pytest.fixture
def member_client(make_client, api_v1_prefix) -> TestClient:
    """A freshly registered member."""
    client = make_client()
    response = client.post(
        f"{api_v1_prefix}/auth/register",
        json={
            "email": MEMBER_EMAIL,
            "password": TEST_PASSWORD,
            "display_name": "Reader",
        },
    )
    assert response.status_code == 201, response.text
    return client


@pytest.fixture
def moderator_client(login_as) -> TestClient:
    return login_as(TestUserFactory.MODERATOR_EMAIL)


@pytest.fixture
def admin_client(login_as) -> TestClient:
    return login_as(TestUserFactory.ADMIN_EMAIL)


@pytest.fixture
def approved_submissions(
    member_client,
    moderator_client,
    api_v1_prefix,
) -> Callable[[int], list[int]]:
    """Submit ``count`` pieces as the member and approve them all."""

    def _approve(count: int) -> list[int]:
        ids = []
        for i in range(count):
            created = member_client.post(
                f"{api_v1_prefix}/submissions",
                json={"category": "MY_NEWS", "body": f"Street news number {i}"},
            )
            assert created.status_code == 201, created.text
            submission_id = created.json()["id"]
            reviewed = moderator_client.post(
                f"{api_v1_prefix}/submissions/{submission_id}/review",
                json={"decision": "APPROVED"},
            )
            assert reviewed.status_code == 200, reviewed.text
            ids.append(submission_id)
        return ids

    return _approve
