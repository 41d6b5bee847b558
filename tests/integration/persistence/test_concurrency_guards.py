"""
Races between two sessions, decided by the database.

Each test opens two independent sessions on the same database and lets
the first one commit before the second one writes:
- publishing an issue twice
- placing one submission in two issues
- reviewing one submission twice
- rotating one refresh token twice

Run against SQLite by default and against Postgres with --run-integration.
"""

from datetime import timedelta
from uuid import uuid4

import pytest

from quire.domain.editorial import (
    AlreadyAssignedError,
    Magazine,
    SubmissionStatus,
)
from quire.infrastructure.persistence.sqlalchemy import (
    MagazineRepositorySQLAlchemy,
    SubmissionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from quire_auth import RefreshTokenRecord
from quire_auth.persistence.sqlalchemy import RefreshTokenRepositorySQLAlchemy
from tests.shared.fixtures.database import make_session_maker
from tests.shared.fixtures.factories import FIXED_NOW, TestUserFactory, make_submission

MODERATOR = TestUserFactory.MODERATOR_ID


@pytest.fixture(
    params=[
        "async_engine",
        pytest.param("postgres_engine", marks=pytest.mark.integration),
    ],
)
def two_sessions(request):
    """A session maker for whichever backend this run targets."""
    return make_session_maker(request.getfixturevalue(request.param))


async def _seed(maker, approved: int = 0, pending: int = 0) -> list[int]:
    async with maker() as session:
        users = UserRepositorySQLAlchemy(session)
        await users.save(TestUserFactory.alice())
        await users.save(TestUserFactory.moderator())
        repo = SubmissionRepositorySQLAlchemy(session)
        ids = []
        for status in [SubmissionStatus.APPROVED] * approved + [
            SubmissionStatus.PENDING,
        ] * pending:
            submission = make_submission(status=status)
            await repo.add(submission)
            ids.append(submission.id)
        await session.commit()
    return ids


class TestPublishRace:
    @pytest.mark.asyncio
    async def test_second_publisher_loses(self, two_sessions):
        (submission_id,) = await _seed(two_sessions, approved=1)
        async with two_sessions() as session:
            repo = MagazineRepositorySQLAlchemy(session)
            found = await SubmissionRepositorySQLAlchemy(session).find_by_id(
                submission_id,
            )
            magazine = Magazine.assemble("Spring", [found], created_by=MODERATOR)
            await repo.add(magazine)
            await session.commit()

        async with two_sessions() as first, two_sessions() as second:
            first_repo = MagazineRepositorySQLAlchemy(first)
            second_repo = MagazineRepositorySQLAlchemy(second)
            seen_by_second = await second_repo.find_by_id(magazine.id)
            assert seen_by_second.is_draft

            assert await first_repo.mark_published(magazine.id, FIXED_NOW, MODERATOR)
            await first.commit()

            later = FIXED_NOW + timedelta(minutes=1)
            assert not await second_repo.mark_published(magazine.id, later, MODERATOR)
            await second.commit()

        async with two_sessions() as session:
            published = await MagazineRepositorySQLAlchemy(session).find_by_id(
                magazine.id,
            )
        assert published.published_at == FIXED_NOW


class TestAssemblyRace:
    @pytest.mark.asyncio
    async def test_second_assembler_loses(self, two_sessions):
        shared_id, other_id = await _seed(two_sessions, approved=2)

        async with two_sessions() as first, two_sessions() as second:
            first_subs = await SubmissionRepositorySQLAlchemy(first).find_by_ids(
                [shared_id],
            )
            second_subs = await SubmissionRepositorySQLAlchemy(second).find_by_ids(
                [other_id, shared_id],
            )
            # Both see the submission as unassigned
            assert not await MagazineRepositorySQLAlchemy(
                second,
            ).find_assigned_submission_ids([shared_id])

            await MagazineRepositorySQLAlchemy(first).add(
                Magazine.assemble("First", list(first_subs.values()), MODERATOR),
            )
            await first.commit()

            with pytest.raises(AlreadyAssignedError):
                await MagazineRepositorySQLAlchemy(second).add(
                    Magazine.assemble(
                        "Second",
                        [second_subs[other_id], second_subs[shared_id]],
                        MODERATOR,
                    ),
                )
            await second.rollback()

        async with two_sessions() as session:
            drafts = await MagazineRepositorySQLAlchemy(session).list_drafts()
        assert [m.title for m in drafts] == ["First"]


class TestReviewRace:
    @pytest.mark.asyncio
    async def test_second_reviewer_loses(self, two_sessions):
        (submission_id,) = await _seed(two_sessions, pending=1)

        async with two_sessions() as first, two_sessions() as second:
            approve = await SubmissionRepositorySQLAlchemy(first).find_by_id(
                submission_id,
            )
            reject = await SubmissionRepositorySQLAlchemy(second).find_by_id(
                submission_id,
            )
            approve.review("APPROVED", MODERATOR, now=FIXED_NOW)
            reject.review("REJECTED", MODERATOR, now=FIXED_NOW)

            assert await SubmissionRepositorySQLAlchemy(first).save_review(approve)
            await first.commit()
            assert not await SubmissionRepositorySQLAlchemy(second).save_review(reject)
            await second.commit()

        async with two_sessions() as session:
            final = await SubmissionRepositorySQLAlchemy(session).find_by_id(
                submission_id,
            )
        assert final.status == SubmissionStatus.APPROVED


class TestRotationRace:
    @pytest.mark.asyncio
    async def test_refresh_token_is_consumed_once(self, two_sessions):
        await _seed(two_sessions)
        token_id = uuid4().hex
        async with two_sessions() as session:
            await RefreshTokenRepositorySQLAlchemy(session).add(
                RefreshTokenRecord(
                    token_id=token_id,
                    family_id=uuid4().hex,
                    user_id=TestUserFactory.ALICE_ID,
                    issued_at=FIXED_NOW,
                    expires_at=FIXED_NOW + timedelta(days=7),
                ),
            )
            await session.commit()

        async with two_sessions() as first, two_sessions() as second:
            assert await RefreshTokenRepositorySQLAlchemy(first).consume(
                token_id,
                FIXED_NOW,
            )
            await first.commit()
            assert not await RefreshTokenRepositorySQLAlchemy(second).consume(
                token_id,
                FIXED_NOW,
            )
            await second.commit()
