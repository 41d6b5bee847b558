"""Integration tests for the magazine lifecycle endpoints."""

import pytest


@pytest.fixture
def draft(moderator_client, approved_submissions, api_v1_prefix) -> dict:
    """A draft holding two approved submissions, in reverse order."""
    first, second = approved_submissions(2)
    response = moderator_client.post(
        f"{api_v1_prefix}/magazines",
        json={
            "title": "Spring Issue",
            "description": "News from the neighbourhood",
            "submission_ids": [second, first],
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestAssemble:
    def test_draft_keeps_given_order(self, draft, moderator_client):
        assert draft["is_public"] is False
        assert draft["published_at"] is None
        assert draft["item_count"] == 2
        assert [i["position"] for i in draft["items"]] == [0, 1]
        assert draft["items"][0]["submission_id"] > draft["items"][1]["submission_id"]
        assert draft["items"][0]["author_name"] == "Reader"
        assert draft["slug"].startswith("spring-issue-")
        assert draft["created_by"] is not None

    def test_member_cannot_assemble(
        self,
        member_client,
        approved_submissions,
        api_v1_prefix,
    ):
        ids = approved_submissions(1)

        response = member_client.post(
            f"{api_v1_prefix}/magazines",
            json={"title": "Mine", "submission_ids": ids},
        )

        assert response.status_code == 403

    def test_empty_selection_is_rejected(self, moderator_client, api_v1_prefix):
        response = moderator_client.post(
            f"{api_v1_prefix}/magazines",
            json={"title": "Empty", "submission_ids": []},
        )

        assert response.status_code == 422

    def test_duplicate_ids(self, moderator_client, approved_submissions, api_v1_prefix):
        (only,) = approved_submissions(1)

        response = moderator_client.post(
            f"{api_v1_prefix}/magazines",
            json={"title": "Twice", "submission_ids": [only, only]},
        )

        assert response.status_code == 400

    def test_pending_submission_is_refused(
        self,
        member_client,
        moderator_client,
        api_v1_prefix,
    ):
        pending = member_client.post(
            f"{api_v1_prefix}/submissions",
            json={"category": "MY_NEWS", "body": "Not reviewed yet"},
        ).json()["id"]

        response = moderator_client.post(
            f"{api_v1_prefix}/magazines",
            json={"title": "Early", "submission_ids": [pending]},
        )

        assert response.status_code == 409
        assert response.json()["code"] == "INVALID_SUBMISSION_STATE"

    def test_unknown_submission(self, moderator_client, api_v1_prefix):
        response = moderator_client.post(
            f"{api_v1_prefix}/magazines",
            json={"title": "Ghost", "submission_ids": [9999]},
        )

        assert response.status_code == 404

    def test_submission_cannot_be_placed_twice(
        self,
        draft,
        moderator_client,
        api_v1_prefix,
    ):
        taken = draft["items"][0]["submission_id"]

        response = moderator_client.post(
            f"{api_v1_prefix}/magazines",
            json={"title": "Second", "submission_ids": [taken]},
        )

        assert response.status_code == 409
        assert response.json()["code"] == "ALREADY_ASSIGNED"

    def test_unassigned_filter_excludes_placed(
        self,
        draft,
        moderator_client,
        approved_submissions,
        api_v1_prefix,
    ):
        (free,) = approved_submissions(1)

        response = moderator_client.get(
            f"{api_v1_prefix}/submissions",
            params={"status": "APPROVED", "unassigned_only": True},
        )

        assert [s["id"] for s in response.json()] == [free]


class TestPublish:
    def test_publish_once(self, draft, moderator_client, api_v1_prefix):
        url = f"{api_v1_prefix}/magazines/{draft['id']}/publish"

        first = moderator_client.post(url)
        second = moderator_client.post(url)

        assert first.status_code == 200
        assert first.json()["is_public"] is True
        assert first.json()["published_at"] is not None
        assert second.status_code == 409
        assert second.json()["code"] == "ALREADY_PUBLISHED"

    def test_publish_unknown(self, moderator_client, api_v1_prefix):
        response = moderator_client.post(f"{api_v1_prefix}/magazines/777/publish")

        assert response.status_code == 404

    def test_member_cannot_publish(self, draft, member_client, api_v1_prefix):
        response = member_client.post(
            f"{api_v1_prefix}/magazines/{draft['id']}/publish",
        )

        assert response.status_code == 403


class TestPublicReads:
    def test_draft_is_hidden_from_public(self, draft, test_client, api_v1_prefix):
        by_id = test_client.get(f"{api_v1_prefix}/magazines/{draft['id']}")
        by_slug = test_client.get(f"{api_v1_prefix}/magazines/slug/{draft['slug']}")
        archive = test_client.get(f"{api_v1_prefix}/magazines")

        assert by_id.status_code == 404
        assert by_slug.status_code == 404
        assert archive.json() == []

    def test_latest_is_null_before_first_issue(self, test_client, api_v1_prefix):
        response = test_client.get(f"{api_v1_prefix}/magazines/latest")

        assert response.status_code == 200
        assert response.json() == {"magazine": None}

    def test_published_issue_is_public_without_staff_fields(
        self,
        draft,
        moderator_client,
        test_client,
        api_v1_prefix,
    ):
        moderator_client.post(f"{api_v1_prefix}/magazines/{draft['id']}/publish")

        by_id = test_client.get(f"{api_v1_prefix}/magazines/{draft['id']}")
        by_slug = test_client.get(f"{api_v1_prefix}/magazines/slug/{draft['slug']}")
        latest = test_client.get(f"{api_v1_prefix}/magazines/latest")
        archive = test_client.get(f"{api_v1_prefix}/magazines")

        assert by_id.status_code == 200
        assert by_id.json()["created_by"] is None
        assert by_id.json()["published_by"] is None
        assert [i["submission_id"] for i in by_id.json()["items"]] == [
            i["submission_id"] for i in draft["items"]
        ]
        assert by_slug.json()["id"] == draft["id"]
        assert latest.json()["magazine"]["id"] == draft["id"]
        assert [m["id"] for m in archive.json()] == [draft["id"]]


class TestModeratorReads:
    def test_draft_dashboard(self, draft, moderator_client, api_v1_prefix):
        response = moderator_client.get(f"{api_v1_prefix}/magazines/drafts")

        assert response.status_code == 200
        data = response.json()
        assert [m["id"] for m in data["magazines"]] == [draft["id"]]
        assert data["stats"]["draft_count"] == 1
        assert data["stats"]["published_count"] == 0
        assert data["stats"]["approved_submissions"] == 2

    def test_statistics_after_publish(self, draft, moderator_client, api_v1_prefix):
        moderator_client.post(f"{api_v1_prefix}/magazines/{draft['id']}/publish")

        response = moderator_client.get(f"{api_v1_prefix}/magazines/statistics")

        assert response.json() == {
            "draft_count": 0,
            "published_count": 1,
            "total_magazines": 1,
            "pending_submissions": 0,
            "approved_submissions": 2,
            "rejected_submissions": 0,
            "total_submissions": 2,
        }

    def test_moderator_sees_draft_by_id(self, draft, moderator_client, api_v1_prefix):
        response = moderator_client.get(
            f"{api_v1_prefix}/magazines/drafts/{draft['id']}",
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Spring Issue"

    def test_member_cannot_see_dashboard(self, member_client, api_v1_prefix):
        response = member_client.get(f"{api_v1_prefix}/magazines/drafts")

        assert response.status_code == 403


class TestOutOfRangeIds:
    TOO_BIG = 2**31

    @pytest.mark.parametrize("magazine_id", [TOO_BIG, 2**64, 0])
    def test_public_read(self, test_client, api_v1_prefix, magazine_id):
        response = test_client.get(f"{api_v1_prefix}/magazines/{magazine_id}")

        assert response.status_code == 422

    def test_largest_id_is_just_not_found(self, test_client, api_v1_prefix):
        response = test_client.get(f"{api_v1_prefix}/magazines/{2**31 - 1}")

        assert response.status_code == 404
        assert response.json()["code"] == "MAGAZINE_NOT_FOUND"

    def test_moderator_draft_read(self, moderator_client, api_v1_prefix):
        response = moderator_client.get(
            f"{api_v1_prefix}/magazines/drafts/{self.TOO_BIG}",
        )

        assert response.status_code == 422

    def test_publish(self, moderator_client, api_v1_prefix):
        response = moderator_client.post(
            f"{api_v1_prefix}/magazines/{2**64}/publish",
        )

        assert response.status_code == 422

    def test_assemble_with_huge_submission_id(self, moderator_client, api_v1_prefix):
        response = moderator_client.post(
            f"{api_v1_prefix}/magazines",
            json={"title": "Overflow", "submission_ids": [2**64]},
        )

        assert response.status_code == 422

    def test_archive_offset(self, test_client, api_v1_prefix):
        response = test_client.get(
            f"{api_v1_prefix}/magazines",
            params={"offset": 2**64},
        )

        assert response.status_code == 422
