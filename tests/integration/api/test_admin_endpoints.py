"""Integration tests for admin endpoints (roles, activation, audit log)."""

from quire.presentation.api.cookies import REFRESH_TOKEN_COOKIE
from tests.shared.fixtures.factories import TEST_PASSWORD, TestUserFactory


def _member_id(client, prefix) -> str:
    return client.get(f"{prefix}/auth/me").json()["id"]


class TestAdminAccess:
    def test_moderator_is_not_admin(self, moderator_client, api_v1_prefix):
        response = moderator_client.get(f"{api_v1_prefix}/admin/users")

        assert response.status_code == 403
        assert response.json()["detail"] == "Admin access required"

    def test_list_users(self, admin_client, member_client, api_v1_prefix):
        response = admin_client.get(f"{api_v1_prefix}/admin/users")

        assert response.status_code == 200
        emails = {u["email"] for u in response.json()}
        assert emails == {
            TestUserFactory.MODERATOR_EMAIL,
            TestUserFactory.ADMIN_EMAIL,
            "reader@example.com",
        }


class TestRoleChange:
    def test_promote_member(
        self,
        admin_client,
        member_client,
        login_as,
        api_v1_prefix,
    ):
        member_id = _member_id(member_client, api_v1_prefix)
        old_refresh = member_client.cookies.get(REFRESH_TOKEN_COOKIE)

        response = admin_client.patch(
            f"{api_v1_prefix}/admin/users/{member_id}/role",
            json={"role": "moderator"},
        )

        assert response.status_code == 200
        assert response.json()["role"] == "MODERATOR"
        # Existing sessions end; a fresh login carries the new role
        stale = member_client.post(
            f"{api_v1_prefix}/auth/refresh",
            json={"refresh_token": old_refresh},
        )
        assert stale.status_code == 401
        promoted = login_as("reader@example.com")
        assert promoted.get(f"{api_v1_prefix}/submissions").status_code == 200

    def test_unknown_role(self, admin_client, member_client, api_v1_prefix):
        member_id = _member_id(member_client, api_v1_prefix)

        response = admin_client.patch(
            f"{api_v1_prefix}/admin/users/{member_id}/role",
            json={"role": "EDITOR"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ROLE"

    def test_admin_cannot_demote_self(self, admin_client, api_v1_prefix):
        response = admin_client.patch(
            f"{api_v1_prefix}/admin/users/{TestUserFactory.ADMIN_ID}/role",
            json={"role": "USER"},
        )

        assert response.status_code == 409
        assert response.json()["code"] == "CANNOT_MODIFY_SELF"

    def test_unknown_user(self, admin_client, api_v1_prefix):
        response = admin_client.patch(
            f"{api_v1_prefix}/admin/users/{TestUserFactory.BOB_ID}/role",
            json={"role": "ADMIN"},
        )

        assert response.status_code == 404


class TestActivation:
    def test_deactivated_member_cannot_sign_in(
        self,
        admin_client,
        member_client,
        make_client,
        api_v1_prefix,
    ):
        member_id = _member_id(member_client, api_v1_prefix)

        deactivated = admin_client.post(
            f"{api_v1_prefix}/admin/users/{member_id}/deactivate",
        )
        login = make_client().post(
            f"{api_v1_prefix}/auth/login",
            json={"email": "reader@example.com", "password": TEST_PASSWORD},
        )
        refresh = member_client.post(f"{api_v1_prefix}/auth/refresh")

        assert deactivated.status_code == 200
        assert deactivated.json()["is_active"] is False
        assert login.status_code == 401
        assert login.json()["code"] == "INVALID_CREDENTIALS"
        assert refresh.status_code == 401

    def test_reactivate(self, admin_client, member_client, login_as, api_v1_prefix):
        member_id = _member_id(member_client, api_v1_prefix)
        admin_client.post(f"{api_v1_prefix}/admin/users/{member_id}/deactivate")

        response = admin_client.post(
            f"{api_v1_prefix}/admin/users/{member_id}/activate",
        )

        assert response.json()["is_active"] is True
        login_as("reader@example.com")

    def test_admin_cannot_deactivate_self(self, admin_client, api_v1_prefix):
        response = admin_client.post(
            f"{api_v1_prefix}/admin/users/{TestUserFactory.ADMIN_ID}/deactivate",
        )

        assert response.status_code == 409


class TestAuditLog:
    def test_actions_are_recorded(
        self,
        admin_client,
        moderator_client,
        approved_submissions,
        api_v1_prefix,
    ):
        approved_submissions(1)

        everything = admin_client.get(f"{api_v1_prefix}/admin/audit-log")
        approvals = admin_client.get(
            f"{api_v1_prefix}/admin/audit-log",
            params={"action": "SUBMISSION_APPROVED"},
        )

        assert everything.status_code == 200
        actions = {e["action"] for e in everything.json()}
        assert {
            "USER_REGISTERED",
            "USER_LOGIN",
            "SUBMISSION_CREATED",
            "SUBMISSION_APPROVED",
        } <= actions
        assert len(approvals.json()) == 1
        assert approvals.json()[0]["actor_id"] == str(TestUserFactory.MODERATOR_ID)
