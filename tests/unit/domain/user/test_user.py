"""Unit tests for User aggregate."""

from uuid import UUID

import pytest

from quire.domain.user import (
    Email,
    InvalidDisplayNameError,
    InvalidEmailError,
    User,
    UserRole,
)


class TestUser:
    """Tests for User aggregate."""

    def test_create_generates_random_uuid(self):
        """User.create generates a random UUID4 for ID."""
        user = User.create("member@example.com", display_name="Member")

        assert isinstance(user.id, UUID)
        assert user.email == "member@example.com"
        assert user.role == UserRole.USER
        assert user.is_active is True

    def test_create_generates_unique_ids(self):
        user1 = User.create("member@example.com", display_name="Member")
        user2 = User.create("member@example.com", display_name="Member")

        assert user1.id != user2.id

    def test_create_with_email_object(self):
        user = User.create(Email("member@example.com"), display_name="Member")

        assert user.email_obj == Email("member@example.com")

    def test_email_normalized(self):
        """Email is normalized to lowercase."""
        user = User.create("MEMBER@EXAMPLE.COM", display_name="Member")

        assert user.email == "member@example.com"

    def test_create_with_invalid_email_raises(self):
        with pytest.raises(InvalidEmailError):
            User.create("not-an-email", display_name="Member")

    def test_display_name_is_trimmed(self):
        user = User.create("member@example.com", display_name="  Member  ")

        assert user.display_name == "Member"

    @pytest.mark.parametrize("name", ["", "   ", "x" * 101])
    def test_invalid_display_name_raises(self, name):
        with pytest.raises(InvalidDisplayNameError):
            User.create("member@example.com", display_name=name)

    def test_change_role_accepts_string(self):
        user = User.create("member@example.com", display_name="Member")

        user.change_role("moderator")

        assert user.role == UserRole.MODERATOR
        assert user.is_admin is False

    def test_change_role_rejects_unknown_role(self):
        user = User.create("member@example.com", display_name="Member")

        with pytest.raises(ValueError, match="Unknown role"):
            user.change_role("EDITOR")

        assert user.role == UserRole.USER

    def test_deactivate_and_activate(self):
        user = User.create("member@example.com", display_name="Member")
        original_updated_at = user.updated_at

        user.deactivate()
        assert user.is_active is False
        assert user.updated_at >= original_updated_at

        user.activate()
        assert user.is_active is True

    def test_reconstitute_keeps_identity(self):
        user = User.create("member@example.com", display_name="Member")

        restored = User.reconstitute(
            id=user.id,
            email=user.email,
            display_name=user.display_name,
            role="ADMIN",
            is_active=False,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

        assert restored == user
        assert hash(restored) == hash(user)
        assert restored.is_admin is True
        assert restored.is_active is False


class TestUserRole:
    """Role ordering is the only authorization comparison in the system."""

    @pytest.mark.parametrize(
        ("role", "minimum", "expected"),
        [
            (UserRole.USER, UserRole.USER, True),
            (UserRole.USER, UserRole.MODERATOR, False),
            (UserRole.USER, UserRole.ADMIN, False),
            (UserRole.MODERATOR, UserRole.USER, True),
            (UserRole.MODERATOR, UserRole.MODERATOR, True),
            (UserRole.MODERATOR, UserRole.ADMIN, False),
            (UserRole.ADMIN, UserRole.USER, True),
            (UserRole.ADMIN, UserRole.MODERATOR, True),
            (UserRole.ADMIN, UserRole.ADMIN, True),
        ],
    )
    def test_at_least(self, role, minimum, expected):
        assert role.at_least(minimum) is expected

    def test_parse_is_case_insensitive(self):
        assert UserRole.parse("admin") == UserRole.ADMIN
        assert UserRole.parse(UserRole.USER) is UserRole.USER

    @pytest.mark.parametrize("value", ["", "ROOT", "superuser"])
    def test_parse_unknown_raises_value_error(self, value):
        with pytest.raises(ValueError, match="Unknown role"):
            UserRole.parse(value)

    def test_labels(self):
        assert UserRole.ADMIN.label == "Administrator"
        assert UserRole.USER.label == "Member"


class TestEmail:
    def test_normalizes_case_and_whitespace(self):
        assert Email("  Reader@Example.COM ").value == "reader@example.com"
        assert Email("Reader@example.com") == Email("reader@example.com")

    def test_domain(self):
        assert Email("reader@news.example.org").domain == "news.example.org"

    @pytest.mark.parametrize(
        "value",
        ["", "   ", "reader", "reader@localhost", "@example.com", "a" * 250 + "@x.io"],
    )
    def test_rejects_invalid(self, value):
        with pytest.raises(InvalidEmailError):
            Email(value)
