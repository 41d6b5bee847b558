"""Unit tests for PasswordHashingService."""

import pytest

from quire_auth.exceptions import WeakPasswordError
from quire_auth.services import PasswordHashingService


class TestPasswordHashingService:
    """Tests for password hashing and verification."""

    def setup_method(self):
        self.service = PasswordHashingService(rounds=4)  # Low rounds for fast tests

    def test_hash_returns_bcrypt_format(self):
        hashed = self.service.hash("secure_password123")

        # bcrypt hashes start with $2b$ and are ~60 characters
        assert hashed.startswith("$2")
        assert len(hashed) >= 50

    def test_verify_correct_password(self):
        hashed = self.service.hash("my_secret_password")

        assert self.service.verify("my_secret_password", hashed) is True

    def test_verify_incorrect_password(self):
        hashed = self.service.hash("my_secret_password")

        assert self.service.verify("wrong_password", hashed) is False

    def test_verify_invalid_hash_returns_false(self):
        assert self.service.verify("password", "not_a_valid_hash") is False
        assert self.service.verify("password", "") is False

    def test_hash_produces_different_hashes(self):
        """Random salt: same password, different hashes, both verify."""
        hash1 = self.service.hash("same_password")
        hash2 = self.service.hash("same_password")

        assert hash1 != hash2
        assert self.service.verify("same_password", hash1)
        assert self.service.verify("same_password", hash2)

    def test_hash_validates_strength(self):
        with pytest.raises(WeakPasswordError):
            self.service.hash("short")


class TestPasswordValidation:
    """Tests for password strength validation."""

    def setup_method(self):
        self.service = PasswordHashingService(rounds=4)

    def test_validate_empty_password_raises(self):
        with pytest.raises(WeakPasswordError, match="cannot be empty"):
            self.service.validate_strength("")

    def test_validate_short_password_raises(self):
        with pytest.raises(WeakPasswordError, match="at least 8 characters"):
            self.service.validate_strength("short")

    def test_validate_custom_minimum(self):
        with pytest.raises(WeakPasswordError, match="at least 12 characters"):
            self.service.validate_strength("elevenchars", min_length=12)

        self.service.validate_strength("twelve chars", min_length=12)

    def test_validate_too_long_password_raises(self):
        with pytest.raises(WeakPasswordError, match="cannot exceed 128"):
            self.service.validate_strength("a" * 129)

    def test_passwords_past_bcrypt_limit_are_fully_significant(self):
        """Inputs over 72 bytes differ only in their tail."""
        long_password = "p" * 100
        hashed = self.service.hash(long_password)

        assert self.service.verify(long_password, hashed)
        assert not self.service.verify("p" * 99 + "q", hashed)

    def test_multibyte_password_within_limit(self):
        hashed = self.service.hash("ü" * 40)

        assert self.service.verify("ü" * 40, hashed)

    def test_validate_valid_password(self):
        self.service.validate_strength("valid_password")


class TestNeedsRehash:
    def test_same_rounds_no_rehash(self):
        service = PasswordHashingService(rounds=4)

        assert service.needs_rehash(service.hash("password123")) is False

    def test_different_rounds_needs_rehash(self):
        old_hash = PasswordHashingService(rounds=4).hash("password123")

        assert PasswordHashingService(rounds=5).needs_rehash(old_hash) is True

    def test_garbage_needs_rehash(self):
        assert PasswordHashingService(rounds=4).needs_rehash("garbage") is True
