"""Password hashing service using bcrypt.

Provides slow, salted password hashing and verification with a
configurable cost factor, plus basic strength validation.

bcrypt reads at most 72 bytes, so longer passwords are first reduced to a
base64 SHA-256 digest; short passwords are hashed as-is.
"""

import base64
import hashlib

import bcrypt

from quire_auth.exceptions import WeakPasswordError


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=12)
    >>> hashed = service.hash("my_secure_password")
    >>> service.verify("my_secure_password", hashed)
    True
    >>> service.verify("wrong_password", hashed)
    False
    """

    MIN_LENGTH = 8
    MAX_LENGTH = 128
    _BCRYPT_LIMIT = 72

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12.
        """
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        self.validate_strength(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(self._bcrypt_input(password), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        Returns False for malformed hashes instead of raising.
        """
        try:
            return bcrypt.checkpw(
                self._bcrypt_input(password),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            return False

    def validate_strength(self, password: str, min_length: int | None = None) -> None:
        """Validate that a password meets strength requirements.

        Parameters
        ----------
        password
            The password to validate
        min_length
            Override the minimum length (admin accounts use a stricter one)

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        minimum = min_length or self.MIN_LENGTH

        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < minimum:
            msg = f"Password must be at least {minimum} characters"
            raise WeakPasswordError(msg)

        if len(password) > self.MAX_LENGTH:
            msg = f"Password cannot exceed {self.MAX_LENGTH} characters"
            raise WeakPasswordError(msg)

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if a hash was made with a different cost factor."""
        try:
            # bcrypt format: $2b$XX$...
            parts = password_hash.split("$")
            if len(parts) >= 3:
                return int(parts[2]) != self._rounds
        except (ValueError, IndexError):
            pass
        return True

    @classmethod
    def _bcrypt_input(cls, password: str) -> bytes:
        raw = password.encode("utf-8")
        if len(raw) <= cls._BCRYPT_LIMIT:
            return raw
        return base64.b64encode(hashlib.sha256(raw).digest())
