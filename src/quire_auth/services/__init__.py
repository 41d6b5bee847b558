"""Authentication services.

Provides password hashing, JWT handling and session token lifecycle.
"""

from quire_auth.services.jwt_service import JWTService
from quire_auth.services.password_service import PasswordHashingService
from quire_auth.services.token_service import TokenService

__all__ = [
    "JWTService",
    "PasswordHashingService",
    "TokenService",
]
