"""Auth schemas and data structures.

Simple data classes used for passing token data between components.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


@dataclass(frozen=True)
class TokenClaims:
    """Decoded and verified JWT claims.

    Attributes
    ----------
    user_id
        The unique identifier of the user (``sub``)
    role
        The user's role at issue time, as its string value
    issued_at
        Issue timestamp (``iat``)
    expires_at
        Expiration timestamp (``exp``)
    token_type
        Either "access" or "refresh"
    token_id
        Unique token identifier (``jti``)
    family_id
        Refresh lineage identifier (``fam``), refresh tokens only
    """

    user_id: UUID
    role: str
    issued_at: datetime
    expires_at: datetime
    token_type: str
    token_id: str
    family_id: Optional[str] = None

    def is_refresh_token(self) -> bool:
        return self.token_type == REFRESH_TOKEN_TYPE


@dataclass(frozen=True)
class TokenPair:
    """A freshly issued access/refresh pair with TTLs in seconds."""

    access_token: str
    refresh_token: str
    access_expires_in: int
    refresh_expires_in: int


@dataclass(frozen=True)
class Session:
    """The tokens a client presents, independent of how they were carried."""

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
