"""JWT token service.

Provides JWT creation and verification for access and refresh tokens.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID, uuid4

import jwt

from quire.domain.shared.time import utc_now
from quire_auth.exceptions import (
    CryptoError,
    TokenExpiredError,
    TokenInvalidError,
    TokenMalformedError,
)
from quire_auth.schemas import ACCESS_TOKEN_TYPE, REFRESH_TOKEN_TYPE, TokenClaims

logger = logging.getLogger(__name__)


class JWTService:
    """Service for JWT token creation and verification.

    Access tokens are short-lived and checked on every request; refresh
    tokens are long-lived and only accepted at renewal.

    Expiry is evaluated against an injectable clock so the failure
    taxonomy can be exercised deterministically:

    - ``TokenExpiredError``: signature valid, ``now > exp``
    - ``TokenInvalidError``: bad signature, undecodable, wrong token type
    - ``TokenMalformedError``: required claims missing or unparseable

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.create_access_token(user_id, "USER")
    >>> claims = service.verify_token(token, expected_type="access")
    >>> print(claims.role)
    """

    DEFAULT_ACCESS_EXPIRE_MINUTES = 15
    DEFAULT_REFRESH_EXPIRE_DAYS = 7
    ALGORITHM = "HS256"
    REQUIRED_CLAIMS = ("sub", "role", "type", "iat", "exp", "jti")

    def __init__(
        self,
        secret_key: str,
        access_token_expire_minutes: int = DEFAULT_ACCESS_EXPIRE_MINUTES,
        refresh_token_expire_days: int = DEFAULT_REFRESH_EXPIRE_DAYS,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. An empty key is accepted here
            but every sign or verify call then fails with CryptoError.
        access_token_expire_minutes
            Minutes until an access token expires (default 15)
        refresh_token_expire_days
            Days until a refresh token expires (default 7)
        clock
            Returns the current UTC time
        """
        self._secret_key = secret_key
        self._access_expire = timedelta(minutes=access_token_expire_minutes)
        self._refresh_expire = timedelta(days=refresh_token_expire_days)
        self._clock = clock

    @property
    def access_token_ttl(self) -> timedelta:
        return self._access_expire

    @property
    def refresh_token_ttl(self) -> timedelta:
        return self._refresh_expire

    def create_access_token(
        self,
        user_id: UUID,
        role: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a short-lived access token.

        Parameters
        ----------
        user_id
            The user's unique identifier
        role
            The user's role value embedded for authorization
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string

        Raises
        ------
        CryptoError
            If the signing key is unavailable
        """
        token, _ = self._create_token(
            user_id=user_id,
            role=role,
            token_type=ACCESS_TOKEN_TYPE,
            expires_delta=expires_delta or self._access_expire,
        )
        return token

    def create_refresh_token(
        self,
        user_id: UUID,
        role: str,
        family_id: str,
        expires_delta: timedelta | None = None,
    ) -> tuple[str, TokenClaims]:
        """Create a long-lived refresh token belonging to a lineage.

        Returns
        -------
        The encoded token and its claims (the caller records ``token_id``
        in the refresh-token ledger)
        """
        return self._create_token(
            user_id=user_id,
            role=role,
            token_type=REFRESH_TOKEN_TYPE,
            expires_delta=expires_delta or self._refresh_expire,
            family_id=family_id,
        )

    def verify_token(
        self,
        token: str,
        expected_type: str | None = None,
        allow_expired: bool = False,
    ) -> TokenClaims:
        """Verify and decode a JWT token.

        Parameters
        ----------
        token
            The JWT token string to verify
        expected_type
            "access" or "refresh"; a token of the other type is invalid
        allow_expired
            Skip the expiry check (used only to identify a lineage on logout)

        Returns
        -------
        TokenClaims containing the decoded data

        Raises
        ------
        TokenExpiredError, TokenInvalidError, TokenMalformedError
            See class docstring
        CryptoError
            If the signing key is unavailable
        """
        key = self._signing_key()
        try:
            payload = jwt.decode(
                token,
                key,
                algorithms=[self.ALGORITHM],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": list(self.REQUIRED_CLAIMS),
                },
            )
        except jwt.MissingRequiredClaimError as e:
            raise TokenMalformedError(f"Malformed token payload: {e}") from e
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError(f"Invalid token: {e}") from e

        claims = self._to_claims(payload)

        if not allow_expired and self._clock() > claims.expires_at:
            raise TokenExpiredError
        if expected_type is not None and claims.token_type != expected_type:
            msg = f"Expected {expected_type} token, got {claims.token_type}"
            raise TokenInvalidError(msg)
        if claims.is_refresh_token() and not claims.family_id:
            msg = "Refresh token has no lineage"
            raise TokenMalformedError(msg)

        return claims

    def _signing_key(self) -> str:
        if not self._secret_key:
            logger.critical("JWT signing key is not configured")
            raise CryptoError
        return self._secret_key

    @staticmethod
    def _to_claims(payload: dict[str, Any]) -> TokenClaims:
        try:
            return TokenClaims(
                user_id=UUID(payload["sub"]),
                role=str(payload["role"]),
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                token_type=str(payload["type"]),
                token_id=str(payload["jti"]),
                family_id=payload.get("fam"),
            )
        except (KeyError, ValueError, TypeError, OverflowError) as e:
            raise TokenMalformedError(f"Malformed token payload: {e}") from e

    def _create_token(  # NOQA: PLR0913
        self,
        user_id: UUID,
        role: str,
        token_type: str,
        expires_delta: timedelta,
        family_id: str | None = None,
    ) -> tuple[str, TokenClaims]:
        key = self._signing_key()
        now = self._clock()
        expire = now + expires_delta
        token_id = uuid4().hex

        payload: dict[str, Any] = {
            "sub": str(user_id),
            "role": role,
            "type": token_type,
            "iat": now,
            "exp": expire,
            "jti": token_id,
        }
        if family_id is not None:
            payload["fam"] = family_id

        token = jwt.encode(payload, key, algorithm=self.ALGORITHM)
        claims = TokenClaims(
            user_id=user_id,
            role=role,
            issued_at=now,
            expires_at=expire,
            token_type=token_type,
            token_id=token_id,
            family_id=family_id,
        )
        return token, claims
