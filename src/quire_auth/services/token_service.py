"""Session token service.

Issues access/refresh pairs, verifies access tokens, rotates refresh
tokens (single use, per lineage) and revokes sessions.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from uuid import UUID, uuid4

from quire.domain.shared.time import utc_now
from quire_auth.exceptions import TokenError, TokenInvalidError
from quire_auth.repositories import RefreshTokenRecord, RefreshTokenRepository
from quire_auth.schemas import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    Session,
    TokenClaims,
    TokenPair,
)
from quire_auth.services.jwt_service import JWTService

logger = logging.getLogger(__name__)


class TokenService:
    """Session lifecycle on top of JWTService and the refresh-token ledger.

    A login starts a lineage (``family_id``). Every rotation consumes the
    presented refresh token and issues a successor in the same lineage.
    Presenting an already consumed token is treated as replay: the whole
    lineage is revoked and the call fails with ``TokenInvalidError``.

    Callers own the transaction: after a replay is detected the revocation
    must still be committed even though the call raised.
    """

    def __init__(
        self,
        jwt_service: JWTService,
        refresh_token_repository: RefreshTokenRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._jwt = jwt_service
        self._refresh_tokens = refresh_token_repository
        self._clock = clock

    async def issue_tokens(self, user_id: UUID, role: str) -> TokenPair:
        """Start a new session lineage and return its first token pair.

        Raises
        ------
        CryptoError
            If the signing key is unavailable
        """
        return await self._issue_pair(user_id, role, family_id=uuid4().hex)

    def verify_access_token(self, token: str) -> TokenClaims:
        """Verify an access token. Never evaluates the role.

        Raises
        ------
        TokenExpiredError, TokenInvalidError, TokenMalformedError, CryptoError
        """
        return self._jwt.verify_token(token, expected_type=ACCESS_TOKEN_TYPE)

    def verify_refresh_token(self, token: str) -> TokenClaims:
        """Stateless verification of a refresh token (ledger not consulted)."""
        return self._jwt.verify_token(token, expected_type=REFRESH_TOKEN_TYPE)

    async def rotate_refresh_token(
        self,
        refresh_token: str,
        role: str | None = None,
    ) -> TokenPair:
        """Consume a refresh token and issue its successor pair.

        Parameters
        ----------
        refresh_token
            The token presented by the client
        role
            Role to embed in the new tokens; defaults to the role carried
            by the refresh token

        Raises
        ------
        TokenExpiredError, TokenInvalidError, TokenMalformedError, CryptoError
            ``TokenInvalidError`` also covers reuse and revoked lineages
        """
        claims = self.verify_refresh_token(refresh_token)
        now = self._clock()

        consumed = await self._refresh_tokens.consume(claims.token_id, used_at=now)
        if not consumed:
            revoked = await self._refresh_tokens.revoke_family(
                claims.family_id,
                revoked_at=now,
            )
            logger.warning(
                "Refresh token replay for user %s; revoked %d token(s) in lineage %s",
                claims.user_id,
                revoked,
                claims.family_id,
            )
            msg = "Refresh token has already been used or was revoked"
            raise TokenInvalidError(msg)

        return await self._issue_pair(
            claims.user_id,
            role or claims.role,
            family_id=claims.family_id,
        )

    async def revoke(self, session: Session) -> None:
        """End a session by revoking its refresh lineage.

        Missing or unreadable tokens are ignored: logout always succeeds.
        Access tokens are stateless and lapse on their own short TTL.
        """
        if not session.refresh_token:
            return
        try:
            claims = self._jwt.verify_token(
                session.refresh_token,
                expected_type=REFRESH_TOKEN_TYPE,
                allow_expired=True,
            )
        except TokenError as e:
            logger.debug("Ignoring unreadable refresh token on logout (%s)", e.kind)
            return

        revoked = await self._refresh_tokens.revoke_family(
            claims.family_id,
            revoked_at=self._clock(),
        )
        logger.info("Revoked session for user %s (%d token(s))", claims.user_id, revoked)

    async def revoke_all_for_user(self, user_id: UUID) -> int:
        """Revoke every session of a user (role change, password change, ...)."""
        revoked = await self._refresh_tokens.revoke_all_for_user(
            user_id,
            revoked_at=self._clock(),
        )
        if revoked:
            logger.info("Revoked %d refresh token(s) for user %s", revoked, user_id)
        return revoked

    async def _issue_pair(self, user_id: UUID, role: str, family_id: str) -> TokenPair:
        access_token = self._jwt.create_access_token(user_id, role)
        refresh_token, refresh_claims = self._jwt.create_refresh_token(
            user_id,
            role,
            family_id=family_id,
        )
        await self._refresh_tokens.add(
            RefreshTokenRecord(
                token_id=refresh_claims.token_id,
                family_id=family_id,
                user_id=user_id,
                issued_at=refresh_claims.issued_at,
                expires_at=refresh_claims.expires_at,
            ),
        )
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            access_expires_in=int(self._jwt.access_token_ttl.total_seconds()),
            refresh_expires_in=int(self._jwt.refresh_token_ttl.total_seconds()),
        )
