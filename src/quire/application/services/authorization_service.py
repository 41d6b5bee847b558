"""Role-gated authorization of access tokens."""

import logging

from quire.application.ports.identity import CurrentUser
from quire.domain.user import UserRole
from quire_auth import (
    AuthenticationRequiredError,
    AuthorizationDeniedError,
    TokenMalformedError,
    TokenService,
)

logger = logging.getLogger(__name__)


class AuthorizationService:
    """Turn an access token into a CurrentUser, or refuse.

    Every gate (member, moderator, admin) is this one method with a
    different ``min_role``; the comparison is ``UserRole.at_least``.
    """

    def __init__(self, token_service: TokenService):
        self._token_service = token_service

    def authorize(
        self,
        access_token: str | None,
        min_role: UserRole = UserRole.USER,
    ) -> CurrentUser:
        """Verify the token and check the caller's role.

        Raises
        ------
        AuthenticationRequiredError
            No token was presented (401)
        TokenExpiredError, TokenInvalidError, TokenMalformedError
            Token verification failed (401)
        AuthorizationDeniedError
            The role in the token ranks below ``min_role`` (403)
        CryptoError
            The signing key is unavailable
        """
        if not access_token:
            raise AuthenticationRequiredError

        claims = self._token_service.verify_access_token(access_token)
        try:
            role = UserRole.parse(claims.role)
        except ValueError as e:
            raise TokenMalformedError(f"Malformed token payload: {e}") from e

        if not role.at_least(min_role):
            logger.info(
                "Denied %s (role %s) on a %s-gated operation",
                claims.user_id,
                role.value,
                min_role.value,
            )
            raise AuthorizationDeniedError(min_role.value, role.value)

        return CurrentUser(user_id=claims.user_id, role=role)
