"""Session cookie transport.

The access token travels in a cookie scoped to ``/``; the refresh token in
one scoped to the auth endpoints only. Both are HttpOnly, and ``Secure`` and
``SameSite`` come from settings (secure and strict by default).
"""

from fastapi import Response

from quire_auth import Session, TokenPair
from quire_config.settings import Settings

ACCESS_TOKEN_COOKIE = "quire_access_token"  # NOQA: S105
REFRESH_TOKEN_COOKIE = "quire_refresh_token"  # NOQA: S105

ACCESS_TOKEN_PATH = "/"
REFRESH_TOKEN_PATH = "/api/v1/auth"


def set_session_cookies(
    response: Response,
    tokens: TokenPair,
    settings: Settings,
) -> None:
    """Attach both tokens as HttpOnly cookies with max-age equal to their TTL."""
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=tokens.access_token,
        httponly=True,
        secure=settings.api_cookie_secure,
        samesite=settings.api_cookie_samesite,
        max_age=tokens.access_expires_in,
        path=ACCESS_TOKEN_PATH,
        domain=settings.api_cookie_domain,
    )
    response.set_cookie(
        key=REFRESH_TOKEN_COOKIE,
        value=tokens.refresh_token,
        httponly=True,
        secure=settings.api_cookie_secure,
        samesite=settings.api_cookie_samesite,
        max_age=tokens.refresh_expires_in,
        path=REFRESH_TOKEN_PATH,
        domain=settings.api_cookie_domain,
    )


def clear_session_cookies(response: Response, settings: Settings) -> None:
    """Expire both cookies (max-age 0)."""
    for key, path in (
        (ACCESS_TOKEN_COOKIE, ACCESS_TOKEN_PATH),
        (REFRESH_TOKEN_COOKIE, REFRESH_TOKEN_PATH),
    ):
        response.delete_cookie(
            key=key,
            path=path,
            domain=settings.api_cookie_domain,
            secure=settings.api_cookie_secure,
            httponly=True,
            samesite=settings.api_cookie_samesite,
        )


def session_from_cookies(
    access_token: str | None,
    refresh_token: str | None,
) -> Session:
    return Session(access_token=access_token, refresh_token=refresh_token)
