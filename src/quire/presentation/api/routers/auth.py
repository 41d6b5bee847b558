"""``/auth``: member accounts and cookie sessions."""

from typing import Annotated

from fastapi import APIRouter, Cookie, HTTPException, Response, status

from quire.domain.user import User, UserNotFoundError
from quire.infrastructure.persistence.sqlalchemy import UserRepositorySQLAlchemy
from quire.presentation.api.cookies import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    clear_session_cookies,
    session_from_cookies,
    set_session_cookies,
)
from quire.presentation.api.dependencies import (
    AuthService,
    CurrentMember,
    DBSession,
    SettingsDep,
)
from quire.presentation.api.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from quire_auth import AuthenticationRequiredError, TokenError, TokenPair
from quire_config.settings import Settings

router = APIRouter()

AccessTokenCookie = Annotated[str | None, Cookie(alias=ACCESS_TOKEN_COOKIE)]
RefreshTokenCookie = Annotated[str | None, Cookie(alias=REFRESH_TOKEN_COOKIE)]

_UNAUTHENTICATED = {401: {"description": "No valid session"}}


def member_view(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        display_name=user.display_name,
        role=user.role.value,
        is_active=user.is_active,
        created_at=user.created_at,
    )


def _signed_in(
    response: Response,
    user: User,
    tokens: TokenPair,
    settings: Settings,
) -> AuthResponse:
    set_session_cookies(response, tokens, settings)
    return AuthResponse(
        user=member_view(user),
        access_token=tokens.access_token,
        expires_in=tokens.access_expires_in,
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Create a member account",
    responses={
        400: {"description": "Password rejected"},
        403: {"description": "Self-registration switched off"},
        409: {"description": "Email taken"},
    },
)
async def register(
    body: RegisterRequest,
    response: Response,
    auth_service: AuthService,
    session: DBSession,
    settings: SettingsDep,
) -> AuthResponse:
    """New accounts always get the USER role and start signed in."""
    if not settings.registration_enabled:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Registration is disabled. Contact an administrator.",
        )

    user, tokens = await auth_service.register(
        email=body.email,
        password=body.password,
        display_name=body.display_name,
    )
    await session.commit()
    return _signed_in(response, user, tokens, settings)


@router.post(
    "/login",
    summary="Sign in with email and password",
    responses={401: {"description": "Wrong email or password"}},
)
async def login(
    body: LoginRequest,
    response: Response,
    auth_service: AuthService,
    session: DBSession,
    settings: SettingsDep,
) -> AuthResponse:
    """Unknown email, wrong password and deactivated account look identical."""
    user, tokens = await auth_service.login(email=body.email, password=body.password)
    await session.commit()
    return _signed_in(response, user, tokens, settings)


@router.post(
    "/refresh",
    summary="Trade a refresh token for a new pair",
    responses={401: {"description": "Refresh token missing, spent or revoked"}},
)
async def refresh_token(
    response: Response,
    auth_service: AuthService,
    session: DBSession,
    settings: SettingsDep,
    body: RefreshRequest | None = None,
    refresh_token_cookie: RefreshTokenCookie = None,
) -> TokenResponse:
    """
    Single-use rotation.

    The token comes from the body when present, otherwise from the cookie.
    Replaying a spent token ends every session of that login.
    """
    token = (body.refresh_token if body else None) or refresh_token_cookie
    if not token:
        raise AuthenticationRequiredError

    try:
        _, tokens = await auth_service.refresh(token)
    except TokenError:
        # keep the lineage revocation written by a replay
        await session.commit()
        raise
    await session.commit()

    set_session_cookies(response, tokens, settings)
    return TokenResponse(
        access_token=tokens.access_token,
        expires_in=tokens.access_expires_in,
    )


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="End the current session",
)
async def logout(
    response: Response,
    auth_service: AuthService,
    session: DBSession,
    settings: SettingsDep,
    access_token_cookie: AccessTokenCookie = None,
    refresh_token_cookie: RefreshTokenCookie = None,
) -> None:
    """Idempotent: 204 with cleared cookies whether or not a session existed."""
    await auth_service.logout(
        session_from_cookies(access_token_cookie, refresh_token_cookie),
    )
    await session.commit()
    clear_session_cookies(response, settings)


@router.get("/me", summary="The signed-in member", responses=_UNAUTHENTICATED)
async def get_me(current: CurrentMember, session: DBSession) -> UserResponse:
    user = await UserRepositorySQLAlchemy(session).find_by_id(current.user_id)
    if user is None:
        raise UserNotFoundError(str(current.user_id))
    return member_view(user)


@router.post(
    "/change-password",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Change password and sign out everywhere",
    responses={
        400: {"description": "New password rejected"},
        **_UNAUTHENTICATED,
    },
)
async def change_password(
    body: ChangePasswordRequest,
    response: Response,
    current: CurrentMember,
    auth_service: AuthService,
    session: DBSession,
    settings: SettingsDep,
) -> None:
    """A wrong current password is a 401; on success all sessions are revoked."""
    await auth_service.change_password(
        user_id=current.user_id,
        current_password=body.current_password,
        new_password=body.new_password,
    )
    await session.commit()
    clear_session_cookies(response, settings)
