"""Translate raised exceptions into JSON error bodies.

Every error body has the same two keys::

    {"detail": "<message for humans>", "code": "<ErrorCode value>"}

Missing, expired, malformed and forged tokens all collapse into one 401 with
``AUTHENTICATION_REQUIRED``; which of them it was only shows up in the log.
Anything that means "try again shortly" is a 503 with ``Retry-After``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from quire.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ServiceUnavailableError,
    ValidationError,
)
from quire_auth import (
    AuthenticationRequiredError,
    AuthorizationDeniedError,
    CryptoError,
    InvalidCredentialsError,
    TokenError,
    WeakPasswordError,
)

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = 5
SIGN_IN_AGAIN_MESSAGE = "Please sign in again"

_BAD_REQUEST = (
    ErrorCode.VALIDATION_ERROR,
    ErrorCode.INVALID_EMAIL,
    ErrorCode.INVALID_ROLE,
    ErrorCode.EMPTY_MAGAZINE,
)
_NOT_FOUND = (
    ErrorCode.ENTITY_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND,
    ErrorCode.SUBMISSION_NOT_FOUND,
    ErrorCode.MAGAZINE_NOT_FOUND,
)
_CONFLICT = (
    ErrorCode.CONFLICT,
    ErrorCode.EMAIL_ALREADY_EXISTS,
    ErrorCode.INVALID_SUBMISSION_STATE,
    ErrorCode.ALREADY_ASSIGNED,
    ErrorCode.ALREADY_PUBLISHED,
    ErrorCode.CANNOT_MODIFY_SELF,
)
_UNPROCESSABLE = (
    ErrorCode.BUSINESS_RULE_VIOLATION,
    ErrorCode.INACTIVE_USER,
)

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    **dict.fromkeys(_BAD_REQUEST, status.HTTP_400_BAD_REQUEST),
    **dict.fromkeys(_NOT_FOUND, status.HTTP_404_NOT_FOUND),
    **dict.fromkeys(_CONFLICT, status.HTTP_409_CONFLICT),
    **dict.fromkeys(_UNPROCESSABLE, status.HTTP_422_UNPROCESSABLE_ENTITY),
    ErrorCode.SERVICE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Checked in order when a code has no entry above.
_STATUS_BY_FAMILY: tuple[tuple[type[DomainException], int], ...] = (
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (BusinessRuleViolation, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (ServiceUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(exc: DomainException) -> int:
    """HTTP status for a domain error: by code first, then by class family."""
    mapped = ERROR_CODE_TO_STATUS.get(exc.code)
    if mapped is not None:
        return mapped
    for family, status_code in _STATUS_BY_FAMILY:
        if isinstance(exc, family):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def error_body(
    status_code: int,
    message: str,
    code: ErrorCode,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": message, "code": code.value},
        headers=headers,
    )


def _retry_later(message: str, code: ErrorCode) -> JSONResponse:
    return error_body(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        message,
        code,
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )


def _sign_in_again() -> JSONResponse:
    return error_body(
        status.HTTP_401_UNAUTHORIZED,
        SIGN_IN_AGAIN_MESSAGE,
        ErrorCode.AUTHENTICATION_REQUIRED,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _where(request: Request) -> str:
    return f"{request.method} {request.url.path}"


async def _on_domain_error(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_for(exc)
    logger.warning(
        "%s failed: %s (code=%s, details=%s)",
        _where(request),
        exc.message,
        exc.code.value,
        exc.details,
    )
    if status_code == status.HTTP_503_SERVICE_UNAVAILABLE:
        return _retry_later(exc.message, exc.code)
    return error_body(status_code, exc.message, exc.code)


async def _on_missing_auth(
    request: Request,
    exc: AuthenticationRequiredError,
) -> JSONResponse:
    logger.info("%s needs authentication (kind=%s)", _where(request), exc.kind)
    return _sign_in_again()


async def _on_bad_token(request: Request, exc: TokenError) -> JSONResponse:
    logger.warning("%s rejected token (kind=%s)", _where(request), exc.kind)
    return _sign_in_again()


async def _on_bad_credentials(
    request: Request,
    _exc: InvalidCredentialsError,
) -> JSONResponse:
    logger.info("%s: wrong email or password", _where(request))
    return error_body(
        status.HTTP_401_UNAUTHORIZED,
        "Invalid email or password",
        ErrorCode.INVALID_CREDENTIALS,
    )


async def _on_weak_password(_request: Request, exc: WeakPasswordError) -> JSONResponse:
    return error_body(
        status.HTTP_400_BAD_REQUEST,
        exc.message,
        ErrorCode.WEAK_PASSWORD,
    )


async def _on_forbidden(
    request: Request,
    exc: AuthorizationDeniedError,
) -> JSONResponse:
    logger.warning(
        "%s forbidden (role=%s, required=%s)",
        _where(request),
        exc.actual_role,
        exc.required_role,
    )
    return error_body(status.HTTP_403_FORBIDDEN, exc.message, ErrorCode.FORBIDDEN)


async def _on_signing_key(request: Request, exc: CryptoError) -> JSONResponse:
    logger.critical("%s: signing key unavailable: %s", _where(request), exc.message)
    return _retry_later(
        "Sign-in is temporarily unavailable",
        ErrorCode.SIGNING_KEY_UNAVAILABLE,
    )


async def _on_storage_down(request: Request, exc: OperationalError) -> JSONResponse:
    logger.error("%s: storage unavailable: %s", _where(request), exc.orig)
    return _retry_later(
        ServiceUnavailableError.default_message,
        ErrorCode.SERVICE_UNAVAILABLE,
    )


async def _on_pool_exhausted(
    request: Request,
    exc: PoolTimeoutError,
) -> JSONResponse:
    logger.error("%s: connection pool exhausted: %s", _where(request), exc)
    return _retry_later(
        ServiceUnavailableError.default_message,
        ErrorCode.SERVICE_UNAVAILABLE,
    )


async def _on_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s crashed: %s", _where(request), exc)
    return error_body(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An internal error occurred",
        ErrorCode.INTERNAL_ERROR,
    )


_HANDLERS = (
    (DomainException, _on_domain_error),
    (AuthenticationRequiredError, _on_missing_auth),
    (TokenError, _on_bad_token),
    (InvalidCredentialsError, _on_bad_credentials),
    (WeakPasswordError, _on_weak_password),
    (AuthorizationDeniedError, _on_forbidden),
    (CryptoError, _on_signing_key),
    (OperationalError, _on_storage_down),
    (PoolTimeoutError, _on_pool_exhausted),
    (Exception, _on_unexpected),
)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register every handler above on ``app``."""
    for exc_class, handler in _HANDLERS:
        app.add_exception_handler(exc_class, handler)
