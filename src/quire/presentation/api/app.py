"""Builds the Quire ASGI application.

Versioned endpoints live under ``/api/v1``; ``/health`` and ``/`` stay
unversioned so probes never need to follow a version bump.
"""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from quire import __version__
from quire.presentation.api.config import get_api_settings
from quire.presentation.api.dependencies import (
    DBSession,
    SettingsDep,
    build_engine,
    build_session_maker,
    create_tables,
)
from quire.presentation.api.exception_handlers import (
    RETRY_AFTER_SECONDS,
    setup_exception_handlers,
)
from quire.presentation.api.routers import (
    admin_router,
    auth_router,
    magazines_router,
    submissions_router,
)
from quire_config.settings import Settings, get_settings

_OWN_LOGGERS = ("quire", "quire_auth", "quire_config")
_CHATTY_LOGGERS = (
    "aiosqlite",
    "httpcore",
    "httpx",
    "sqlalchemy.engine",
    "uvicorn.access",
)


@lru_cache(maxsize=1)
def _configure_logging(log_level_str: str) -> None:
    """Send log records to stdout, one line each.

    Runs once per level; creating a second app in the same process (tests)
    leaves the handlers alone.
    """
    level = logging.getLevelName(log_level_str.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for name in _OWN_LOGGERS:
        logging.getLogger(name).setLevel(level)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = __version__
API_V1_PREFIX = "/api/v1"

# OpenAPI tags metadata for documentation
OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Member accounts and sessions.

**Sessions:**
- Access token: short-lived, HttpOnly cookie scoped to `/` (Bearer header accepted)
- Refresh token: HttpOnly cookie scoped to `/api/v1/auth`, single use
- Reusing a refresh token revokes every session from the same login

**Security:**
- Passwords are hashed with bcrypt
- Every authentication failure answers with the same 401 body
""",
    },
    {
        "name": "Submissions",
        "description": """Member submissions and moderation.

**Lifecycle:**
- `PENDING` -> `APPROVED` or `REJECTED`, exactly once
- Approved submissions can be placed in one magazine issue
""",
    },
    {
        "name": "Magazines",
        "description": """Magazine issues.

**Public:** archive, latest issue, issue by id or slug (published only).

**Moderators:** assemble drafts from approved submissions, publish
(irreversible), draft dashboard with statistics.
""",
    },
    {
        "name": "Admin",
        "description": "User roles, account status and the audit trail.",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    logger.info("Quire API %s starting", API_VERSION)
    if not settings.jwt_secret_key.get_secret_value():
        logger.critical("JWT_SECRET_KEY is not set; every sign-in will get a 503")

    try:
        await create_tables(app.state.engine)
    except (ConnectionRefusedError, OSError):
        logger.critical("Database unreachable at startup")
        raise SystemExit(1) from None

    yield

    await app.state.engine.dispose()
    logger.info("Quire API stopped, connection pool closed")


def _v1_router() -> APIRouter:
    v1 = APIRouter()
    v1.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    v1.include_router(submissions_router, prefix="/submissions", tags=["Submissions"])
    v1.include_router(magazines_router, prefix="/magazines", tags=["Magazines"])
    v1.include_router(admin_router)
    return v1


def create_app(settings: Settings | None = None) -> FastAPI:
    """Assemble the application.

    Parameters
    ----------
    settings
        Used instead of the environment-derived settings: the database
        engine is built from them and every ``SettingsDep`` resolves to them.

    Returns
    -------
    FastAPI
        Routers, CORS and error handlers attached; the database is touched
        only once the lifespan starts.
    """
    settings = settings or get_settings()
    _configure_logging(settings.log_level)

    docs_enabled = settings.api_debug
    app = FastAPI(
        title=f"{settings.app_name} API",
        description=(
            "A **community magazine**: members submit, moderators review and "
            "publish issues."
        ),
        version=API_VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_maker = build_session_maker(app.state.engine)
    app.dependency_overrides[get_api_settings] = lambda: settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_exception_handlers(app)
    app.include_router(_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check(session: DBSession, config: SettingsDep) -> JSONResponse:
        """``SELECT 1`` against storage, bounded by the storage deadline."""
        try:
            await asyncio.wait_for(
                session.execute(text("SELECT 1")),
                timeout=config.storage_timeout_seconds,
            )
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            logger.error("Health probe failed: %s", e)
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unavailable", "version": API_VERSION},
                headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
            )
        return JSONResponse(
            content={
                "status": "healthy",
                "version": API_VERSION,
                "api_versions": ["v1"],
            },
        )

    @app.get("/", tags=["Info"])
    async def root() -> dict:
        base = API_V1_PREFIX
        return {
            "name": f"{settings.app_name} API",
            "version": API_VERSION,
            "docs": "/docs" if docs_enabled else None,
            "api_base": base,
            "endpoints": {
                "health": "/health",
                "auth": f"{base}/auth",
                "submissions": f"{base}/submissions",
                "magazines": f"{base}/magazines",
                "admin": f"{base}/admin",
            },
        }

    return app
