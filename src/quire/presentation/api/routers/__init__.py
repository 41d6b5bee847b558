from quire.presentation.api.routers.admin import router as admin_router
from quire.presentation.api.routers.auth import router as auth_router
from quire.presentation.api.routers.magazines import router as magazines_router
from quire.presentation.api.routers.submissions import router as submissions_router

__all__ = [
    "admin_router",
    "auth_router",
    "magazines_router",
    "submissions_router",
]
