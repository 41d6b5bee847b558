"""REST API presentation layer for Quire.

Structure:
    api/
    ├── app.py                # FastAPI application factory
    ├── config.py             # API configuration
    ├── cookies.py            # Session cookie transport
    ├── dependencies.py       # Dependency injection and role gates
    ├── exception_handlers.py # Error -> HTTP mapping
    ├── routers/              # API route handlers
    └── schemas/              # Pydantic request/response schemas
"""

from quire.presentation.api.app import create_app

__all__ = ["create_app"]
