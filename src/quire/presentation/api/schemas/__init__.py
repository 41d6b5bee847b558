"""Pydantic schemas for API request/response models."""

from quire.presentation.api.schemas.admin import (
    AuditEntryResponse,
    UpdateRoleRequest,
    UserSummaryResponse,
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
from quire.presentation.api.schemas.magazines import (
    DraftDashboardResponse,
    LatestMagazineResponse,
    MagazineCreateRequest,
    MagazineItemResponse,
    MagazineResponse,
    MagazineSummaryResponse,
    StatisticsResponse,
)
from quire.presentation.api.schemas.submissions import (
    CategoryResponse,
    MySubmissionResponse,
    ReviewRequest,
    SubmissionCreateRequest,
    SubmissionResponse,
)

__all__ = [
    # Admin
    "AuditEntryResponse",
    "UpdateRoleRequest",
    "UserSummaryResponse",
    # Auth
    "AuthResponse",
    "ChangePasswordRequest",
    "LoginRequest",
    "RefreshRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserResponse",
    # Magazines
    "DraftDashboardResponse",
    "LatestMagazineResponse",
    "MagazineCreateRequest",
    "MagazineItemResponse",
    "MagazineResponse",
    "MagazineSummaryResponse",
    "StatisticsResponse",
    # Submissions
    "CategoryResponse",
    "MySubmissionResponse",
    "ReviewRequest",
    "SubmissionCreateRequest",
    "SubmissionResponse",
]
