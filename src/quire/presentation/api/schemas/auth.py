"""Request and response bodies for /auth."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="Password (8-128 characters)",
    )
    display_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Name printed next to the member's submissions",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "member@example.com",
                "password": "correct horse battery",
                "display_name": "Ada L.",
            },
        },
    )

    @field_validator("display_name")
    @classmethod
    def _strip_display_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            msg = "display_name cannot be blank"
            raise ValueError(msg)
        return stripped


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    """Body for ``POST /auth/refresh``; the HttpOnly cookie is used when empty."""

    refresh_token: str | None = None


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=8, max_length=128)


class UserResponse(BaseModel):
    id: UUID
    email: str
    display_name: str
    role: str
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    """Access token echo for clients that prefer the Authorization header.

    The refresh token is never in a body; it only travels as a cookie scoped
    to the auth endpoints.
    """

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Access token lifetime in seconds")


class AuthResponse(TokenResponse):
    """Returned by register and login."""

    user: UserResponse
