"""Submission schemas for request/response models."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from quire.domain.editorial import SubmissionCategory


class SubmissionCreateRequest(BaseModel):
    """Request schema for a new submission."""

    category: SubmissionCategory = Field(..., description="Magazine section")
    body: str = Field(
        ...,
        min_length=1,
        max_length=5000,
        description="Submission text (1-5000 characters)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "category": "SAYING_HELLO",
                "body": "Hi everyone, we just moved in on Elm Street!",
            },
        },
    )


class ReviewRequest(BaseModel):
    """Request schema for a moderation decision."""

    decision: Literal["APPROVED", "REJECTED"]
    notes: str | None = Field(
        default=None,
        max_length=1000,
        description="Optional note for the author",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"decision": "APPROVED", "notes": "Lovely, thanks!"},
        },
    )


class SubmissionResponse(BaseModel):
    """Response schema for a submission (moderator view)."""

    id: int
    author_id: UUID
    author_name: str | None
    category: str
    status: str
    body: str
    created_at: datetime
    reviewed_by: UUID | None = None
    reviewed_at: datetime | None = None
    review_notes: str | None = None


class MySubmissionResponse(BaseModel):
    """A member's own submission, with the issue it landed in (if any)."""

    id: int
    category: str
    status: str
    body: str
    created_at: datetime
    reviewed_at: datetime | None = None
    review_notes: str | None = None
    magazine_id: int | None = None
    magazine_title: str | None = None
    is_published: bool = False
    published_at: datetime | None = None


class CategoryResponse(BaseModel):
    """A submission category with its display text."""

    value: str
    label: str
    description: str
