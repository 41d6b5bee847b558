"""Magazine schemas for request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from quire.presentation.api.schemas.ids import EntityId


class MagazineCreateRequest(BaseModel):
    """Request schema for assembling a draft issue."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    submission_ids: list[EntityId] = Field(
        ...,
        min_length=1,
        description="Approved submissions, in the order they should appear",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Spring Issue",
                "description": "News from the neighbourhood",
                "submission_ids": [12, 7, 15],
            },
        },
    )


class MagazineItemResponse(BaseModel):
    """A submission as it appears inside an issue."""

    position: int
    submission_id: int
    category: str
    author_name: str | None
    body: str


class MagazineSummaryResponse(BaseModel):
    """An issue without its contents (archive listings)."""

    id: int
    title: str
    description: str | None
    slug: str
    version: str
    is_public: bool
    created_at: datetime
    published_at: datetime | None
    item_count: int


class MagazineResponse(MagazineSummaryResponse):
    """An issue with its ordered contents."""

    created_by: UUID | None = None
    published_by: UUID | None = None
    items: list[MagazineItemResponse]


class LatestMagazineResponse(BaseModel):
    """Most recent public issue; ``magazine`` is null until one is published."""

    magazine: MagazineResponse | None


class StatisticsResponse(BaseModel):
    """Editorial counts, computed fresh on every request."""

    draft_count: int
    published_count: int
    total_magazines: int
    pending_submissions: int
    approved_submissions: int
    rejected_submissions: int
    total_submissions: int


class DraftDashboardResponse(BaseModel):
    """Drafts plus statistics for the moderator dashboard."""

    magazines: list[MagazineResponse]
    stats: StatisticsResponse
