"""Magazines router: public archive and the moderator publishing workflow."""

import logging
from typing import Annotated

from fastapi import APIRouter, Query, status

from quire.domain.editorial import EditorialStatistics, Magazine
from quire.presentation.api.dependencies import (
    DBSession,
    MagazineServiceDep,
    ModeratorUser,
)
from quire.presentation.api.schemas.ids import MAX_ID, MagazineIdPath
from quire.presentation.api.schemas.magazines import (
    DraftDashboardResponse,
    LatestMagazineResponse,
    MagazineCreateRequest,
    MagazineItemResponse,
    MagazineResponse,
    MagazineSummaryResponse,
    StatisticsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

LimitFilter = Annotated[int, Query(ge=1, le=100, description="Max magazines")]
OffsetFilter = Annotated[
    int,
    Query(ge=0, le=MAX_ID, description="Magazines to skip"),
]


def _summary_to_response(magazine: Magazine) -> MagazineSummaryResponse:
    return MagazineSummaryResponse(
        id=magazine.id,
        title=magazine.title,
        description=magazine.description,
        slug=magazine.slug,
        version=magazine.version,
        is_public=magazine.is_public,
        created_at=magazine.created_at,
        published_at=magazine.published_at,
        item_count=len(magazine.items),
    )


def _magazine_to_response(
    magazine: Magazine,
    include_staff_fields: bool = False,
) -> MagazineResponse:
    """Convert domain Magazine to response schema.

    Staff identifiers (creator, publisher) are only exposed to moderators.
    """
    return MagazineResponse(
        **_summary_to_response(magazine).model_dump(),
        created_by=magazine.created_by if include_staff_fields else None,
        published_by=magazine.published_by if include_staff_fields else None,
        items=[
            MagazineItemResponse(
                position=item.position,
                submission_id=item.submission_id,
                category=item.submission.category.value,
                author_name=item.submission.author_name,
                body=item.submission.body,
            )
            for item in magazine.items
        ],
    )


def _stats_to_response(stats: EditorialStatistics) -> StatisticsResponse:
    return StatisticsResponse(
        draft_count=stats.draft_count,
        published_count=stats.published_count,
        total_magazines=stats.total_magazines,
        pending_submissions=stats.pending_submissions,
        approved_submissions=stats.approved_submissions,
        rejected_submissions=stats.rejected_submissions,
        total_submissions=stats.total_submissions,
    )


# -----------------------------------------------------------------------------
# Public
# -----------------------------------------------------------------------------


@router.get("", summary="List published magazines")
async def list_public_magazines(
    service: MagazineServiceDep,
    limit: LimitFilter = 20,
    offset: OffsetFilter = 0,
) -> list[MagazineSummaryResponse]:
    """The public archive, most recently published first."""
    magazines = await service.list_public_magazines(limit=limit, offset=offset)
    return [_summary_to_response(m) for m in magazines]


@router.get("/latest", summary="Get the latest published magazine")
async def get_latest_magazine(service: MagazineServiceDep) -> LatestMagazineResponse:
    """The most recently published issue; ``magazine`` is null if none exists."""
    magazine = await service.latest_public()
    return LatestMagazineResponse(
        magazine=_magazine_to_response(magazine) if magazine else None,
    )


# -----------------------------------------------------------------------------
# Moderator
# -----------------------------------------------------------------------------


@router.get(
    "/drafts",
    summary="Draft dashboard",
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Moderator access required"},
    },
)
async def get_draft_dashboard(
    _moderator: ModeratorUser,
    service: MagazineServiceDep,
) -> DraftDashboardResponse:
    """All drafts with their contents plus editorial statistics."""
    dashboard = await service.export_dashboard()
    return DraftDashboardResponse(
        magazines=[
            _magazine_to_response(m, include_staff_fields=True)
            for m in dashboard.magazines
        ],
        stats=_stats_to_response(dashboard.stats),
    )


@router.get(
    "/statistics",
    summary="Editorial statistics",
    responses={403: {"description": "Moderator access required"}},
)
async def get_statistics(
    _moderator: ModeratorUser,
    service: MagazineServiceDep,
) -> StatisticsResponse:
    return _stats_to_response(await service.get_statistics())


@router.get(
    "/drafts/{magazine_id}",
    summary="Get any magazine (moderator view)",
    responses={
        403: {"description": "Moderator access required"},
        404: {"description": "Magazine not found"},
    },
)
async def get_draft_magazine(
    magazine_id: MagazineIdPath,
    _moderator: ModeratorUser,
    service: MagazineServiceDep,
) -> MagazineResponse:
    magazine = await service.get_magazine(magazine_id)
    return _magazine_to_response(magazine, include_staff_fields=True)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Assemble a draft magazine",
    responses={
        201: {"description": "Draft created"},
        400: {"description": "Empty or duplicate submission list"},
        403: {"description": "Moderator access required"},
        404: {"description": "Unknown submission"},
        409: {"description": "Submission not approved or already assigned"},
    },
)
async def create_magazine(
    request: MagazineCreateRequest,
    moderator: ModeratorUser,
    service: MagazineServiceDep,
    session: DBSession,
) -> MagazineResponse:
    """Create a draft from approved submissions, in the order given."""
    magazine = await service.assemble_draft(
        submission_ids=request.submission_ids,
        title=request.title,
        created_by=moderator.user_id,
        description=request.description,
    )
    await session.commit()
    return _magazine_to_response(magazine, include_staff_fields=True)


@router.post(
    "/{magazine_id}/publish",
    summary="Publish a draft magazine",
    responses={
        200: {"description": "Magazine published"},
        403: {"description": "Moderator access required"},
        404: {"description": "Magazine not found"},
        409: {"description": "Magazine already published"},
    },
)
async def publish_magazine(
    magazine_id: MagazineIdPath,
    moderator: ModeratorUser,
    service: MagazineServiceDep,
    session: DBSession,
) -> MagazineResponse:
    """Publishing is irreversible and succeeds exactly once per issue."""
    magazine = await service.publish(magazine_id, published_by=moderator.user_id)
    await session.commit()
    return _magazine_to_response(magazine, include_staff_fields=True)


# -----------------------------------------------------------------------------
# Public (parameterized routes last)
# -----------------------------------------------------------------------------


@router.get(
    "/slug/{slug}",
    summary="Get a published magazine by slug",
    responses={404: {"description": "Magazine not found"}},
)
async def get_magazine_by_slug(
    slug: str,
    service: MagazineServiceDep,
) -> MagazineResponse:
    return _magazine_to_response(await service.get_public_magazine_by_slug(slug))


@router.get(
    "/{magazine_id}",
    summary="Get a published magazine",
    responses={404: {"description": "Magazine not found or not published"}},
)
async def get_magazine(
    magazine_id: MagazineIdPath,
    service: MagazineServiceDep,
) -> MagazineResponse:
    """Drafts are reported as not found."""
    return _magazine_to_response(await service.get_public_magazine(magazine_id))
