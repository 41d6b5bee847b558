"""Submissions router: member intake and moderator review."""

import logging
from typing import Annotated

from fastapi import APIRouter, Query, status

from quire.domain.editorial import (
    Submission,
    SubmissionCategory,
    SubmissionPlacement,
    SubmissionStatus,
)
from quire.presentation.api.dependencies import (
    CurrentMember,
    DBSession,
    ModeratorUser,
    SubmissionServiceDep,
)
from quire.presentation.api.schemas.ids import MAX_ID, SubmissionIdPath
from quire.presentation.api.schemas.submissions import (
    CategoryResponse,
    MySubmissionResponse,
    ReviewRequest,
    SubmissionCreateRequest,
    SubmissionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Note: Don't set default in Query() when using Annotated - set it with = instead
UnassignedFilter = Annotated[
    bool,
    Query(description="Only submissions not yet placed in a magazine"),
]
LimitFilter = Annotated[int, Query(ge=1, le=200, description="Max submissions")]
OffsetFilter = Annotated[
    int,
    Query(ge=0, le=MAX_ID, description="Submissions to skip"),
]


def _submission_to_response(submission: Submission) -> SubmissionResponse:
    return SubmissionResponse(
        id=submission.id,
        author_id=submission.author_id,
        author_name=submission.author_name,
        category=submission.category.value,
        status=submission.status.value,
        body=submission.body,
        created_at=submission.created_at,
        reviewed_by=submission.reviewed_by,
        reviewed_at=submission.reviewed_at,
        review_notes=submission.review_notes,
    )


def _placement_to_response(placement: SubmissionPlacement) -> MySubmissionResponse:
    submission = placement.submission
    return MySubmissionResponse(
        id=submission.id,
        category=submission.category.value,
        status=submission.status.value,
        body=submission.body,
        created_at=submission.created_at,
        reviewed_at=submission.reviewed_at,
        review_notes=submission.review_notes,
        magazine_id=placement.magazine_id,
        magazine_title=placement.magazine_title,
        is_published=placement.is_published,
        published_at=placement.magazine_published_at,
    )


@router.get(
    "/categories",
    summary="List submission categories",
)
async def list_categories() -> list[CategoryResponse]:
    """The sections a member can submit to. Public."""
    return [
        CategoryResponse(
            value=category.value,
            label=category.label,
            description=category.description,
        )
        for category in SubmissionCategory
    ]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Submit content",
    responses={
        201: {"description": "Submission created, awaiting review"},
        401: {"description": "Not authenticated"},
    },
)
async def create_submission(
    request: SubmissionCreateRequest,
    current: CurrentMember,
    service: SubmissionServiceDep,
    session: DBSession,
) -> SubmissionResponse:
    submission = await service.submit(
        author_id=current.user_id,
        category=request.category,
        body=request.body,
    )
    await session.commit()

    logger.info("Submission %s created by %s", submission.id, current.user_id)
    return _submission_to_response(submission)


@router.get(
    "/mine",
    summary="List my submissions",
    responses={401: {"description": "Not authenticated"}},
)
async def list_my_submissions(
    current: CurrentMember,
    service: SubmissionServiceDep,
) -> list[MySubmissionResponse]:
    """The caller's submissions with their review state and issue, if any."""
    placements = await service.list_for_author(current.user_id)
    return [_placement_to_response(p) for p in placements]


@router.get(
    "",
    summary="List submissions for moderation",
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Moderator access required"},
    },
)
async def list_submissions(  # NOQA: PLR0913
    _moderator: ModeratorUser,
    service: SubmissionServiceDep,
    status_filter: Annotated[
        SubmissionStatus | None,
        Query(alias="status", description="PENDING, APPROVED or REJECTED"),
    ] = None,
    unassigned_only: UnassignedFilter = False,
    limit: LimitFilter = 50,
    offset: OffsetFilter = 0,
) -> list[SubmissionResponse]:
    submissions = await service.list_for_moderation(
        status=status_filter,
        unassigned_only=unassigned_only,
        limit=limit,
        offset=offset,
    )
    return [_submission_to_response(s) for s in submissions]


@router.get(
    "/{submission_id}",
    summary="Get a submission",
    responses={
        403: {"description": "Moderator access required"},
        404: {"description": "Submission not found"},
    },
)
async def get_submission(
    submission_id: SubmissionIdPath,
    _moderator: ModeratorUser,
    service: SubmissionServiceDep,
) -> SubmissionResponse:
    return _submission_to_response(await service.get(submission_id))


@router.post(
    "/{submission_id}/review",
    summary="Approve or reject a submission",
    responses={
        200: {"description": "Review recorded"},
        403: {"description": "Moderator access required"},
        404: {"description": "Submission not found"},
        409: {"description": "Submission was already reviewed"},
    },
)
async def review_submission(
    submission_id: SubmissionIdPath,
    request: ReviewRequest,
    moderator: ModeratorUser,
    service: SubmissionServiceDep,
    session: DBSession,
) -> SubmissionResponse:
    """A submission is reviewed exactly once; later attempts get 409."""
    submission = await service.review(
        submission_id=submission_id,
        decision=request.decision,
        reviewer_id=moderator.user_id,
        notes=request.notes,
    )
    await session.commit()
    return _submission_to_response(submission)
