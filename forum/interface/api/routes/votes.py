"""Vote routes.

Casting the same direction twice removes the vote; casting the opposite
direction flips it. The acting user comes from the ``X-User-Id`` header.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header
from pydantic import BaseModel

from forum.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    GetUserVoteRequest,
    GetUserVoteResponse,
    GetUserVoteUseCase,
)
from forum.domain.error import DomainError
from forum.domain.value import VotableType, VoteDirection
from forum.interface.error import to_http_exception

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for casting a vote."""

    direction: VoteDirection


async def _cast(
    use_case: CastVoteUseCase,
    votable_type: VotableType,
    votable_id: str,
    direction: VoteDirection,
    user_id: str | None,
) -> CastVoteResponse:
    try:
        request = CastVoteRequest(
            votable_type=votable_type,
            votable_id=votable_id,
            direction=direction,
            user_id=user_id,
        )
        return await use_case.execute(request)
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


async def _get(
    use_case: GetUserVoteUseCase,
    votable_type: VotableType,
    votable_id: str,
    user_id: str | None,
) -> GetUserVoteResponse:
    try:
        request = GetUserVoteRequest(
            votable_type=votable_type, votable_id=votable_id, user_id=user_id
        )
        return await use_case.execute(request)
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.post("/posts/{post_id}/vote", response_model=CastVoteResponse)
async def vote_on_post(
    post_id: str,
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    x_user_id: str | None = Header(default=None),
) -> CastVoteResponse:
    """Cast a vote on a post.

    Requires authentication.

    Args:
        post_id: Post UUID
        request: Vote direction
        cast_vote_use_case: Cast vote use case from DI
        x_user_id: Acting user ID

    Returns:
        Vote result ("created", "updated" or "removed") with new tallies

    Raises:
        HTTPException: 401 if anonymous, 404 if the post is missing or deleted,
            409 if the vote could not be recorded consistently
    """
    return await _cast(
        cast_vote_use_case, VotableType.POST, post_id, request.direction, x_user_id
    )


@router.get("/posts/{post_id}/vote", response_model=GetUserVoteResponse)
async def get_post_vote(
    post_id: str,
    get_user_vote_use_case: FromDishka[GetUserVoteUseCase],
    x_user_id: str | None = Header(default=None),
) -> GetUserVoteResponse:
    """Get the acting user's vote on a post (null when not voted)."""
    return await _get(get_user_vote_use_case, VotableType.POST, post_id, x_user_id)


@router.post("/comments/{comment_id}/vote", response_model=CastVoteResponse)
async def vote_on_comment(
    comment_id: str,
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    x_user_id: str | None = Header(default=None),
) -> CastVoteResponse:
    """Cast a vote on a comment.

    Requires authentication.

    Args:
        comment_id: Comment UUID
        request: Vote direction
        cast_vote_use_case: Cast vote use case from DI
        x_user_id: Acting user ID

    Returns:
        Vote result ("created", "updated" or "removed") with new tallies

    Raises:
        HTTPException: 401 if anonymous, 404 if the comment is missing or
            deleted, 409 if the vote could not be recorded consistently
    """
    return await _cast(
        cast_vote_use_case,
        VotableType.COMMENT,
        comment_id,
        request.direction,
        x_user_id,
    )


@router.get("/comments/{comment_id}/vote", response_model=GetUserVoteResponse)
async def get_comment_vote(
    comment_id: str,
    get_user_vote_use_case: FromDishka[GetUserVoteUseCase],
    x_user_id: str | None = Header(default=None),
) -> GetUserVoteResponse:
    """Get the acting user's vote on a comment (null when not voted)."""
    return await _get(
        get_user_vote_use_case, VotableType.COMMENT, comment_id, x_user_id
    )
