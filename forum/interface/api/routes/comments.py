"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel, Field

from forum.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentTreeRequest,
    GetCommentTreeResponse,
    GetCommentTreeUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from forum.domain.error import DomainError
from forum.interface.error import to_http_exception

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    text: str = Field(min_length=1, max_length=10000)
    parent_id: str | None = None  # Parent comment ID for replies


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    text: str = Field(min_length=1, max_length=10000)


@router.post(
    "/posts/{post_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> CreateCommentResponse:
    """Create a comment on a post or reply to another comment.

    Requires authentication.

    Args:
        post_id: Post UUID
        request: Comment creation data
        create_comment_use_case: Create comment use case from DI
        x_user_id: Acting user ID

    Returns:
        Created comment details

    Raises:
        HTTPException: 401 if anonymous, 404 if the post or parent is
            missing, 400 if the reply would nest too deep
    """
    try:
        use_case_request = CreateCommentRequest(
            post_id=post_id,
            text=request.text,
            parent_id=request.parent_id,
            user_id=x_user_id,
        )
        return await create_comment_use_case.execute(use_case_request)
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.get("/posts/{post_id}/comments", response_model=GetCommentTreeResponse)
async def get_comment_tree(
    post_id: str,
    get_comment_tree_use_case: FromDishka[GetCommentTreeUseCase],
    max_depth: int | None = None,
    x_user_id: str | None = Header(default=None),
) -> GetCommentTreeResponse:
    """Get a post's comments as an ordered tree.

    Siblings are ordered best first (score, then oldest). If the viewer is
    identified, each comment carries their own vote.

    Args:
        post_id: Post UUID
        get_comment_tree_use_case: Get comment tree use case from DI
        max_depth: Number of levels to return (server default if omitted)
        x_user_id: Viewer ID (optional)

    Returns:
        Comment forest
    """
    try:
        request = GetCommentTreeRequest(
            post_id=post_id, max_depth=max_depth, user_id=x_user_id
        )
        return await get_comment_tree_use_case.execute(request)
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> DeleteCommentResponse:
    """Delete one's own comment.

    The comment is tombstoned so its replies stay in place.
    """
    try:
        request = DeleteCommentRequest(comment_id=comment_id, user_id=x_user_id)
        return await delete_comment_use_case.execute(request)
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.patch("/comments/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    comment_id: str,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> UpdateCommentResponse:
    """Edit the text of one's own comment.

    Raises:
        HTTPException: 401 if anonymous, 403 if not the author, 404 if the
            comment is missing or deleted
    """
    try:
        use_case_request = UpdateCommentRequest(
            comment_id=comment_id, text=request.text, user_id=x_user_id
        )
        return await update_comment_use_case.execute(use_case_request)
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)
