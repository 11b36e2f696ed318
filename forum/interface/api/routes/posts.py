"""Post routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, status
from pydantic import BaseModel, Field

from forum.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    UpdatePostRequest,
    UpdatePostResponse,
    UpdatePostUseCase,
)
from forum.domain.error import DomainError
from forum.domain.value import PostSortOrder
from forum.interface.error import to_http_exception

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    title: str = Field(min_length=1, max_length=200)
    text: str = Field(min_length=1, max_length=50000)


class UpdatePostAPIRequest(BaseModel):
    """API request for editing a post; omitted fields are kept."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    text: str | None = Field(default=None, min_length=1, max_length=50000)


@router.post(
    "", response_model=CreatePostResponse, status_code=status.HTTP_201_CREATED
)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    x_user_id: str | None = Header(default=None),
) -> CreatePostResponse:
    """Create a new post.

    Requires authentication.

    Args:
        request: Post creation data
        create_post_use_case: Create post use case from DI
        x_user_id: Acting user ID

    Returns:
        Created post details
    """
    try:
        use_case_request = CreatePostRequest(
            title=request.title, text=request.text, user_id=x_user_id
        )
        return await create_post_use_case.execute(use_case_request)
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    sort: PostSortOrder = Query(default=PostSortOrder.RECENT),
    limit: int = Query(default=30, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    x_user_id: str | None = Header(default=None),
) -> ListPostsResponse:
    """List posts.

    Args:
        list_posts_use_case: List posts use case from DI
        sort: recent, top, hot or trending
        limit: Page size
        offset: Number of posts to skip
        x_user_id: Viewer ID (optional, annotates own votes)

    Returns:
        Page of posts
    """
    try:
        request = ListPostsRequest(
            sort=sort, limit=limit, offset=offset, user_id=x_user_id
        )
        return await list_posts_use_case.execute(request)
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.get("/{post_id}", response_model=GetPostResponse)
async def get_post(
    post_id: str,
    get_post_use_case: FromDishka[GetPostUseCase],
    x_user_id: str | None = Header(default=None),
) -> GetPostResponse:
    """Get a single post by ID."""
    try:
        request = GetPostRequest(post_id=post_id, user_id=x_user_id)
        return await get_post_use_case.execute(request)
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.patch("/{post_id}", response_model=UpdatePostResponse)
async def update_post(
    post_id: str,
    request: UpdatePostAPIRequest,
    update_post_use_case: FromDishka[UpdatePostUseCase],
    x_user_id: str | None = Header(default=None),
) -> UpdatePostResponse:
    """Edit one's own post.

    Args:
        post_id: Post UUID
        request: New title and/or text
        update_post_use_case: Update post use case from DI
        x_user_id: Acting user ID

    Returns:
        The edited post

    Raises:
        HTTPException: 401 if anonymous, 403 if not the author, 404 if the
            post is missing or deleted, 400 if nothing is given to change
    """
    try:
        use_case_request = UpdatePostRequest(
            post_id=post_id,
            title=request.title,
            text=request.text,
            user_id=x_user_id,
        )
        return await update_post_use_case.execute(use_case_request)
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.delete("/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: str,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    x_user_id: str | None = Header(default=None),
) -> DeletePostResponse:
    """Delete one's own post.

    The post is soft-deleted: it leaves listings and stops accepting votes
    and comments.
    """
    try:
        request = DeletePostRequest(post_id=post_id, user_id=x_user_id)
        return await delete_post_use_case.execute(request)
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)
