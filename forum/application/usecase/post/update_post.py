"""Update post use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from forum.application.usecase.base import BaseUseCase, to_user_id
from forum.domain.service import PostService
from forum.domain.value import PostId


class UpdatePostRequest(BaseModel):
    """Update post request."""

    post_id: str  # UUID string
    title: str | None = Field(default=None, min_length=1, max_length=200)
    text: str | None = Field(default=None, min_length=1, max_length=50000)
    user_id: str | None = None  # Acting user (must be the author)


class UpdatePostResponse(BaseModel):
    """Update post response."""

    post_id: str
    title: str
    text: str
    author_id: str
    edited: bool
    created_at: datetime
    updated_at: datetime


class UpdatePostUseCase(BaseUseCase):
    """Use case for editing one's own post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize update post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: UpdatePostRequest) -> UpdatePostResponse:
        """Execute update post flow.

        Args:
            request: Post ID, acting user and the fields to rewrite

        Returns:
            The edited post

        Raises:
            NotAuthenticatedError: If there is no acting user
            ValidationError: If neither title nor text is given
            TargetNotFoundError: If the post is missing or deleted
            NotAuthorizedError: If the user is not the author
        """
        post = await self.post_service.update_post(
            post_id=PostId(UUID(request.post_id)),
            user_id=to_user_id(request.user_id),
            title=request.title,
            text=request.text,
        )

        return UpdatePostResponse(
            post_id=str(post.id),
            title=post.title,
            text=post.text,
            author_id=str(post.author_id),
            edited=post.edited,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
