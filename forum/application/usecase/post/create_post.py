"""Create post use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from forum.application.usecase.base import BaseUseCase, to_user_id
from forum.domain.service import PostService


class CreatePostRequest(BaseModel):
    """Create post request."""

    title: str = Field(min_length=1, max_length=200)
    text: str = Field(min_length=1, max_length=50000)
    user_id: str | None = None  # Acting user (None if anonymous)


class CreatePostResponse(BaseModel):
    """Create post response."""

    post_id: str
    title: str
    text: str
    author_id: str
    created_at: datetime


class CreatePostUseCase(BaseUseCase):
    """Use case for creating a post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Args:
            request: Create post request

        Returns:
            The created post

        Raises:
            NotAuthenticatedError: If there is no acting user
        """
        post = await self.post_service.create_post(
            author_id=to_user_id(request.user_id),
            title=request.title,
            text=request.text,
        )

        return CreatePostResponse(
            post_id=str(post.id),
            title=post.title,
            text=post.text,
            author_id=str(post.author_id),
            created_at=post.created_at,
        )
