"""Create comment use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from forum.application.usecase.base import BaseUseCase, to_user_id
from forum.domain.service import CommentService
from forum.domain.value import CommentId, PostId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    text: str = Field(min_length=1, max_length=10000)
    parent_id: str | None = None  # UUID string for replies
    user_id: str | None = None  # Acting user (None if anonymous)


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment_id: str
    post_id: str
    author_id: str
    text: str
    parent_id: str | None
    level: int
    created_at: datetime


class CreateCommentUseCase(BaseUseCase):
    """Use case for commenting on a post or replying to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The created comment

        Raises:
            NotAuthenticatedError: If there is no acting user
            TargetNotFoundError: If the post is missing or deleted
            ParentNotFoundError: If the parent comment is not on the post
            DepthExceededError: If the reply would nest too deep
        """
        comment = await self.comment_service.create_comment(
            post_id=PostId(UUID(request.post_id)),
            author_id=to_user_id(request.user_id),
            text=request.text,
            parent_id=CommentId(UUID(request.parent_id)) if request.parent_id else None,
        )

        return CreateCommentResponse(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            text=comment.text,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            level=comment.level,
            created_at=comment.created_at,
        )
