"""Update comment use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from forum.application.usecase.base import BaseUseCase, to_user_id
from forum.domain.service import CommentService
from forum.domain.value import CommentId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    text: str = Field(min_length=1, max_length=10000)
    user_id: str | None = None  # Acting user (must be the author)


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment_id: str
    post_id: str
    author_id: str
    text: str
    parent_id: str | None
    level: int
    edited: bool
    created_at: datetime
    updated_at: datetime


class UpdateCommentUseCase(BaseUseCase):
    """Use case for editing the text of one's own comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Args:
            request: Comment ID, acting user and the new text

        Returns:
            The edited comment

        Raises:
            NotAuthenticatedError: If there is no acting user
            TargetNotFoundError: If the comment is missing or tombstoned, or
                its post is deleted
            NotAuthorizedError: If the user is not the author
        """
        comment = await self.comment_service.update_comment(
            comment_id=CommentId(UUID(request.comment_id)),
            user_id=to_user_id(request.user_id),
            text=request.text,
        )

        return UpdateCommentResponse(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            text=comment.text,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            level=comment.level,
            edited=comment.edited,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
