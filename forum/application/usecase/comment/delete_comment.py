"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase, to_user_id
from forum.domain.service import CommentService
from forum.domain.value import CommentId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    user_id: str | None = None


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    post_id: str
    deleted: bool


class DeleteCommentUseCase(BaseUseCase):
    """Use case for tombstoning one's own comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        comment = await self.comment_service.delete_comment(
            CommentId(UUID(request.comment_id)), to_user_id(request.user_id)
        )
        return DeleteCommentResponse(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            deleted=comment.deleted,
        )
