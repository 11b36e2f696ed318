"""Delete post use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase, to_user_id
from forum.domain.service import PostService
from forum.domain.value import PostId


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str  # UUID string
    user_id: str | None = None


class DeletePostResponse(BaseModel):
    """Delete post response."""

    post_id: str
    deleted: bool


class DeletePostUseCase(BaseUseCase):
    """Use case for soft-deleting one's own post."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        post = await self.post_service.delete_post(
            PostId(UUID(request.post_id)), to_user_id(request.user_id)
        )
        return DeletePostResponse(post_id=str(post.id), deleted=post.is_deleted)
