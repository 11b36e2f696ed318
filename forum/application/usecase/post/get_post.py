"""Get post use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase, to_user_id
from forum.domain.service import PostService, VoteLedger
from forum.domain.value import PostId, VotableType, VoteDirection


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string
    user_id: str | None = None  # Viewer, for vote annotation


class GetPostResponse(BaseModel):
    """Get post response."""

    post_id: str
    title: str
    text: str
    author_id: str
    upvotes: int
    downvotes: int
    score: int
    comment_count: int
    edited: bool
    created_at: datetime
    last_activity_at: datetime
    user_vote: VoteDirection | None = None


class GetPostUseCase(BaseUseCase):
    """Use case for reading a single post."""

    def __init__(self, post_service: PostService, vote_ledger: VoteLedger) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            vote_ledger: Vote ledger for the viewer's own vote
        """
        self.post_service = post_service
        self.vote_ledger = vote_ledger

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Raises:
            TargetNotFoundError: If the post is missing or deleted
        """
        post = await self.post_service.get_live_post(PostId(UUID(request.post_id)))
        user_vote = await self.vote_ledger.get_user_vote(
            to_user_id(request.user_id), VotableType.POST, post.id
        )

        return GetPostResponse(
            post_id=str(post.id),
            title=post.title,
            text=post.text,
            author_id=str(post.author_id),
            upvotes=post.upvotes,
            downvotes=post.downvotes,
            score=post.score,
            comment_count=post.comment_count,
            edited=post.edited,
            created_at=post.created_at,
            last_activity_at=post.last_activity_at,
            user_vote=user_vote,
        )
