"""List posts use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel, Field

from forum.application.usecase.base import BaseUseCase, to_user_id
from forum.domain.service import PostService, VoteLedger
from forum.domain.value import PostSortOrder, VotableType, VoteDirection


class PostListItem(BaseModel):
    """Post list item in response."""

    post_id: str
    title: str
    author_id: str
    upvotes: int
    downvotes: int
    score: int
    comment_count: int
    created_at: datetime
    last_activity_at: datetime
    user_vote: VoteDirection | None = None


class ListPostsRequest(BaseModel):
    """List posts request."""

    sort: PostSortOrder = PostSortOrder.RECENT
    limit: int = Field(default=30, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    user_id: str | None = None  # Current user ID (if authenticated)


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostListItem]
    sort: PostSortOrder
    limit: int
    offset: int


class ListPostsUseCase(BaseUseCase):
    """Use case for listing posts in recent, top, hot or trending order."""

    def __init__(self, post_service: PostService, vote_ledger: VoteLedger) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            vote_ledger: Vote ledger for the viewer's own votes
        """
        self.post_service = post_service
        self.vote_ledger = vote_ledger

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: List posts request with sort and pagination

        Returns:
            Page of posts in the requested order
        """
        with logfire.span(
            "list_posts.execute",
            sort=request.sort.value,
            limit=request.limit,
            offset=request.offset,
        ):
            posts = await self.post_service.list_posts(
                sort=request.sort, limit=request.limit, offset=request.offset
            )

            user_votes = await self.vote_ledger.get_user_votes(
                to_user_id(request.user_id),
                VotableType.POST,
                [post.id for post in posts],
            )

            items = [
                PostListItem(
                    post_id=str(post.id),
                    title=post.title,
                    author_id=str(post.author_id),
                    upvotes=post.upvotes,
                    downvotes=post.downvotes,
                    score=post.score,
                    comment_count=post.comment_count,
                    created_at=post.created_at,
                    last_activity_at=post.last_activity_at,
                    user_vote=user_votes.get(post.id),
                )
                for post in posts
            ]

            return ListPostsResponse(
                posts=items,
                sort=request.sort,
                limit=request.limit,
                offset=request.offset,
            )
