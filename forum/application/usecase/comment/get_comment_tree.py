"""Get comment tree use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase, to_user_id
from forum.domain.service import CommentNode, CommentService, VoteLedger, flatten
from forum.domain.value import PostId, VotableType, VoteDirection


class CommentTreeItem(BaseModel):
    """Comment with its ordered replies."""

    comment_id: str
    post_id: str
    author_id: str
    text: str
    parent_id: str | None
    level: int
    upvotes: int
    downvotes: int
    score: int
    edited: bool
    deleted: bool
    created_at: datetime
    user_vote: VoteDirection | None = None
    replies: list["CommentTreeItem"]


class GetCommentTreeRequest(BaseModel):
    """Get comment tree request."""

    post_id: str  # UUID string
    max_depth: int | None = None  # Defaults to the configured depth
    user_id: str | None = None  # Viewer, for vote annotation


class GetCommentTreeResponse(BaseModel):
    """Get comment tree response."""

    post_id: str
    comments: list[CommentTreeItem]
    total: int  # Number of comments in the returned forest


class GetCommentTreeUseCase(BaseUseCase):
    """Use case for reading a post's threaded comments."""

    def __init__(
        self, comment_service: CommentService, vote_ledger: VoteLedger
    ) -> None:
        """Initialize get comment tree use case.

        Args:
            comment_service: Comment domain service
            vote_ledger: Vote ledger for the viewer's own votes
        """
        self.comment_service = comment_service
        self.vote_ledger = vote_ledger

    async def execute(self, request: GetCommentTreeRequest) -> GetCommentTreeResponse:
        """Execute get comment tree flow.

        Args:
            request: Get comment tree request

        Returns:
            Ordered, depth-bounded forest of comments

        Raises:
            TargetNotFoundError: If the post is missing or deleted
        """
        post_id = PostId(UUID(request.post_id))
        forest = await self.comment_service.build_tree(post_id, request.max_depth)

        comments = flatten(forest)
        user_votes = await self.vote_ledger.get_user_votes(
            to_user_id(request.user_id),
            VotableType.COMMENT,
            [comment.id for comment in comments],
        )

        return GetCommentTreeResponse(
            post_id=request.post_id,
            comments=[self._to_item(node, user_votes) for node in forest],
            total=len(comments),
        )

    def _to_item(
        self, node: CommentNode, user_votes: dict[UUID, VoteDirection]
    ) -> CommentTreeItem:
        comment = node.comment
        return CommentTreeItem(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            text=comment.text,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            level=comment.level,
            upvotes=comment.upvotes,
            downvotes=comment.downvotes,
            score=comment.score,
            edited=comment.edited,
            deleted=comment.deleted,
            created_at=comment.created_at,
            user_vote=user_votes.get(comment.id),
            replies=[self._to_item(reply, user_votes) for reply in node.replies],
        )
