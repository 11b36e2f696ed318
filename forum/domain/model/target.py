"""Votable target projection."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forum.domain.model.comment import Comment
from forum.domain.model.common import DomainModel
from forum.domain.model.post import Post
from forum.domain.value import PostId, UserId, VotableType


class VotableTarget(DomainModel):
    """What the vote ledger needs to know about a post or comment.

    ``post_id`` is the owning post for comments and the post itself for posts,
    which is where activity is propagated after a vote.
    """

    votable_type: VotableType
    id: UUID
    author_id: UserId
    post_id: PostId
    upvotes: int = Field(ge=0)
    downvotes: int = Field(ge=0)
    created_at: datetime
    deleted: bool = False

    @property
    def score(self) -> int:
        return self.upvotes - self.downvotes

    @classmethod
    def from_post(cls, post: Post) -> "VotableTarget":
        return cls(
            votable_type=VotableType.POST,
            id=post.id,
            author_id=post.author_id,
            post_id=post.id,
            upvotes=post.upvotes,
            downvotes=post.downvotes,
            created_at=post.created_at,
            deleted=post.is_deleted,
        )

    @classmethod
    def from_comment(cls, comment: Comment) -> "VotableTarget":
        return cls(
            votable_type=VotableType.COMMENT,
            id=comment.id,
            author_id=comment.author_id,
            post_id=comment.post_id,
            upvotes=comment.upvotes,
            downvotes=comment.downvotes,
            created_at=comment.created_at,
            deleted=comment.deleted,
        )

    def with_tally(self, upvotes: int, downvotes: int) -> "VotableTarget":
        return self.model_copy(update={"upvotes": upvotes, "downvotes": downvotes})


class VoteTally(DomainModel):
    """Recomputed vote counts for a target."""

    upvotes: int = Field(ge=0)
    downvotes: int = Field(ge=0)

    @property
    def score(self) -> int:
        return self.upvotes - self.downvotes
