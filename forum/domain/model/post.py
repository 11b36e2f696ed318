"""Post aggregate root."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import PostId, UserId


class Post(DomainModel):
    """Post aggregate root.

    Vote tallies are derived from the live votes on the post and are only
    written by the vote ledger.
    """

    id: PostId
    title: str = Field(min_length=1, max_length=200)
    text: str = Field(min_length=1, max_length=50000)
    author_id: UserId
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    last_activity_at: datetime = Field(default_factory=datetime.now)
    edited: bool = False
    deleted_at: Optional[datetime] = None

    @property
    def score(self) -> int:
        """Net score (upvotes minus downvotes)."""
        return self.upvotes - self.downvotes

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def edit(
        self, at: datetime, title: Optional[str] = None, text: Optional[str] = None
    ) -> "Post":
        """Return this post with the given fields rewritten and marked edited.

        Raises:
            pydantic.ValidationError: If a new field breaks its length limits
        """
        changes = {"edited": True, "updated_at": at}
        if title is not None:
            changes["title"] = title
        if text is not None:
            changes["text"] = text
        return Post.model_validate({**self.model_dump(), **changes})

    def soft_delete(self, at: datetime) -> "Post":
        """Return the deleted version of this post."""
        return self.model_copy(update={"deleted_at": at, "updated_at": at})
