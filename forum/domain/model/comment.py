"""Comment entity.

Comments form a tree per post through ``parent_id``. The parent is a plain
identifier, never a live reference, so trees are rebuilt from flat records.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import CommentId, PostId, UserId

TOMBSTONE_TEXT = "[deleted]"


class Comment(DomainModel):
    """Comment entity.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - level: Nesting level (0 for top-level, parent level + 1 for replies)

    Deleted comments are tombstoned (text replaced, ``deleted`` set) and kept
    so replies retain their parent linkage.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    text: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    level: int = Field(default=0, ge=0)
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    edited: bool = False
    deleted: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def score(self) -> int:
        """Net score (upvotes minus downvotes)."""
        return self.upvotes - self.downvotes

    def tombstone(self, at: datetime) -> "Comment":
        """Return the soft-deleted version of this comment."""
        return self.model_copy(
            update={"deleted": True, "text": TOMBSTONE_TEXT, "updated_at": at}
        )

    def edit(self, text: str, at: datetime) -> "Comment":
        """Return this comment with new text, marked edited.

        Raises:
            pydantic.ValidationError: If the text breaks its length limits
        """
        return Comment.model_validate(
            {**self.model_dump(), "text": text, "edited": True, "updated_at": at}
        )
