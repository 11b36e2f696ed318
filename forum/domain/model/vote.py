"""Vote entity.

Each user holds at most one live vote per post or comment, either up or down.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import UserId, VotableType, VoteDirection, VoteId


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per item (ledger lock plus unique constraint)
    - Flipping direction mutates the existing vote in place
    - Casting the same direction again removes the vote
    - Polymorphic reference to votable (post or comment)
    """

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: UUID  # PostId or CommentId (both are UUIDs)
    direction: VoteDirection
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    def flipped(self, direction: VoteDirection, at: datetime) -> "Vote":
        """Return this vote pointing the other way."""
        return self.model_copy(update={"direction": direction, "updated_at": at})
