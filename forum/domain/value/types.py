"""Domain value types for the forum.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import field_validator

from forum.domain.value.common import RootValueObject


class VoteDirection(str, Enum):
    """Direction of a vote."""

    UP = "up"
    DOWN = "down"


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class VoteTransition(str, Enum):
    """Outcome of casting a vote against the voter's current state.

    States per (voter, target) are no vote, upvoted and downvoted:
    - CREATED: no vote existed, one was recorded
    - FLIPPED: a vote in the other direction was overwritten
    - RETRACTED: a vote in the same direction was removed (toggle-off)
    """

    CREATED = "created"
    FLIPPED = "flipped"
    RETRACTED = "retracted"

    @property
    def result(self) -> str:
        """Caller-visible name of the transition."""
        return _TRANSITION_RESULTS[self]


_TRANSITION_RESULTS = {
    VoteTransition.CREATED: "created",
    VoteTransition.FLIPPED: "updated",
    VoteTransition.RETRACTED: "removed",
}


class PostSortOrder(str, Enum):
    """Sort order for post listings."""

    RECENT = "recent"  # created_at DESC
    TOP = "top"  # upvotes DESC, downvotes ASC
    HOT = "hot"  # hot score over recent, upvoted posts
    TRENDING = "trending"  # hot score over recently active posts


class Handle(RootValueObject[str]):
    """Display handle of a user."""

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle is not empty and within length limits."""
        v = v.strip()
        if len(v) < 1 or len(v) > 50:
            raise ValueError("Handle must be 1-50 characters")
        return v
