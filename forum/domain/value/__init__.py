"""Domain value objects for the forum."""

from forum.domain.value.identifiers import CommentId, PostId, UserId, VoteId
from forum.domain.value.types import (
    Handle,
    PostSortOrder,
    VotableType,
    VoteDirection,
    VoteTransition,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "VoteId",
    # Types
    "Handle",
    "PostSortOrder",
    "VotableType",
    "VoteDirection",
    "VoteTransition",
]
