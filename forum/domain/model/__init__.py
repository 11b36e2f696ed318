"""Domain model entities for the forum."""

from forum.domain.model.comment import TOMBSTONE_TEXT, Comment
from forum.domain.model.post import Post
from forum.domain.model.target import VotableTarget, VoteTally
from forum.domain.model.user import User
from forum.domain.model.vote import Vote

__all__ = [
    "User",
    "Post",
    "Comment",
    "Vote",
    "VotableTarget",
    "VoteTally",
    "TOMBSTONE_TEXT",
]
