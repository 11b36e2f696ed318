"""Shared in-memory storage for the in-memory repositories."""

from dataclasses import dataclass, field

from forum.domain.model import Comment, Post, User, Vote
from forum.domain.value import CommentId, PostId, UserId, VoteId


@dataclass
class InMemoryDatabase:
    """Tables keyed by ID.

    One instance is shared by every repository built from it, so data written
    in one request is visible in the next, as with a real database.
    """

    users: dict[UserId, User] = field(default_factory=dict)
    posts: dict[PostId, Post] = field(default_factory=dict)
    comments: dict[CommentId, Comment] = field(default_factory=dict)
    votes: dict[VoteId, Vote] = field(default_factory=dict)
