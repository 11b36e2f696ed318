"""Test configuration and fixtures."""

from datetime import datetime
from uuid import uuid4

import logfire

from forum.domain.model import Comment, Post, User
from forum.domain.value import CommentId, Handle, PostId, UserId

# Keep spans local: nothing is exported and nothing printed
logfire.configure(send_to_logfire=False, console=False)


def make_user(handle: str = "author", reputation: int = 0) -> User:
    """Build a user with a fresh ID."""
    now = datetime.now()
    return User(
        id=UserId(uuid4()),
        handle=Handle(handle),
        reputation=reputation,
        created_at=now,
        updated_at=now,
    )


def make_post(
    author_id: UserId | None = None,
    title: str = "Test Post",
    created_at: datetime | None = None,
    **fields,
) -> Post:
    """Build a post with a fresh ID; extra fields override defaults."""
    created_at = created_at or datetime.now()
    last_activity_at = fields.pop("last_activity_at", created_at)
    return Post(
        id=PostId(uuid4()),
        title=title,
        text="Test content",
        author_id=author_id or UserId(uuid4()),
        created_at=created_at,
        updated_at=created_at,
        last_activity_at=last_activity_at,
        **fields,
    )


def make_comment(
    post_id: PostId,
    author_id: UserId | None = None,
    parent: Comment | None = None,
    created_at: datetime | None = None,
    **fields,
) -> Comment:
    """Build a comment (a reply when ``parent`` is given) with a fresh ID."""
    created_at = created_at or datetime.now()
    text = fields.pop("text", "Test comment")
    return Comment(
        id=CommentId(uuid4()),
        post_id=post_id,
        author_id=author_id or UserId(uuid4()),
        text=text,
        parent_id=parent.id if parent else None,
        level=parent.level + 1 if parent else 0,
        created_at=created_at,
        updated_at=created_at,
        **fields,
    )
