"""In-memory post repository for testing."""

from datetime import datetime
from typing import Optional

from forum.domain.model.post import Post
from forum.domain.repository.post import PostRepository
from forum.domain.value import PostId, PostSortOrder

from .database import InMemoryDatabase


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self._db = database or InMemoryDatabase()

    async def find_by_id(
        self, post_id: PostId, for_update: bool = False
    ) -> Optional[Post]:
        """Find a post by ID."""
        return self._db.posts.get(post_id)

    async def find_all(
        self,
        sort: PostSortOrder = PostSortOrder.RECENT,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Post]:
        """Find non-deleted posts in created or top order."""
        posts = [p for p in self._db.posts.values() if not p.is_deleted]

        # Newest first, then stable sort for TOP keeps that as the tiebreak
        posts.sort(key=lambda p: p.created_at, reverse=True)
        if sort == PostSortOrder.TOP:
            posts.sort(key=lambda p: (-p.upvotes, p.downvotes))
        elif sort != PostSortOrder.RECENT:
            raise ValueError(f"Sort order {sort.value} is ranked at query time")

        return posts[offset : offset + limit]

    async def find_candidates(
        self,
        created_since: Optional[datetime] = None,
        active_since: Optional[datetime] = None,
        min_upvotes: int = 0,
    ) -> list[Post]:
        """Find non-deleted posts eligible for ranking."""
        return [
            p
            for p in self._db.posts.values()
            if not p.is_deleted
            and (created_since is None or p.created_at >= created_since)
            and (active_since is None or p.last_activity_at >= active_since)
            and p.upvotes >= min_upvotes
        ]

    async def save(self, post: Post) -> Post:
        """Save or update a post."""
        self._db.posts[post.id] = post
        return post

    async def save_content(self, post: Post) -> Post:
        """Write title, text, edit and deletion fields only."""
        self._update(
            post.id,
            title=post.title,
            text=post.text,
            edited=post.edited,
            updated_at=post.updated_at,
            deleted_at=post.deleted_at,
        )
        return self._db.posts.get(post.id, post)

    async def set_vote_counts(
        self, post_id: PostId, upvotes: int, downvotes: int
    ) -> None:
        """Overwrite the post's tallies."""
        self._update(post_id, upvotes=upvotes, downvotes=downvotes)

    async def touch_activity(self, post_id: PostId, at: datetime) -> None:
        """Set the post's last activity time."""
        self._update(post_id, last_activity_at=at)

    async def adjust_comment_count(self, post_id: PostId, delta: int) -> None:
        """Add ``delta`` to the comment count (minimum 0)."""
        post = self._db.posts.get(post_id)
        if post:
            self._update(post_id, comment_count=max(0, post.comment_count + delta))

    def _update(self, post_id: PostId, **fields) -> None:
        post = self._db.posts.get(post_id)
        if post:
            self._db.posts[post_id] = post.model_copy(update=fields)
