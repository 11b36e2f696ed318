"""PostgreSQL implementation of Post repository."""

from datetime import datetime
from typing import List, Optional

import logfire
from sqlalchemy import case, desc, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Post
from forum.domain.repository import PostRepository
from forum.domain.value import PostId, PostSortOrder
from forum.persistence.mappers import post_to_dict, row_to_post
from forum.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, post_id: PostId, for_update: bool = False
    ) -> Optional[Post]:
        """Find a post by ID, optionally locking its row."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            if for_update:
                stmt = stmt.with_for_update()
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None

    async def find_all(
        self,
        sort: PostSortOrder = PostSortOrder.RECENT,
        limit: int = 30,
        offset: int = 0,
    ) -> List[Post]:
        """Find non-deleted posts in created or top order."""
        stmt = select(posts_table).where(posts_table.c.deleted_at.is_(None))

        if sort == PostSortOrder.TOP:
            stmt = stmt.order_by(
                desc(posts_table.c.upvotes),
                posts_table.c.downvotes,
                desc(posts_table.c.created_at),
            )
        elif sort == PostSortOrder.RECENT:
            stmt = stmt.order_by(desc(posts_table.c.created_at))
        else:
            raise ValueError(f"Sort order {sort.value} is ranked at query time")

        stmt = stmt.limit(limit).offset(offset)
        result = await self.session.execute(stmt)
        return [row_to_post(row._asdict()) for row in result.fetchall()]

    async def find_candidates(
        self,
        created_since: Optional[datetime] = None,
        active_since: Optional[datetime] = None,
        min_upvotes: int = 0,
    ) -> List[Post]:
        """Find non-deleted posts eligible for ranking."""
        stmt = select(posts_table).where(posts_table.c.deleted_at.is_(None))
        if created_since is not None:
            stmt = stmt.where(posts_table.c.created_at >= created_since)
        if active_since is not None:
            stmt = stmt.where(posts_table.c.last_activity_at >= active_since)
        if min_upvotes > 0:
            stmt = stmt.where(posts_table.c.upvotes >= min_upvotes)

        result = await self.session.execute(stmt)
        return [row_to_post(row._asdict()) for row in result.fetchall()]

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        post_dict = post_to_dict(post)
        existing = await self.find_by_id(post.id)

        if existing:
            stmt = (
                update(posts_table)
                .where(posts_table.c.id == post.id)
                .values(**post_dict)
            )
        else:
            stmt = insert(posts_table).values(**post_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return post

    async def save_content(self, post: Post) -> Post:
        """Write title, text, edit and deletion fields only."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post.id)
            .values(
                title=post.title,
                text=post.text,
                edited=post.edited,
                updated_at=post.updated_at,
                deleted_at=post.deleted_at,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return await self.find_by_id(post.id) or post

    async def set_vote_counts(
        self, post_id: PostId, upvotes: int, downvotes: int
    ) -> None:
        """Overwrite the post's tallies with recomputed counts."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(upvotes=upvotes, downvotes=downvotes)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def touch_activity(self, post_id: PostId, at: datetime) -> None:
        """Set the post's last activity time."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(last_activity_at=at)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def adjust_comment_count(self, post_id: PostId, delta: int) -> None:
        """Atomically add ``delta`` to the comment count (minimum 0)."""
        merged = posts_table.c.comment_count + delta
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(comment_count=case((merged > 0, merged), else_=0))
        )
        await self.session.execute(stmt)
        await self.session.flush()
