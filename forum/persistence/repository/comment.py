"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, PostId
from forum.persistence.mappers import comment_to_dict, row_to_comment
from forum.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, comment_id: CommentId, for_update: bool = False
    ) -> Optional[Comment]:
        """Find a comment by ID, optionally locking its row."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(
        self,
        post_id: PostId,
        include_deleted: bool = True,
    ) -> List[Comment]:
        """Find all comments for a post, oldest first."""
        stmt = select(comments_table).where(comments_table.c.post_id == post_id)
        if not include_deleted:
            stmt = stmt.where(comments_table.c.deleted.is_(False))
        stmt = stmt.order_by(comments_table.c.created_at, comments_table.c.id)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        comment_dict = comment_to_dict(comment)
        existing = await self.find_by_id(comment.id)

        if existing:
            stmt = (
                update(comments_table)
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = insert(comments_table).values(**comment_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def save_content(self, comment: Comment) -> Comment:
        """Write text, edit and tombstone fields only."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment.id)
            .values(
                text=comment.text,
                edited=comment.edited,
                deleted=comment.deleted,
                updated_at=comment.updated_at,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return await self.find_by_id(comment.id) or comment

    async def set_vote_counts(
        self, comment_id: CommentId, upvotes: int, downvotes: int
    ) -> None:
        """Overwrite the comment's tallies with recomputed counts."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(upvotes=upvotes, downvotes=downvotes)
        )
        await self.session.execute(stmt)
        await self.session.flush()
