"""In-memory comment repository for testing."""

from typing import Optional

from forum.domain.model.comment import Comment
from forum.domain.repository.comment import CommentRepository
from forum.domain.value import CommentId, PostId

from .database import InMemoryDatabase


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self._db = database or InMemoryDatabase()

    async def find_by_id(
        self, comment_id: CommentId, for_update: bool = False
    ) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._db.comments.get(comment_id)

    async def find_by_post(
        self,
        post_id: PostId,
        include_deleted: bool = True,
    ) -> list[Comment]:
        """Find all comments for a post, oldest first."""
        comments = [
            c
            for c in self._db.comments.values()
            if c.post_id == post_id and (include_deleted or not c.deleted)
        ]
        return sorted(comments, key=lambda c: (c.created_at, str(c.id)))

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._db.comments[comment.id] = comment
        return comment

    async def save_content(self, comment: Comment) -> Comment:
        """Write text, edit and tombstone fields only."""
        stored = self._db.comments.get(comment.id)
        if stored is None:
            return comment
        self._db.comments[comment.id] = stored.model_copy(
            update={
                "text": comment.text,
                "edited": comment.edited,
                "deleted": comment.deleted,
                "updated_at": comment.updated_at,
            }
        )
        return self._db.comments[comment.id]

    async def set_vote_counts(
        self, comment_id: CommentId, upvotes: int, downvotes: int
    ) -> None:
        """Overwrite the comment's tallies."""
        comment = self._db.comments.get(comment_id)
        if comment:
            self._db.comments[comment_id] = comment.model_copy(
                update={"upvotes": upvotes, "downvotes": downvotes}
            )
