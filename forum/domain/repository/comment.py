"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from forum.domain.model.comment import Comment
from forum.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(
        self, comment_id: CommentId, for_update: bool = False
    ) -> Optional[Comment]:
        """Find a comment by ID (tombstoned comments included).

        Args:
            comment_id: The comment's unique identifier
            for_update: Lock the row until the surrounding transaction ends

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(
        self,
        post_id: PostId,
        include_deleted: bool = True,
    ) -> List[Comment]:
        """Find all comments for a post as a flat list, oldest first.

        Args:
            post_id: The post ID
            include_deleted: Whether to include tombstoned comments

        Returns:
            Flat list of comments
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def save_content(self, comment: Comment) -> Comment:
        """Write the author-editable fields of an existing comment.

        Text, the edited and deleted flags and update time are written;
        tallies keep their stored values.

        Args:
            comment: Comment carrying the new content

        Returns:
            The stored comment after the write
        """
        pass

    @abstractmethod
    async def set_vote_counts(
        self, comment_id: CommentId, upvotes: int, downvotes: int
    ) -> None:
        """Overwrite the comment's tallies with recomputed counts.

        Args:
            comment_id: Comment ID
            upvotes: Live upvote count
            downvotes: Live downvote count
        """
        pass
