"""Post repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from forum.domain.model.post import Post
from forum.domain.value import PostId, PostSortOrder


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(
        self, post_id: PostId, for_update: bool = False
    ) -> Optional[Post]:
        """Find a post by ID (deleted posts included).

        Args:
            post_id: The post's unique identifier
            for_update: Lock the row until the surrounding transaction ends

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        sort: PostSortOrder = PostSortOrder.RECENT,
        limit: int = 30,
        offset: int = 0,
    ) -> List[Post]:
        """Find non-deleted posts in a stored-column order.

        Only RECENT and TOP can be served here; time-decayed orders are
        computed by the ranking service at query time.

        Args:
            sort: RECENT or TOP
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts
        """
        pass

    @abstractmethod
    async def find_candidates(
        self,
        created_since: Optional[datetime] = None,
        active_since: Optional[datetime] = None,
        min_upvotes: int = 0,
    ) -> List[Post]:
        """Find non-deleted posts eligible for ranking.

        Args:
            created_since: Only posts created at or after this time
            active_since: Only posts active at or after this time
            min_upvotes: Only posts with at least this many upvotes

        Returns:
            Unordered list of posts
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def save_content(self, post: Post) -> Post:
        """Write the author-editable fields of an existing post.

        Title, text, the edited flag, update time and deletion time are
        written. Tallies, comment count and activity time keep their stored
        values.

        Args:
            post: Post carrying the new content

        Returns:
            The stored post after the write
        """
        pass

    @abstractmethod
    async def set_vote_counts(
        self, post_id: PostId, upvotes: int, downvotes: int
    ) -> None:
        """Overwrite the post's tallies with recomputed counts.

        Args:
            post_id: Post ID
            upvotes: Live upvote count
            downvotes: Live downvote count
        """
        pass

    @abstractmethod
    async def touch_activity(self, post_id: PostId, at: datetime) -> None:
        """Set the post's last activity time.

        Args:
            post_id: Post ID
            at: Activity timestamp
        """
        pass

    @abstractmethod
    async def adjust_comment_count(self, post_id: PostId, delta: int) -> None:
        """Atomically add ``delta`` to the comment count (minimum 0).

        Args:
            post_id: Post ID
            delta: Amount to add (negative to subtract)
        """
        pass
