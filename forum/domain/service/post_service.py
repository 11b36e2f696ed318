"""Post domain service."""

from datetime import datetime, timedelta
from uuid import uuid4

import logfire

from forum.config import RankingSettings
from forum.domain.error import (
    NotAuthenticatedError,
    NotAuthorizedError,
    TargetNotFoundError,
    ValidationError,
)
from forum.domain.model.post import Post
from forum.domain.repository import PostRepository
from forum.domain.value import PostId, PostSortOrder, UserId

from .base import Service
from .ranking import RankingService


class PostService(Service):
    """Domain service for post operations."""

    def __init__(
        self,
        post_repository: PostRepository,
        ranking_service: RankingService,
        settings: RankingSettings,
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            ranking_service: Hot-score ranking
            settings: Listing windows for hot and trending
        """
        self.post_repository = post_repository
        self.ranking_service = ranking_service
        self.settings = settings

    async def create_post(
        self, author_id: UserId | None, title: str, text: str
    ) -> Post:
        """Create a post.

        Args:
            author_id: Acting user
            title: Post title
            text: Post body

        Returns:
            Created post

        Raises:
            NotAuthenticatedError: If there is no acting user
        """
        if author_id is None:
            raise NotAuthenticatedError("create a post")

        with logfire.span(
            "post_service.create_post", author_id=str(author_id), title=title
        ):
            now = datetime.now()
            post = Post(
                id=PostId(uuid4()),
                title=title,
                text=text,
                author_id=author_id,
                created_at=now,
                updated_at=now,
                last_activity_at=now,
            )
            saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=str(saved.id))
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id), title=post.title)
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def get_live_post(self, post_id: PostId) -> Post:
        """Get a post that exists and is not deleted.

        Raises:
            TargetNotFoundError: If the post is missing or deleted
        """
        post = await self.get_post_by_id(post_id)
        if post is None or post.is_deleted:
            raise TargetNotFoundError("Post", str(post_id))
        return post

    async def update_post(
        self,
        post_id: PostId,
        user_id: UserId | None,
        title: str | None = None,
        text: str | None = None,
    ) -> Post:
        """Rewrite the title and/or text of one's own post.

        Args:
            post_id: Post ID
            user_id: Acting user (must be the author)
            title: New title (None keeps the current one)
            text: New text (None keeps the current one)

        Returns:
            The edited post

        Raises:
            NotAuthenticatedError: If there is no acting user
            ValidationError: If neither title nor text is given
            TargetNotFoundError: If the post is missing or deleted
            NotAuthorizedError: If the user is not the author
        """
        if user_id is None:
            raise NotAuthenticatedError("edit a post")
        if title is None and text is None:
            raise ValidationError("Nothing to update: give a title or text")

        with logfire.span(
            "post_service.update_post", post_id=str(post_id), user_id=str(user_id)
        ):
            post = await self.get_live_post(post_id)
            self._check_author(post, user_id, "edit")

            saved = await self.post_repository.save_content(
                post.edit(datetime.now(), title=title, text=text)
            )
            logfire.info(
                "Post updated",
                post_id=str(post_id),
                title=saved.title,
                text_length=len(saved.text),
            )
            return saved

    async def delete_post(self, post_id: PostId, user_id: UserId | None) -> Post:
        """Soft-delete one's own post.

        The post stops appearing in listings and rejects votes, comments and
        tree requests. Deleting an already deleted post is a no-op.

        Args:
            post_id: Post ID
            user_id: Acting user (must be the author)

        Returns:
            The deleted post

        Raises:
            NotAuthenticatedError: If there is no acting user
            TargetNotFoundError: If the post does not exist
            NotAuthorizedError: If the user is not the author
        """
        if user_id is None:
            raise NotAuthenticatedError("delete a post")

        with logfire.span(
            "post_service.delete_post", post_id=str(post_id), user_id=str(user_id)
        ):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Delete of non-existent post", post_id=str(post_id))
                raise TargetNotFoundError("Post", str(post_id))

            self._check_author(post, user_id, "delete")

            if post.is_deleted:
                return post

            saved = await self.post_repository.save_content(
                post.soft_delete(datetime.now())
            )
            logfire.info("Post deleted", post_id=str(post_id), title=post.title)
            return saved

    def _check_author(self, post: Post, user_id: UserId, action: str) -> None:
        if post.author_id != user_id:
            logfire.warn(
                f"Unauthorized post {action} attempt",
                post_id=str(post.id),
                user_id=str(user_id),
                author_id=str(post.author_id),
            )
            raise NotAuthorizedError("post", str(post.id), str(user_id))

    async def touch_activity(self, post_id: PostId, at: datetime | None = None) -> None:
        """Mark a post as active.

        Args:
            post_id: Post ID
            at: Activity time (defaults to now)
        """
        with logfire.span("post_service.touch_activity", post_id=str(post_id)):
            await self.post_repository.touch_activity(post_id, at or datetime.now())

    async def adjust_comment_count(self, post_id: PostId, delta: int) -> None:
        """Atomically adjust a post's comment count (minimum 0).

        Args:
            post_id: Post ID
            delta: Amount to add (negative to subtract)
        """
        with logfire.span(
            "post_service.adjust_comment_count", post_id=str(post_id), delta=delta
        ):
            await self.post_repository.adjust_comment_count(post_id, delta)
            logfire.info("Comment count adjusted", post_id=str(post_id), delta=delta)

    async def list_posts(
        self,
        sort: PostSortOrder = PostSortOrder.RECENT,
        limit: int = 30,
        offset: int = 0,
        now: datetime | None = None,
    ) -> list[Post]:
        """List non-deleted posts.

        RECENT and TOP are served from stored columns. HOT ranks posts created
        in the hot window with enough upvotes; TRENDING ranks posts active in
        the trending window. Both are ranked by hot score at call time.

        Args:
            sort: Sort order
            limit: Maximum number of posts
            offset: Number of posts to skip
            now: Reference time for ranking (defaults to now)

        Returns:
            Page of posts in the requested order
        """
        with logfire.span(
            "post_service.list_posts", sort=sort.value, limit=limit, offset=offset
        ):
            if sort in (PostSortOrder.RECENT, PostSortOrder.TOP):
                posts = await self.post_repository.find_all(
                    sort=sort, limit=limit, offset=offset
                )
                logfire.info("Posts listed", sort=sort.value, count=len(posts))
                return posts

            now = now or datetime.now()
            if sort == PostSortOrder.HOT:
                candidates = await self.post_repository.find_candidates(
                    created_since=now - timedelta(days=self.settings.hot_window_days),
                    min_upvotes=self.settings.hot_min_upvotes,
                )
            else:  # PostSortOrder.TRENDING
                candidates = await self.post_repository.find_candidates(
                    active_since=now
                    - timedelta(hours=self.settings.trending_window_hours),
                )

            # Newest first before the stable rank, so ties favour fresh posts
            candidates.sort(key=lambda post: post.created_at, reverse=True)
            ranked = self.ranking_service.rank(candidates, now)
            page = ranked[offset : offset + limit]
            logfire.info(
                "Posts ranked",
                sort=sort.value,
                candidates=len(candidates),
                count=len(page),
            )
            return page
