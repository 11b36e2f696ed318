"""Comment domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from forum.config import CommentSettings
from forum.domain.error import (
    DepthExceededError,
    NotAuthenticatedError,
    NotAuthorizedError,
    ParentNotFoundError,
    TargetNotFoundError,
)
from forum.domain.model.comment import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, PostId, UserId

from .base import Service
from .comment_tree import CommentNode, build_comment_tree
from .post_service import PostService


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_service: PostService,
        settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_service: Post domain service (comment counts and activity)
            settings: Nesting limits
        """
        self.comment_repository = comment_repository
        self.post_service = post_service
        self.settings = settings

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId | None,
        text: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        Args:
            post_id: Post ID
            author_id: Acting user
            text: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            NotAuthenticatedError: If there is no acting user
            TargetNotFoundError: If the post is missing or deleted
            ParentNotFoundError: If the parent is missing or on another post
            DepthExceededError: If the reply would nest too deep
        """
        if author_id is None:
            raise NotAuthenticatedError("comment")

        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            await self.post_service.get_live_post(post_id)

            # If replying, verify parent exists and calculate level
            level = 0
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.error(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise ParentNotFoundError(str(parent_id))
                if parent.post_id != post_id:
                    logfire.error(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ParentNotFoundError(str(parent_id))
                level = parent.level + 1

            if level > self.settings.max_level:
                logfire.warn(
                    "Comment nesting too deep",
                    parent_id=str(parent_id),
                    level=level,
                    max_level=self.settings.max_level,
                )
                raise DepthExceededError(level, self.settings.max_level)

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                text=text,
                parent_id=parent_id,
                level=level,
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(comment)
            await self.post_service.adjust_comment_count(post_id, 1)
            await self.post_service.touch_activity(post_id, now)

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                level=level,
            )
            return saved

    async def update_comment(
        self, comment_id: CommentId, user_id: UserId | None, text: str
    ) -> Comment:
        """Rewrite the text of one's own comment.

        Args:
            comment_id: Comment ID
            user_id: Acting user (must be the author)
            text: New comment text

        Returns:
            The edited comment

        Raises:
            NotAuthenticatedError: If there is no acting user
            TargetNotFoundError: If the comment is missing or tombstoned, or
                its post is deleted
            NotAuthorizedError: If the user is not the author
        """
        if user_id is None:
            raise NotAuthenticatedError("edit a comment")

        with logfire.span(
            "comment_service.update_comment",
            comment_id=str(comment_id),
            user_id=str(user_id),
            text_length=len(text),
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Edit of non-existent comment", comment_id=str(comment_id))
                raise TargetNotFoundError("Comment", str(comment_id))

            if comment.author_id != user_id:
                logfire.warn(
                    "Unauthorized comment edit attempt",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                    author_id=str(comment.author_id),
                )
                raise NotAuthorizedError("comment", str(comment_id), str(user_id))

            if comment.deleted:
                logfire.warn("Edit of deleted comment", comment_id=str(comment_id))
                raise TargetNotFoundError("Comment", str(comment_id))

            await self.post_service.get_live_post(comment.post_id)

            saved = await self.comment_repository.save_content(
                comment.edit(text, datetime.now())
            )
            logfire.info(
                "Comment updated",
                comment_id=str(comment_id),
                post_id=str(comment.post_id),
                text_length=len(text),
            )
            return saved

    async def delete_comment(
        self, comment_id: CommentId, user_id: UserId | None
    ) -> Comment:
        """Tombstone a comment.

        The row is kept so replies keep their parent. Deleting an already
        tombstoned comment is a no-op.

        Args:
            comment_id: Comment ID
            user_id: Acting user (must be the author)

        Returns:
            The tombstoned comment

        Raises:
            NotAuthenticatedError: If there is no acting user
            TargetNotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the author
        """
        if user_id is None:
            raise NotAuthenticatedError("delete a comment")

        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn(
                    "Delete of non-existent comment", comment_id=str(comment_id)
                )
                raise TargetNotFoundError("Comment", str(comment_id))

            if comment.author_id != user_id:
                logfire.warn(
                    "Unauthorized comment delete attempt",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                    author_id=str(comment.author_id),
                )
                raise NotAuthorizedError("comment", str(comment_id), str(user_id))

            if comment.deleted:
                return comment

            saved = await self.comment_repository.save_content(
                comment.tombstone(datetime.now())
            )
            await self.post_service.adjust_comment_count(comment.post_id, -1)

            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                post_id=str(comment.post_id),
            )
            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID (tombstones included).

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            return await self.comment_repository.find_by_id(comment_id)

    async def get_comments_for_post(
        self, post_id: PostId, include_deleted: bool = True
    ) -> list[Comment]:
        """Get all comments for a post as a flat list.

        Args:
            post_id: Post ID
            include_deleted: Whether to include tombstoned comments

        Returns:
            Flat list of comments, oldest first
        """
        with logfire.span(
            "comment_service.get_comments_for_post",
            post_id=str(post_id),
            include_deleted=include_deleted,
        ):
            comments = await self.comment_repository.find_by_post(
                post_id=post_id,
                include_deleted=include_deleted,
            )
            logfire.info(
                "Comments retrieved for post",
                post_id=str(post_id),
                count=len(comments),
            )
            return comments

    async def build_tree(
        self, post_id: PostId, max_depth: int | None = None
    ) -> list[CommentNode]:
        """Build the ordered comment forest of a post.

        Args:
            post_id: Post ID
            max_depth: Number of levels to include (defaults to configured depth)

        Returns:
            Root nodes in sibling order

        Raises:
            TargetNotFoundError: If the post is missing or deleted
        """
        depth = self.settings.default_tree_depth if max_depth is None else max_depth
        with logfire.span(
            "comment_service.build_tree", post_id=str(post_id), max_depth=depth
        ):
            await self.post_service.get_live_post(post_id)
            comments = await self.get_comments_for_post(post_id)
            return build_comment_tree(comments, depth)
