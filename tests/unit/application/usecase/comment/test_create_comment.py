"""Unit tests for the comment use cases."""

from uuid import uuid4

import pytest

from forum.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
)
from forum.domain.error import DepthExceededError, NotAuthorizedError
from forum.domain.repository import CommentRepository, PostRepository
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_create_reply(self, unit_env):
        """A reply reports its parent and level."""
        # Arrange
        create_comment = await unit_env.get(CreateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        user_id = str(uuid4())

        root = await create_comment.execute(
            CreateCommentRequest(post_id=str(post.id), text="Root", user_id=user_id)
        )

        # Act
        reply = await create_comment.execute(
            CreateCommentRequest(
                post_id=str(post.id),
                text="Reply",
                parent_id=root.comment_id,
                user_id=user_id,
            )
        )

        # Assert
        assert root.parent_id is None
        assert root.level == 0
        assert reply.parent_id == root.comment_id
        assert reply.level == 1
        assert reply.author_id == user_id
        assert (await post_repo.find_by_id(post.id)).comment_count == 2

    @pytest.mark.asyncio
    async def test_depth_exceeded(self, unit_env):
        """Replies past the deepest level are refused."""
        # Arrange
        create_comment = await unit_env.get(CreateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = await post_repo.save(make_post())
        deep = await comment_repo.save(
            make_comment(post.id).model_copy(update={"level": 10})
        )

        # Act & Assert
        with pytest.raises(DepthExceededError):
            await create_comment.execute(
                CreateCommentRequest(
                    post_id=str(post.id),
                    text="Too deep",
                    parent_id=str(deep.id),
                    user_id=str(uuid4()),
                )
            )

    def test_empty_text_rejected(self):
        with pytest.raises(ValueError):
            CreateCommentRequest(post_id=str(uuid4()), text="")


class TestDeleteCommentUseCase:
    """Tests for DeleteCommentUseCase."""

    @pytest.mark.asyncio
    async def test_author_deletes(self, unit_env):
        """The author can delete and the response says so."""
        # Arrange
        create_comment = await unit_env.get(CreateCommentUseCase)
        delete_comment = await unit_env.get(DeleteCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        user_id = str(uuid4())
        created = await create_comment.execute(
            CreateCommentRequest(post_id=str(post.id), text="Bye", user_id=user_id)
        )

        # Act
        response = await delete_comment.execute(
            DeleteCommentRequest(comment_id=created.comment_id, user_id=user_id)
        )

        # Assert
        assert response.deleted is True
        assert response.post_id == str(post.id)

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, unit_env):
        create_comment = await unit_env.get(CreateCommentUseCase)
        delete_comment = await unit_env.get(DeleteCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        created = await create_comment.execute(
            CreateCommentRequest(
                post_id=str(post.id), text="Mine", user_id=str(uuid4())
            )
        )

        with pytest.raises(NotAuthorizedError):
            await delete_comment.execute(
                DeleteCommentRequest(
                    comment_id=created.comment_id, user_id=str(uuid4())
                )
            )
