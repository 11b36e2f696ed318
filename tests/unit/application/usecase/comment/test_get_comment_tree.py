"""Unit tests for GetCommentTreeUseCase."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from forum.application.usecase.comment import (
    GetCommentTreeRequest,
    GetCommentTreeUseCase,
)
from forum.domain.error import TargetNotFoundError
from forum.domain.repository import CommentRepository, PostRepository, UserRepository
from forum.domain.service import VoteService
from forum.domain.value import UserId, VotableType, VoteDirection
from tests.conftest import make_comment, make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

T0 = datetime(2024, 6, 1, 12, 0, 0)


class TestGetCommentTreeUseCase:
    """Tests for GetCommentTreeUseCase."""

    @pytest.mark.asyncio
    async def test_nested_tree_with_viewer_votes(self, unit_env):
        """Replies nest under parents and the viewer's votes are annotated."""
        # Arrange
        get_tree = await unit_env.get(GetCommentTreeUseCase)
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)

        author = await user_repo.save(make_user())
        post = await post_repo.save(make_post())
        c1 = await comment_repo.save(
            make_comment(post.id, author_id=author.id, created_at=T0)
        )
        c2 = await comment_repo.save(
            make_comment(post.id, parent=c1, created_at=T0 + timedelta(minutes=1))
        )
        c3 = await comment_repo.save(
            make_comment(post.id, parent=c2, created_at=T0 + timedelta(minutes=2))
        )
        viewer = UserId(uuid4())
        await vote_service.cast_vote(
            viewer, VotableType.COMMENT, c1.id, VoteDirection.UP
        )

        # Act
        response = await get_tree.execute(
            GetCommentTreeRequest(
                post_id=str(post.id), max_depth=2, user_id=str(viewer)
            )
        )

        # Assert
        assert response.total == 2
        [root] = response.comments
        assert root.comment_id == str(c1.id)
        assert root.user_vote == VoteDirection.UP
        assert root.score == 1
        [reply] = root.replies
        assert reply.comment_id == str(c2.id)
        assert reply.user_vote is None
        assert reply.replies == []

        deeper = await get_tree.execute(
            GetCommentTreeRequest(post_id=str(post.id), max_depth=3)
        )
        assert deeper.comments[0].replies[0].replies[0].comment_id == str(c3.id)
        assert deeper.comments[0].user_vote is None

    @pytest.mark.asyncio
    async def test_zero_depth_is_empty(self, unit_env):
        get_tree = await unit_env.get(GetCommentTreeUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = await post_repo.save(make_post())
        await comment_repo.save(make_comment(post.id))

        response = await get_tree.execute(
            GetCommentTreeRequest(post_id=str(post.id), max_depth=0)
        )

        assert response.comments == []
        assert response.total == 0

    @pytest.mark.asyncio
    async def test_tombstones_are_shown(self, unit_env):
        """Deleted comments appear redacted so their replies stay attached."""
        # Arrange
        get_tree = await unit_env.get(GetCommentTreeUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = await post_repo.save(make_post())
        root = make_comment(post.id, created_at=T0)
        await comment_repo.save(root.tombstone(T0 + timedelta(hours=1)))
        await comment_repo.save(
            make_comment(post.id, parent=root, created_at=T0 + timedelta(minutes=5))
        )

        # Act
        response = await get_tree.execute(GetCommentTreeRequest(post_id=str(post.id)))

        # Assert
        assert response.comments[0].deleted is True
        assert response.comments[0].text == "[deleted]"
        assert len(response.comments[0].replies) == 1

    @pytest.mark.asyncio
    async def test_unknown_post(self, unit_env):
        get_tree = await unit_env.get(GetCommentTreeUseCase)

        with pytest.raises(TargetNotFoundError):
            await get_tree.execute(GetCommentTreeRequest(post_id=str(uuid4())))
