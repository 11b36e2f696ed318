"""Unit tests for the post use cases."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from forum.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsUseCase,
)
from forum.domain.error import NotAuthenticatedError, TargetNotFoundError
from forum.domain.repository import PostRepository, UserRepository
from forum.domain.service import VoteService
from forum.domain.value import PostSortOrder, UserId, VotableType, VoteDirection
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreatePostUseCase:
    """Tests for CreatePostUseCase."""

    @pytest.mark.asyncio
    async def test_create_and_fetch(self, unit_env):
        """A created post can be fetched back."""
        # Arrange
        create_post = await unit_env.get(CreatePostUseCase)
        get_post = await unit_env.get(GetPostUseCase)
        author_id = str(uuid4())

        # Act
        created = await create_post.execute(
            CreatePostRequest(title="Hello", text="World", user_id=author_id)
        )
        fetched = await get_post.execute(GetPostRequest(post_id=created.post_id))

        # Assert
        assert created.author_id == author_id
        assert fetched.title == "Hello"
        assert (fetched.score, fetched.comment_count) == (0, 0)
        assert fetched.user_vote is None

    @pytest.mark.asyncio
    async def test_anonymous_post_rejected(self, unit_env):
        create_post = await unit_env.get(CreatePostUseCase)

        with pytest.raises(NotAuthenticatedError):
            await create_post.execute(CreatePostRequest(title="Hi", text="There"))

    def test_blank_title_rejected(self):
        with pytest.raises(ValueError):
            CreatePostRequest(title="", text="Body", user_id=str(uuid4()))


class TestGetPostUseCase:
    """Tests for GetPostUseCase."""

    @pytest.mark.asyncio
    async def test_deleted_post_not_found(self, unit_env):
        get_post = await unit_env.get(GetPostUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(deleted_at=datetime.now()))

        with pytest.raises(TargetNotFoundError):
            await get_post.execute(GetPostRequest(post_id=str(post.id)))


class TestListPostsUseCase:
    """Tests for ListPostsUseCase."""

    @pytest.mark.asyncio
    async def test_top_listing_with_viewer_votes(self, unit_env):
        """Listings carry tallies and the viewer's own direction."""
        # Arrange
        list_posts = await unit_env.get(ListPostsUseCase)
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        post_repo = await unit_env.get(PostRepository)

        author = await user_repo.save(make_user())
        later = datetime.now() + timedelta(hours=1)
        liked = await post_repo.save(make_post(author_id=author.id))
        ignored = await post_repo.save(
            make_post(author_id=author.id, created_at=later)
        )
        viewer = UserId(uuid4())
        await vote_service.cast_vote(
            viewer, VotableType.POST, liked.id, VoteDirection.UP
        )

        # Act
        response = await list_posts.execute(
            ListPostsRequest(sort=PostSortOrder.TOP, user_id=str(viewer))
        )

        # Assert
        assert [p.post_id for p in response.posts] == [str(liked.id), str(ignored.id)]
        assert response.posts[0].user_vote == VoteDirection.UP
        assert response.posts[0].score == 1
        assert response.posts[1].user_vote is None
        assert response.sort == PostSortOrder.TOP

    @pytest.mark.asyncio
    async def test_pagination(self, unit_env):
        list_posts = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        now = datetime.now()
        for hours in range(5):
            await post_repo.save(make_post(created_at=now - timedelta(hours=hours)))

        response = await list_posts.execute(ListPostsRequest(limit=2, offset=3))

        assert len(response.posts) == 2
        assert (response.limit, response.offset) == (2, 3)

    def test_limit_bounds(self):
        """Page size is between 1 and 100."""
        with pytest.raises(ValueError):
            ListPostsRequest(limit=0)
        with pytest.raises(ValueError):
            ListPostsRequest(limit=101)
        with pytest.raises(ValueError):
            ListPostsRequest(offset=-1)
