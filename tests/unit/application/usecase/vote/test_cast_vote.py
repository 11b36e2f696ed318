"""Unit tests for the vote use cases."""

from uuid import uuid4

import pytest

from forum.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    GetUserVoteRequest,
    GetUserVoteUseCase,
)
from forum.domain.error import NotAuthenticatedError, TargetNotFoundError
from forum.domain.repository import PostRepository, UserRepository
from forum.domain.value import VotableType, VoteDirection
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_vote_then_toggle_off(self, unit_env):
        """Voting the same way twice reports created then removed."""
        # Arrange
        cast_vote = await unit_env.get(CastVoteUseCase)
        user_repo = await unit_env.get(UserRepository)
        post_repo = await unit_env.get(PostRepository)
        author = await user_repo.save(make_user())
        post = await post_repo.save(make_post(author_id=author.id))
        request = CastVoteRequest(
            votable_type=VotableType.POST,
            votable_id=str(post.id),
            direction=VoteDirection.UP,
            user_id=str(uuid4()),
        )

        # Act
        first = await cast_vote.execute(request)
        second = await cast_vote.execute(request)

        # Assert
        assert first.result == "created"
        assert first.direction == VoteDirection.UP
        assert (first.upvotes, first.score, first.author_reputation) == (1, 1, 10)
        assert second.result == "removed"
        assert second.direction is None
        assert (second.upvotes, second.score, second.author_reputation) == (0, 0, 0)
        assert second.votable_id == str(post.id)

    @pytest.mark.asyncio
    async def test_anonymous_vote_rejected(self, unit_env):
        cast_vote = await unit_env.get(CastVoteUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        with pytest.raises(NotAuthenticatedError):
            await cast_vote.execute(
                CastVoteRequest(
                    votable_type=VotableType.POST,
                    votable_id=str(post.id),
                    direction=VoteDirection.DOWN,
                )
            )

    @pytest.mark.asyncio
    async def test_unknown_comment_rejected(self, unit_env):
        cast_vote = await unit_env.get(CastVoteUseCase)

        with pytest.raises(TargetNotFoundError):
            await cast_vote.execute(
                CastVoteRequest(
                    votable_type=VotableType.COMMENT,
                    votable_id=str(uuid4()),
                    direction=VoteDirection.UP,
                    user_id=str(uuid4()),
                )
            )

    def test_direction_must_be_known(self):
        """Only up and down are valid directions."""
        with pytest.raises(ValueError):
            CastVoteRequest(
                votable_type=VotableType.POST,
                votable_id=str(uuid4()),
                direction="sideways",
            )


class TestGetUserVoteUseCase:
    """Tests for GetUserVoteUseCase."""

    @pytest.mark.asyncio
    async def test_reports_current_direction(self, unit_env):
        """The viewer sees their own live vote; anonymous viewers see none."""
        # Arrange
        cast_vote = await unit_env.get(CastVoteUseCase)
        get_user_vote = await unit_env.get(GetUserVoteUseCase)
        user_repo = await unit_env.get(UserRepository)
        post_repo = await unit_env.get(PostRepository)
        author = await user_repo.save(make_user())
        post = await post_repo.save(make_post(author_id=author.id))
        voter = str(uuid4())
        await cast_vote.execute(
            CastVoteRequest(
                votable_type=VotableType.POST,
                votable_id=str(post.id),
                direction=VoteDirection.DOWN,
                user_id=voter,
            )
        )

        # Act
        mine = await get_user_vote.execute(
            GetUserVoteRequest(
                votable_type=VotableType.POST, votable_id=str(post.id), user_id=voter
            )
        )
        anonymous = await get_user_vote.execute(
            GetUserVoteRequest(votable_type=VotableType.POST, votable_id=str(post.id))
        )

        # Assert
        assert mine.direction == VoteDirection.DOWN
        assert anonymous.direction is None
