"""Unit tests for the vote ledger state machine and its concurrency."""

import asyncio
from datetime import datetime
from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from forum.config import VotingSettings
from forum.domain.error import (
    InvariantViolationError,
    NotAuthenticatedError,
    TargetNotFoundError,
)
from forum.domain.model import Vote
from forum.domain.service import VoteLedger
from forum.domain.value import (
    UserId,
    VotableType,
    VoteDirection,
    VoteId,
    VoteTransition,
)
from forum.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryDatabase,
    InMemoryPostRepository,
    InMemoryVoteRepository,
)
from forum.util.locks import TargetLocks
from tests.conftest import make_comment, make_post

UP = VoteDirection.UP
DOWN = VoteDirection.DOWN
POST = VotableType.POST


class YieldingVoteRepository(InMemoryVoteRepository):
    """Gives way to the event loop on every call to widen race windows."""

    async def find_by_user_and_votable(self, user_id, votable_type, votable_id):
        await asyncio.sleep(0)
        return await super().find_by_user_and_votable(
            user_id, votable_type, votable_id
        )

    async def save(self, vote: Vote) -> Vote:
        await asyncio.sleep(0)
        return await super().save(vote)

    async def delete(self, vote_id: VoteId) -> bool:
        await asyncio.sleep(0)
        return await super().delete(vote_id)


class ConflictingVoteRepository(InMemoryVoteRepository):
    """Raises a uniqueness violation on the first ``failures`` saves."""

    def __init__(self, database: InMemoryDatabase, failures: int) -> None:
        super().__init__(database)
        self.failures = failures
        self.save_calls = 0

    async def save(self, vote: Vote) -> Vote:
        self.save_calls += 1
        if self.save_calls <= self.failures:
            raise IntegrityError("Duplicate vote", None, Exception())
        return await super().save(vote)


class StaleDeleteVoteRepository(InMemoryVoteRepository):
    """Reports the first delete as a miss, as if another writer got there."""

    def __init__(self, database: InMemoryDatabase) -> None:
        super().__init__(database)
        self.delete_calls = 0

    async def delete(self, vote_id: VoteId) -> bool:
        self.delete_calls += 1
        if self.delete_calls == 1:
            return False
        return await super().delete(vote_id)


class UncountedVoteRepository(InMemoryVoteRepository):
    """Loses every vote when counting."""

    async def count_by_votable(self, votable_type, votable_id, direction) -> int:
        return 0


@pytest.fixture
def db() -> InMemoryDatabase:
    return InMemoryDatabase()


def make_ledger(
    db: InMemoryDatabase,
    vote_repository: InMemoryVoteRepository | None = None,
    max_attempts: int = 3,
) -> VoteLedger:
    return VoteLedger(
        vote_repository=vote_repository or InMemoryVoteRepository(db),
        post_repository=InMemoryPostRepository(db),
        comment_repository=InMemoryCommentRepository(db),
        target_locks=TargetLocks(),
        settings=VotingSettings(max_attempts=max_attempts),
    )


def seed_post(db: InMemoryDatabase, **fields):
    post = make_post(**fields)
    db.posts[post.id] = post
    return post


class TestTransitions:
    """Tests for the per-voter state machine."""

    @pytest.mark.asyncio
    async def test_first_vote_is_created(self, db):
        """No vote + up -> upvoted."""
        # Arrange
        ledger = make_ledger(db)
        post = seed_post(db)
        voter = UserId(uuid4())

        # Act
        cast = await ledger.cast(voter, POST, post.id, UP)

        # Assert
        assert cast.transition == VoteTransition.CREATED
        assert cast.previous_direction is None
        assert cast.vote.direction == UP
        assert (cast.target.upvotes, cast.target.downvotes) == (1, 0)
        assert db.posts[post.id].upvotes == 1

    @pytest.mark.asyncio
    async def test_same_direction_retracts(self, db):
        """Upvoted + up -> no vote."""
        # Arrange
        ledger = make_ledger(db)
        post = seed_post(db)
        voter = UserId(uuid4())
        await ledger.cast(voter, POST, post.id, UP)

        # Act
        cast = await ledger.cast(voter, POST, post.id, UP)

        # Assert
        assert cast.transition == VoteTransition.RETRACTED
        assert cast.previous_direction == UP
        assert cast.vote is None
        assert cast.target.upvotes == 0
        assert db.votes == {}

    @pytest.mark.asyncio
    async def test_other_direction_flips_in_place(self, db):
        """Upvoted + down -> downvoted, keeping the same vote record."""
        # Arrange
        ledger = make_ledger(db)
        post = seed_post(db)
        voter = UserId(uuid4())
        first = await ledger.cast(voter, POST, post.id, UP)

        # Act
        cast = await ledger.cast(voter, POST, post.id, DOWN)

        # Assert
        assert cast.transition == VoteTransition.FLIPPED
        assert cast.previous_direction == UP
        assert cast.vote.id == first.vote.id
        assert cast.vote.direction == DOWN
        assert (cast.target.upvotes, cast.target.downvotes) == (0, 1)

    @pytest.mark.asyncio
    async def test_tallies_match_live_votes(self, db):
        """Tallies always equal the number of live votes in each direction."""
        # Arrange
        ledger = make_ledger(db)
        post = seed_post(db)
        voters = [UserId(uuid4()) for _ in range(4)]

        # Act
        for voter in voters:
            await ledger.cast(voter, POST, post.id, UP)
        await ledger.cast(voters[0], POST, post.id, DOWN)
        await ledger.cast(voters[1], POST, post.id, UP)

        # Assert
        live = list(db.votes.values())
        stored = db.posts[post.id]
        assert stored.upvotes == sum(1 for v in live if v.direction == UP) == 2
        assert stored.downvotes == sum(1 for v in live if v.direction == DOWN) == 1

    @pytest.mark.asyncio
    async def test_comment_votes_update_comment_tallies(self, db):
        """Votes on comments are counted on the comment, not the post."""
        # Arrange
        ledger = make_ledger(db)
        post = seed_post(db)
        comment = make_comment(post.id)
        db.comments[comment.id] = comment

        # Act
        cast = await ledger.cast(UserId(uuid4()), VotableType.COMMENT, comment.id, DOWN)

        # Assert
        assert cast.target.post_id == post.id
        assert db.comments[comment.id].downvotes == 1
        assert db.posts[post.id].downvotes == 0


class TestRejections:
    """Tests for casts that must not touch the ledger."""

    @pytest.mark.asyncio
    async def test_anonymous_vote_rejected(self, db):
        """A vote needs a voter."""
        ledger = make_ledger(db)
        post = seed_post(db)

        with pytest.raises(NotAuthenticatedError):
            await ledger.cast(None, POST, post.id, UP)
        assert db.votes == {}

    @pytest.mark.asyncio
    async def test_missing_target_rejected(self, db):
        """Voting on a post that does not exist fails."""
        ledger = make_ledger(db)

        with pytest.raises(TargetNotFoundError, match="Post not found"):
            await ledger.cast(UserId(uuid4()), POST, uuid4(), UP)

    @pytest.mark.asyncio
    async def test_deleted_post_rejected(self, db):
        """Deleted posts cannot be voted on."""
        ledger = make_ledger(db)
        post = seed_post(db, deleted_at=datetime.now())

        with pytest.raises(TargetNotFoundError):
            await ledger.cast(UserId(uuid4()), POST, post.id, UP)

    @pytest.mark.asyncio
    async def test_tombstoned_comment_rejected(self, db):
        """Tombstoned comments cannot be voted on."""
        ledger = make_ledger(db)
        post = seed_post(db)
        comment = make_comment(post.id).tombstone(datetime.now())
        db.comments[comment.id] = comment

        with pytest.raises(TargetNotFoundError, match="Comment not found"):
            await ledger.cast(UserId(uuid4()), VotableType.COMMENT, comment.id, UP)


class TestConcurrency:
    """Tests for concurrent casts against one target."""

    @pytest.mark.asyncio
    async def test_same_voter_never_holds_two_votes(self, db):
        """Five concurrent upvotes from one user toggle to a single live vote."""
        # Arrange
        ledger = make_ledger(db, YieldingVoteRepository(db))
        post = seed_post(db)
        voter = UserId(uuid4())

        # Act
        casts = await asyncio.gather(
            *(ledger.cast(voter, POST, post.id, UP) for _ in range(5))
        )

        # Assert
        transitions = [c.transition for c in casts]
        assert transitions.count(VoteTransition.CREATED) == 3
        assert transitions.count(VoteTransition.RETRACTED) == 2
        assert len(db.votes) == 1
        assert db.posts[post.id].upvotes == 1

    @pytest.mark.asyncio
    async def test_distinct_voters_are_all_counted(self, db):
        """N concurrent upvotes from N users leave the post at N."""
        # Arrange
        ledger = make_ledger(db, YieldingVoteRepository(db))
        post = seed_post(db)
        voters = [UserId(uuid4()) for _ in range(20)]

        # Act
        await asyncio.gather(*(ledger.cast(v, POST, post.id, UP) for v in voters))

        # Assert
        assert db.posts[post.id].upvotes == 20
        assert len(db.votes) == 20

    @pytest.mark.asyncio
    async def test_separate_ledgers_share_target_locks(self, db):
        """Requests with their own ledger still serialize on the shared locks."""
        # Arrange
        locks = TargetLocks()
        post = seed_post(db)
        voter = UserId(uuid4())

        def ledger() -> VoteLedger:
            return VoteLedger(
                YieldingVoteRepository(db),
                InMemoryPostRepository(db),
                InMemoryCommentRepository(db),
                locks,
                VotingSettings(),
            )

        # Act
        await asyncio.gather(
            *(ledger().cast(voter, POST, post.id, DOWN) for _ in range(3))
        )

        # Assert
        assert len(db.votes) == 1
        assert db.posts[post.id].downvotes == 1
        assert len(locks) == 0


class TestRetries:
    """Tests for conflict handling inside the ledger."""

    @pytest.mark.asyncio
    async def test_conflict_is_retried(self, db):
        """A single uniqueness conflict is absorbed by a retry."""
        # Arrange
        repo = ConflictingVoteRepository(db, failures=1)
        ledger = make_ledger(db, repo)
        post = seed_post(db)

        # Act
        cast = await ledger.cast(UserId(uuid4()), POST, post.id, UP)

        # Assert
        assert cast.transition == VoteTransition.CREATED
        assert repo.save_calls == 2
        assert db.posts[post.id].upvotes == 1

    @pytest.mark.asyncio
    async def test_persistent_conflict_gives_up(self, db):
        """After max_attempts conflicts the cast fails loudly."""
        # Arrange
        repo = ConflictingVoteRepository(db, failures=100)
        ledger = make_ledger(db, repo, max_attempts=3)
        post = seed_post(db)

        # Act & Assert
        with pytest.raises(InvariantViolationError, match="after 3 attempts"):
            await ledger.cast(UserId(uuid4()), POST, post.id, UP)
        assert repo.save_calls == 3
        assert db.posts[post.id].upvotes == 0

    @pytest.mark.asyncio
    async def test_stale_delete_is_retried(self, db):
        """A retraction whose vote already vanished re-reads and retries."""
        # Arrange
        repo = StaleDeleteVoteRepository(db)
        ledger = make_ledger(db, repo)
        post = seed_post(db)
        voter = UserId(uuid4())
        await ledger.cast(voter, POST, post.id, UP)

        # Act
        cast = await ledger.cast(voter, POST, post.id, UP)

        # Assert
        assert cast.transition == VoteTransition.RETRACTED
        assert repo.delete_calls == 2
        assert db.votes == {}

    @pytest.mark.asyncio
    async def test_recount_disagreement_raises(self, db):
        """A write the recount cannot see is an invariant violation."""
        ledger = make_ledger(db, UncountedVoteRepository(db))
        post = seed_post(db)

        with pytest.raises(InvariantViolationError):
            await ledger.cast(UserId(uuid4()), POST, post.id, UP)


class TestQueries:
    """Tests for user vote lookups."""

    @pytest.mark.asyncio
    async def test_user_vote_lookups(self, db):
        """Lookups return only the items the user voted on."""
        # Arrange
        ledger = make_ledger(db)
        voted = seed_post(db)
        other = seed_post(db)
        voter = UserId(uuid4())
        await ledger.cast(voter, POST, voted.id, DOWN)

        # Act
        single = await ledger.get_user_vote(voter, POST, voted.id)
        batch = await ledger.get_user_votes(voter, POST, [voted.id, other.id])

        # Assert
        assert single == DOWN
        assert batch == {UUID(str(voted.id)): DOWN}
        assert await ledger.get_user_vote(voter, POST, other.id) is None
        assert await ledger.get_user_votes(None, POST, [voted.id]) == {}
