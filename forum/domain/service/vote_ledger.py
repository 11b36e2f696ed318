"""Vote ledger.

Owns vote records and the per-(voter, target) state machine:

    no vote   --cast(d)-->      voted(d)         CREATED
    voted(d)  --cast(d)-->      no vote          RETRACTED
    voted(d)  --cast(not d)-->  voted(not d)     FLIPPED

Every cast reads the current vote and writes the outcome while holding the
target's lock, then recomputes the target's tallies from the live votes.
"""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from forum.config import VotingSettings
from forum.domain.error import (
    InvariantViolationError,
    NotAuthenticatedError,
    TargetNotFoundError,
)
from forum.domain.model import VotableTarget, Vote, VoteTally
from forum.domain.repository import CommentRepository, PostRepository, VoteRepository
from forum.domain.value import (
    CommentId,
    PostId,
    UserId,
    VotableType,
    VoteDirection,
    VoteId,
    VoteTransition,
)
from forum.domain.value.common import ValueObject
from forum.util.locks import TargetLocks

from .base import Service


class VoteCast(ValueObject):
    """Result of a single cast against the ledger.

    ``previous_direction`` is the direction of the voter's vote before the
    cast (None for CREATED). ``vote`` is the live vote afterwards (None for
    RETRACTED). ``target`` carries the recomputed tallies.
    """

    transition: VoteTransition
    direction: VoteDirection
    previous_direction: Optional[VoteDirection] = None
    vote: Optional[Vote] = None
    target: VotableTarget


class VoteLedger(Service):
    """Domain service owning vote records and target tallies."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        target_locks: TargetLocks,
        settings: VotingSettings,
    ) -> None:
        """Initialize vote ledger.

        Args:
            vote_repository: Vote repository
            post_repository: Post repository (tallies for post targets)
            comment_repository: Comment repository (tallies for comment targets)
            target_locks: Per-target lock registry shared across requests
            settings: Voting settings
        """
        self.vote_repository = vote_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.target_locks = target_locks
        self.settings = settings

    async def cast(
        self,
        user_id: Optional[UserId],
        votable_type: VotableType,
        votable_id: UUID,
        direction: VoteDirection,
    ) -> VoteCast:
        """Cast a vote and apply the resulting transition.

        Args:
            user_id: Acting voter
            votable_type: Type of item (post or comment)
            votable_id: ID of the item
            direction: Direction being cast

        Returns:
            The transition with the target's recomputed tallies

        Raises:
            NotAuthenticatedError: If there is no acting voter
            TargetNotFoundError: If the item does not exist or is deleted
            InvariantViolationError: If concurrent writers kept conflicting or
                the recomputed state disagrees with the write
        """
        if user_id is None:
            raise NotAuthenticatedError("vote")

        with logfire.span(
            "vote_ledger.cast",
            user_id=str(user_id),
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            direction=direction.value,
        ):
            async with self.target_locks.hold((votable_type, votable_id)):
                for attempt in range(1, self.settings.max_attempts + 1):
                    target = await self._load_target(votable_type, votable_id)
                    try:
                        applied = await self._apply(user_id, target, direction)
                    except IntegrityError:
                        logfire.warn(
                            "Conflicting vote write, retrying",
                            user_id=str(user_id),
                            votable_id=str(votable_id),
                            attempt=attempt,
                        )
                        continue

                    if applied is None:
                        logfire.warn(
                            "Vote vanished before removal, retrying",
                            user_id=str(user_id),
                            votable_id=str(votable_id),
                            attempt=attempt,
                        )
                        continue

                    transition, previous, vote = applied
                    tally = await self._recount(target)
                    await self._verify(user_id, target, vote, tally)

                    logfire.info(
                        "Vote transition applied",
                        user_id=str(user_id),
                        votable_type=votable_type.value,
                        votable_id=str(votable_id),
                        transition=transition.value,
                        upvotes=tally.upvotes,
                        downvotes=tally.downvotes,
                    )
                    return VoteCast(
                        transition=transition,
                        direction=direction,
                        previous_direction=previous,
                        vote=vote,
                        target=target.with_tally(tally.upvotes, tally.downvotes),
                    )

            logfire.error(
                "Vote write kept conflicting",
                user_id=str(user_id),
                votable_id=str(votable_id),
                attempts=self.settings.max_attempts,
            )
            raise InvariantViolationError(
                f"Could not record vote on {votable_type.value} {votable_id} after "
                f"{self.settings.max_attempts} attempts"
            )

    async def get_user_vote(
        self,
        user_id: Optional[UserId],
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[VoteDirection]:
        """Get the direction of a user's live vote on an item.

        Args:
            user_id: Voter (None for anonymous viewers)
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            The vote direction, or None if the user has not voted
        """
        if user_id is None:
            return None
        vote = await self.vote_repository.find_by_user_and_votable(
            user_id, votable_type, votable_id
        )
        return vote.direction if vote else None

    async def get_user_votes(
        self,
        user_id: Optional[UserId],
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> dict[UUID, VoteDirection]:
        """Get a user's vote directions on several items at once.

        Args:
            user_id: Voter (None for anonymous viewers)
            votable_type: Type of items (post or comment)
            votable_ids: IDs of the items

        Returns:
            Mapping of item ID to direction, only for items the user voted on
        """
        if user_id is None or not votable_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        votes = await self.vote_repository.find_by_user_and_votables(
            user_id=user_id,
            votable_type=votable_type,
            votable_ids=votable_ids,
        )
        return {UUID(str(vote.votable_id)): vote.direction for vote in votes}

    async def _load_target(
        self, votable_type: VotableType, votable_id: UUID
    ) -> VotableTarget:
        if votable_type == VotableType.POST:
            post = await self.post_repository.find_by_id(
                PostId(votable_id), for_update=True
            )
            target = VotableTarget.from_post(post) if post else None
        else:  # VotableType.COMMENT
            comment = await self.comment_repository.find_by_id(
                CommentId(votable_id), for_update=True
            )
            target = VotableTarget.from_comment(comment) if comment else None

        if target is None or target.deleted:
            logfire.warn(
                "Vote on missing target",
                votable_type=votable_type.value,
                votable_id=str(votable_id),
            )
            raise TargetNotFoundError(votable_type.value.capitalize(), str(votable_id))
        return target

    async def _apply(
        self, user_id: UserId, target: VotableTarget, direction: VoteDirection
    ) -> Optional[tuple[VoteTransition, Optional[VoteDirection], Optional[Vote]]]:
        """Decide and write the transition; None if the read went stale."""
        existing = await self.vote_repository.find_by_user_and_votable(
            user_id, target.votable_type, target.id
        )
        now = datetime.now()

        if existing is None:
            vote = Vote(
                id=VoteId(uuid4()),
                user_id=user_id,
                votable_type=target.votable_type,
                votable_id=target.id,
                direction=direction,
                created_at=now,
                updated_at=now,
            )
            saved = await self.vote_repository.save(vote)
            return VoteTransition.CREATED, None, saved

        if existing.direction == direction:
            if not await self.vote_repository.delete(existing.id):
                return None
            return VoteTransition.RETRACTED, existing.direction, None

        saved = await self.vote_repository.save(existing.flipped(direction, now))
        return VoteTransition.FLIPPED, existing.direction, saved

    async def _recount(self, target: VotableTarget) -> VoteTally:
        upvotes = await self.vote_repository.count_by_votable(
            target.votable_type, target.id, VoteDirection.UP
        )
        downvotes = await self.vote_repository.count_by_votable(
            target.votable_type, target.id, VoteDirection.DOWN
        )

        if target.votable_type == VotableType.POST:
            await self.post_repository.set_vote_counts(
                PostId(target.id), upvotes, downvotes
            )
        else:  # VotableType.COMMENT
            await self.comment_repository.set_vote_counts(
                CommentId(target.id), upvotes, downvotes
            )

        return VoteTally(upvotes=upvotes, downvotes=downvotes)

    async def _verify(
        self,
        user_id: UserId,
        target: VotableTarget,
        vote: Optional[Vote],
        tally: VoteTally,
    ) -> None:
        """Check the stored vote and tallies agree with what was just written."""
        current = await self.vote_repository.find_by_user_and_votable(
            user_id, target.votable_type, target.id
        )
        expected = vote.direction if vote else None
        actual = current.direction if current else None

        counted = {
            VoteDirection.UP: tally.upvotes,
            VoteDirection.DOWN: tally.downvotes,
        }
        if actual != expected or (expected is not None and counted[expected] < 1):
            logfire.error(
                "Vote ledger state disagrees with recount",
                user_id=str(user_id),
                votable_id=str(target.id),
                expected=expected.value if expected else None,
                actual=actual.value if actual else None,
                upvotes=tally.upvotes,
                downvotes=tally.downvotes,
            )
            raise InvariantViolationError(
                f"Vote by {user_id} on {target.votable_type.value} {target.id} "
                f"is {actual.value if actual else 'absent'} after writing "
                f"{expected.value if expected else 'no vote'}"
            )
