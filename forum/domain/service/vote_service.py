"""Vote domain service.

Coordinates one logical vote: the ledger records the transition and
recounts the target, then the author's reputation and the owning post's
activity time are updated outside the ledger's lock.
"""

from uuid import UUID

import logfire

from forum.domain.value import (
    PostId,
    UserId,
    VotableType,
    VoteDirection,
    VoteTransition,
)
from forum.domain.value.common import ValueObject

from .base import Service
from .post_service import PostService
from .reputation_service import ReputationService
from .vote_ledger import VoteCast, VoteLedger


class VoteOutcome(ValueObject):
    """Caller-visible result of casting a vote.

    ``result`` is one of "created", "updated" or "removed". ``direction`` is
    the voter's live direction afterwards (None once removed).
    """

    result: str
    transition: VoteTransition
    direction: VoteDirection | None = None
    upvotes: int
    downvotes: int
    score: int
    author_reputation: int


class VoteService(Service):
    """Domain service for vote operations."""

    def __init__(
        self,
        vote_ledger: VoteLedger,
        reputation_service: ReputationService,
        post_service: PostService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_ledger: Vote ledger
            reputation_service: Reputation domain service
            post_service: Post domain service (activity propagation)
        """
        self.vote_ledger = vote_ledger
        self.reputation_service = reputation_service
        self.post_service = post_service

    async def cast_vote(
        self,
        user_id: UserId | None,
        votable_type: VotableType,
        votable_id: UUID,
        direction: VoteDirection,
    ) -> VoteOutcome:
        """Cast a vote on a post or comment.

        Casting the same direction twice removes the vote; casting the other
        direction flips it.

        Args:
            user_id: Acting voter
            votable_type: Type of item (post or comment)
            votable_id: ID of the item
            direction: Direction being cast

        Returns:
            Outcome with the new tallies and the author's reputation

        Raises:
            NotAuthenticatedError: If there is no acting voter
            TargetNotFoundError: If the item does not exist or is deleted
            InvariantViolationError: If the ledger could not record the vote
            NotFoundError: If the item's author no longer exists
        """
        with logfire.span(
            "vote_service.cast_vote",
            user_id=str(user_id) if user_id else None,
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            direction=direction.value,
        ):
            cast = await self.vote_ledger.cast(
                user_id, votable_type, votable_id, direction
            )
            reputation = await self._apply_reputation(cast)
            await self.post_service.touch_activity(PostId(cast.target.post_id))

            outcome = VoteOutcome(
                result=cast.transition.result,
                transition=cast.transition,
                direction=cast.vote.direction if cast.vote else None,
                upvotes=cast.target.upvotes,
                downvotes=cast.target.downvotes,
                score=cast.target.score,
                author_reputation=reputation,
            )
            logfire.info(
                "Vote cast",
                user_id=str(user_id),
                votable_id=str(votable_id),
                result=outcome.result,
                score=outcome.score,
            )
            return outcome

    async def get_user_vote(
        self,
        user_id: UserId | None,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> VoteDirection | None:
        """Get the direction of a user's vote on an item, if any."""
        return await self.vote_ledger.get_user_vote(user_id, votable_type, votable_id)

    async def _apply_reputation(self, cast: VoteCast) -> int:
        target = cast.target
        author_id = target.author_id

        if cast.transition == VoteTransition.CREATED:
            return await self.reputation_service.apply(
                target.votable_type, cast.direction, author_id, is_adding=True
            )

        # RETRACTED and FLIPPED both carry the direction being undone
        previous = cast.previous_direction or cast.direction
        reputation = await self.reputation_service.apply(
            target.votable_type, previous, author_id, is_adding=False
        )
        if cast.transition == VoteTransition.FLIPPED:
            reputation = await self.reputation_service.apply(
                target.votable_type, cast.direction, author_id, is_adding=True
            )
        return reputation
