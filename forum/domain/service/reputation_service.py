"""Reputation domain service.

Translates vote transitions into reputation changes for the author of the
voted content. Weights are asymmetric: downvotes cost less than upvotes earn,
and posts are worth more than comments.

    post     up +10   down -2
    comment  up  +5   down -1

Reputation is clamped at zero, which makes the adjustment lossy: undoing a
vote on an author already at the floor does not restore the hidden negative
remainder.
"""

import logfire

from forum.domain.error import NotFoundError
from forum.domain.repository import UserRepository
from forum.domain.value import UserId, VotableType, VoteDirection
from forum.util.locks import UserLocks

from .base import Service


def reputation_delta(
    votable_type: VotableType, direction: VoteDirection, is_adding: bool
) -> int:
    """Signed reputation change for adding or removing one vote.

    Args:
        votable_type: Kind of content voted on
        direction: Direction of the vote
        is_adding: False to undo a previously applied vote

    Returns:
        Reputation change
    """
    if votable_type == VotableType.POST:
        delta = 10 if direction == VoteDirection.UP else -2
    else:  # VotableType.COMMENT
        delta = 5 if direction == VoteDirection.UP else -1

    return delta if is_adding else -delta


class ReputationService(Service):
    """Domain service for author reputation."""

    def __init__(
        self, user_repository: UserRepository, user_locks: UserLocks
    ) -> None:
        """Initialize reputation service.

        Args:
            user_repository: User repository
            user_locks: Per-user lock registry shared across requests
        """
        self.user_repository = user_repository
        self.user_locks = user_locks

    async def apply(
        self,
        votable_type: VotableType,
        direction: VoteDirection,
        author_id: UserId,
        is_adding: bool,
    ) -> int:
        """Apply one vote's reputation effect to an author.

        Args:
            votable_type: Kind of content voted on
            direction: Direction of the vote being added or removed
            author_id: Author of the voted content
            is_adding: True to apply, False to undo

        Returns:
            The author's new reputation

        Raises:
            NotFoundError: If the author does not exist
        """
        delta = reputation_delta(votable_type, direction, is_adding)
        with logfire.span(
            "reputation_service.apply",
            author_id=str(author_id),
            votable_type=votable_type.value,
            direction=direction.value,
            is_adding=is_adding,
            delta=delta,
        ):
            async with self.user_locks.hold(author_id):
                reputation = await self.user_repository.adjust_reputation(
                    author_id, delta
                )

            if reputation is None:
                logfire.warn(
                    "Reputation change for unknown user", author_id=str(author_id)
                )
                raise NotFoundError("User", str(author_id))

            logfire.info(
                "Reputation updated",
                author_id=str(author_id),
                delta=delta,
                reputation=reputation,
            )
            return reputation
