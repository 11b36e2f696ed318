"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from forum.domain.model.vote import Vote
from forum.domain.value import UserId, VotableType, VoteDirection, VoteId


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's live vote on a specific item.

        Args:
            user_id: The voter's ID
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            The vote if one exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query).

        Args:
            user_id: The voter's ID
            votable_type: Type of items (post or comment)
            votable_ids: IDs of the items to check

        Returns:
            Votes by the user on the given items
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Save a vote (insert, or update the vote with the same ID).

        Args:
            vote: The vote to save

        Returns:
            The saved vote

        Raises:
            IntegrityError: If a different vote already exists for this
                user/votable combination (unique constraint violation)
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote.

        Args:
            vote_id: The vote ID to delete

        Returns:
            True if a vote was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def count_by_votable(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        direction: VoteDirection,
    ) -> int:
        """Count live votes of one direction on an item.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item
            direction: Vote direction to count

        Returns:
            Number of votes
        """
        pass
