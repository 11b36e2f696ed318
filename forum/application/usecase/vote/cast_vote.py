"""Cast vote use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase, to_user_id
from forum.domain.service import VoteService
from forum.domain.value import VotableType, VoteDirection


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    direction: VoteDirection
    user_id: str | None = None  # Acting user (None if anonymous)


class CastVoteResponse(BaseModel):
    """Cast vote response.

    ``result`` is "created", "updated" or "removed".
    """

    result: str
    votable_type: VotableType
    votable_id: str
    direction: VoteDirection | None
    upvotes: int
    downvotes: int
    score: int
    author_reputation: int


class CastVoteUseCase(BaseUseCase):
    """Use case for voting on a post or comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            Outcome of the vote with the item's new tallies

        Raises:
            NotAuthenticatedError: If there is no acting user
            TargetNotFoundError: If the item does not exist or is deleted
            InvariantViolationError: If the vote could not be recorded consistently
        """
        outcome = await self.vote_service.cast_vote(
            user_id=to_user_id(request.user_id),
            votable_type=request.votable_type,
            votable_id=UUID(request.votable_id),
            direction=request.direction,
        )

        return CastVoteResponse(
            result=outcome.result,
            votable_type=request.votable_type,
            votable_id=request.votable_id,
            direction=outcome.direction,
            upvotes=outcome.upvotes,
            downvotes=outcome.downvotes,
            score=outcome.score,
            author_reputation=outcome.author_reputation,
        )
