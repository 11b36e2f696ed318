"""Get user vote use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase, to_user_id
from forum.domain.service import VoteService
from forum.domain.value import VotableType, VoteDirection


class GetUserVoteRequest(BaseModel):
    """Get user vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    user_id: str | None = None


class GetUserVoteResponse(BaseModel):
    """Get user vote response."""

    votable_type: VotableType
    votable_id: str
    direction: VoteDirection | None


class GetUserVoteUseCase(BaseUseCase):
    """Use case for reading the acting user's vote on an item."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: GetUserVoteRequest) -> GetUserVoteResponse:
        """Execute get user vote flow.

        Anonymous callers always get ``direction=None``.
        """
        direction = await self.vote_service.get_user_vote(
            to_user_id(request.user_id),
            request.votable_type,
            UUID(request.votable_id),
        )
        return GetUserVoteResponse(
            votable_type=request.votable_type,
            votable_id=request.votable_id,
            direction=direction,
        )
