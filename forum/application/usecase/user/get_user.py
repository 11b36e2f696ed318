"""Get user use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import UserService
from forum.domain.value import UserId


class GetUserRequest(BaseModel):
    """Get user request."""

    user_id: str  # UUID string


class GetUserResponse(BaseModel):
    """Get user response."""

    user_id: str
    handle: str
    reputation: int
    created_at: datetime


class GetUserUseCase(BaseUseCase):
    """Use case for reading a user's profile and reputation."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetUserRequest) -> GetUserResponse:
        """Execute get user flow.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        return GetUserResponse(
            user_id=str(user.id),
            handle=user.handle.root,
            reputation=user.reputation,
            created_at=user.created_at,
        )
