"""Create user use case."""

from datetime import datetime

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import UserService
from forum.domain.value import Handle


class CreateUserRequest(BaseModel):
    """Create user request."""

    handle: str


class CreateUserResponse(BaseModel):
    """Create user response."""

    user_id: str
    handle: str
    reputation: int
    created_at: datetime


class CreateUserUseCase(BaseUseCase):
    """Use case for registering a user."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: CreateUserRequest) -> CreateUserResponse:
        """Execute create user flow.

        Raises:
            ValueError: If the handle is empty or too long
        """
        user = await self.user_service.create_user(Handle(request.handle))
        return CreateUserResponse(
            user_id=str(user.id),
            handle=user.handle.root,
            reputation=user.reputation,
            created_at=user.created_at,
        )
