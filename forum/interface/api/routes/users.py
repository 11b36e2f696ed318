"""User routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status

from forum.application.usecase.user import (
    CreateUserRequest,
    CreateUserResponse,
    CreateUserUseCase,
    GetUserRequest,
    GetUserResponse,
    GetUserUseCase,
)
from forum.domain.error import DomainError
from forum.interface.error import to_http_exception

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.post(
    "", response_model=CreateUserResponse, status_code=status.HTTP_201_CREATED
)
async def create_user(
    request: CreateUserRequest,
    create_user_use_case: FromDishka[CreateUserUseCase],
) -> CreateUserResponse:
    """Register a user."""
    try:
        return await create_user_use_case.execute(request)
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.get("/{user_id}", response_model=GetUserResponse)
async def get_user(
    user_id: str,
    get_user_use_case: FromDishka[GetUserUseCase],
) -> GetUserResponse:
    """Get a user's profile and reputation.

    Args:
        user_id: User UUID
        get_user_use_case: Get user use case from DI

    Returns:
        User profile
    """
    try:
        return await get_user_use_case.execute(GetUserRequest(user_id=user_id))
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)
