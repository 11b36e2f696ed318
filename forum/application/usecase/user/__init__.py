"""User use cases."""

from .create_user import CreateUserRequest, CreateUserResponse, CreateUserUseCase
from .get_user import GetUserRequest, GetUserResponse, GetUserUseCase

__all__ = [
    "CreateUserRequest",
    "CreateUserResponse",
    "CreateUserUseCase",
    "GetUserRequest",
    "GetUserResponse",
    "GetUserUseCase",
]
