"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from forum.domain.value import UserId


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def to_user_id(value: str | None) -> UserId | None:
    """Parse the acting user's ID; None stays None (anonymous)."""
    return UserId(UUID(value)) if value else None
