"""In-memory user repository for testing."""

from typing import Optional

from forum.domain.model.user import User
from forum.domain.repository.user import UserRepository
from forum.domain.value import UserId

from .database import InMemoryDatabase


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self._db = database or InMemoryDatabase()

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._db.users.get(user_id)

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._db.users[user.id] = user
        return user

    async def adjust_reputation(self, user_id: UserId, delta: int) -> Optional[int]:
        """Add ``delta`` to the user's reputation (minimum 0)."""
        user = self._db.users.get(user_id)
        if not user:
            return None
        updated_user = user.model_copy(
            update={"reputation": max(0, user.reputation + delta)}
        )
        self._db.users[user_id] = updated_user
        return updated_user.reputation
