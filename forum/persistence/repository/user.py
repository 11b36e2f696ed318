"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import case, select
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import User
from forum.domain.repository import UserRepository
from forum.domain.value import UserId
from forum.persistence.mappers import row_to_user, user_to_dict
from forum.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        # Check if user exists
        existing = await self.find_by_id(user.id)

        user_dict = user_to_dict(user)

        if existing:
            # Update
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
            await self.session.execute(stmt)
        else:
            # Insert
            stmt = users_table.insert().values(**user_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return user

    async def adjust_reputation(self, user_id: UserId, delta: int) -> Optional[int]:
        """Atomically add ``delta`` to the user's reputation (minimum 0).

        Args:
            user_id: User ID to update
            delta: Reputation change

        Returns:
            New reputation, or None if the user does not exist
        """
        merged = users_table.c.reputation + delta
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values(reputation=case((merged > 0, merged), else_=0))
            .returning(users_table.c.reputation)
        )
        result = await self.session.execute(stmt)
        reputation = result.scalar_one_or_none()
        await self.session.flush()
        return reputation
