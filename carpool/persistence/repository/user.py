"""PostgreSQL implementation of User repository."""

from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from carpool.domain.model import User
from carpool.domain.repository import UserRepository
from carpool.domain.value import UserId
from carpool.persistence.mappers import row_to_user, user_to_dict
from carpool.persistence.tables import users_table


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

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> dict[UserId, User]:
        """Find several users at once (batch query)."""
        if not user_ids:
            return {}

        stmt = select(users_table).where(users_table.c.id.in_(user_ids))
        result = await self.session.execute(stmt)
        users = [row_to_user(dict(row)) for row in result.mappings().all()]
        return {user.id: user for user in users}

    async def upsert(self, user: User) -> User:
        """Insert the user or refresh handle and email.

        A single INSERT ... ON CONFLICT keeps concurrent first requests of the
        same user from colliding.
        """
        user_dict = user_to_dict(user)
        stmt = (
            insert(users_table)
            .values(**user_dict)
            .on_conflict_do_update(
                index_elements=[users_table.c.id],
                set_={
                    "handle": user_dict["handle"],
                    "email": user_dict["email"],
                    "updated_at": user_dict["updated_at"],
                },
            )
            .returning(users_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().one()
        await self.session.flush()
        return row_to_user(dict(row))
