"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from carpool.domain.model.user import User
from carpool.domain.value import UserId


class UserRepository(ABC):
    """Repository for mirrored user profiles."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> dict[UserId, User]:
        """Find several users at once (batch query).

        Args:
            user_ids: IDs to look up

        Returns:
            Mapping of ID to user for the IDs that exist
        """
        pass

    @abstractmethod
    async def upsert(self, user: User) -> User:
        """Create the user or refresh its handle and email.

        Args:
            user: Profile as asserted by the identity provider

        Returns:
            The stored user
        """
        pass
