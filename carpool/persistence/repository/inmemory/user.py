"""In-memory user repository for testing."""

from typing import Optional, Sequence

from carpool.domain.model.user import User
from carpool.domain.repository.user import UserRepository
from carpool.domain.value import UserId

from .store import InMemoryStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._store.users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> dict[UserId, User]:
        """Find several users at once."""
        return {
            user_id: self._store.users[user_id]
            for user_id in user_ids
            if user_id in self._store.users
        }

    async def upsert(self, user: User) -> User:
        """Insert or refresh a user, keeping the original created_at."""
        existing = self._store.users.get(user.id)
        if existing:
            user = user.model_copy(update={"created_at": existing.created_at})
        self._store.users[user.id] = user
        return user
