"""User domain service."""

from typing import Sequence

import logfire

from carpool.domain.error import NotFoundError
from carpool.domain.model import User
from carpool.domain.model.common import utcnow
from carpool.domain.repository import UserRepository
from carpool.domain.value import PublicProfile, UserId
from carpool.domain.value.types import Handle

from .base import Service

UNKNOWN_HANDLE = Handle("unknown")


class UserService(Service):
    """Domain service for mirrored user profiles."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def sync_profile(
        self, user_id: UserId, handle: Handle, email: str | None
    ) -> User:
        """Mirror the profile asserted by the identity provider.

        Args:
            user_id: Identity provider user ID
            handle: Display handle
            email: Email address, if known

        Returns:
            Stored user
        """
        with logfire.span("user_service.sync_profile", user_id=str(user_id)):
            existing = await self.user_repository.find_by_id(user_id)
            if existing and existing.handle == handle and existing.email == email:
                return existing

            user = User(
                id=user_id,
                handle=handle,
                email=email,
                created_at=existing.created_at if existing else utcnow(),
                updated_at=utcnow(),
            )
            saved = await self.user_repository.upsert(user)
            logfire.info(
                "User profile synced",
                user_id=str(user_id),
                handle=handle.root,
                created=existing is None,
            )
            return saved

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_public_profiles(
        self, user_ids: Sequence[UserId]
    ) -> dict[UserId, PublicProfile]:
        """Get public profiles for several users.

        Users that were never mirrored get a placeholder handle so listings
        stay complete.

        Args:
            user_ids: Users to look up

        Returns:
            Mapping of user ID to public profile, one entry per requested ID
        """
        if not user_ids:
            return {}

        users = await self.user_repository.find_by_ids(list(dict.fromkeys(user_ids)))
        profiles: dict[UserId, PublicProfile] = {}
        for user_id in user_ids:
            user = users.get(user_id)
            if user:
                profiles[user_id] = user.public_profile()
            else:
                logfire.warn("Profile missing for user", user_id=str(user_id))
                profiles[user_id] = PublicProfile(id=user_id, handle=UNKNOWN_HANDLE)
        return profiles

    async def get_public_profile(self, user_id: UserId) -> PublicProfile:
        """Get the public profile of one user."""
        profiles = await self.get_public_profiles([user_id])
        return profiles[user_id]
