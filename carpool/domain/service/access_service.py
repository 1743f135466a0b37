"""Trip access domain service.

Holds the single trip-authorized predicate shared by trip, participation
and messaging operations: a user is trip-authorized for a trip if they
created it or hold an approved participation in it.
"""

import logfire

from carpool.domain.error import NotAuthorizedError, NotFoundError
from carpool.domain.model import Trip
from carpool.domain.repository import ParticipationRepository, TripRepository
from carpool.domain.value import TripId, UserId

from .base import Service


class AccessService(Service):
    """Domain service for trip-scoped authorization checks."""

    def __init__(
        self,
        trip_repository: TripRepository,
        participation_repository: ParticipationRepository,
    ) -> None:
        """Initialize access service.

        Args:
            trip_repository: Trip repository
            participation_repository: Participation repository
        """
        self.trip_repository = trip_repository
        self.participation_repository = participation_repository

    async def get_trip(self, trip_id: TripId) -> Trip:
        """Load a trip.

        Raises:
            NotFoundError: If the trip does not exist
        """
        trip = await self.trip_repository.find_by_id(trip_id)
        if not trip:
            logfire.warn("Trip not found", trip_id=str(trip_id))
            raise NotFoundError("Trip", str(trip_id))
        return trip

    async def is_trip_authorized(self, trip: Trip, user_id: UserId) -> bool:
        """Check whether a user is the creator or an approved participant.

        Args:
            trip: The trip
            user_id: The user to check

        Returns:
            True if the user may act within the trip
        """
        if trip.is_creator(user_id):
            return True

        participation = await self.participation_repository.find_by_trip_and_user(
            trip.id, user_id
        )
        return participation is not None and participation.is_approved

    async def require_member(self, trip_id: TripId, user_id: UserId, action: str) -> Trip:
        """Load a trip and require the user to be trip-authorized.

        Args:
            trip_id: The trip's ID
            user_id: The acting user
            action: Verb phrase for the error message (e.g. "send messages in")

        Returns:
            The trip

        Raises:
            NotFoundError: If the trip does not exist
            NotAuthorizedError: If the user is neither creator nor approved
        """
        trip = await self.get_trip(trip_id)
        if not await self.is_trip_authorized(trip, user_id):
            logfire.warn(
                "Trip access denied",
                trip_id=str(trip_id),
                user_id=str(user_id),
                action=action,
            )
            raise NotAuthorizedError(action, "trip", str(trip_id), str(user_id))
        return trip

    async def require_creator(
        self, trip_id: TripId, user_id: UserId, action: str
    ) -> Trip:
        """Load a trip and require the user to be its creator.

        Raises:
            NotFoundError: If the trip does not exist
            NotAuthorizedError: If the user did not create the trip
        """
        trip = await self.get_trip(trip_id)
        if not trip.is_creator(user_id):
            logfire.warn(
                "Creator-only action denied",
                trip_id=str(trip_id),
                user_id=str(user_id),
                action=action,
            )
            raise NotAuthorizedError(action, "trip", str(trip_id), str(user_id))
        return trip
