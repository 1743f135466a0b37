"""Participation repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from carpool.domain.model.participation import Participation
from carpool.domain.value import (
    ParticipationId,
    ParticipationStatus,
    TripId,
    UserId,
)


class ParticipationRepository(ABC):
    """Repository for Participation entity.

    The repository is the sole arbiter of the (trip, user) uniqueness
    invariant.
    """

    @abstractmethod
    async def find_by_id(
        self, participation_id: ParticipationId
    ) -> Optional[Participation]:
        """Find a participation by ID.

        Args:
            participation_id: The participation's unique identifier

        Returns:
            The participation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_trip_and_user(
        self, trip_id: TripId, user_id: UserId
    ) -> Optional[Participation]:
        """Find the participation of a user in a trip.

        Args:
            trip_id: The trip's ID
            user_id: The user's ID

        Returns:
            The participation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_trip(
        self, trip_id: TripId, status: Optional[ParticipationStatus] = None
    ) -> List[Participation]:
        """Find participations of a trip ordered by creation time.

        Args:
            trip_id: The trip's ID
            status: Only return participations with this status

        Returns:
            List of participations
        """
        pass

    @abstractmethod
    async def find_by_trips(self, trip_ids: Sequence[TripId]) -> List[Participation]:
        """Find participations of several trips in one query.

        Args:
            trip_ids: Trips to load

        Returns:
            Participations ordered by trip, then creation time
        """
        pass

    @abstractmethod
    async def find_by_user_and_trips(
        self, user_id: UserId, trip_ids: Sequence[TripId]
    ) -> List[Participation]:
        """Find a user's participations in several trips (batch query).

        Args:
            user_id: The user's ID
            trip_ids: Trips to check

        Returns:
            Participations of the user in the given trips
        """
        pass

    @abstractmethod
    async def save(self, participation: Participation) -> Participation:
        """Insert a participation.

        Args:
            participation: The participation to save

        Returns:
            The saved participation

        Raises:
            IntegrityError: If the (trip, user) pair already has a participation
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        participation_id: ParticipationId,
        expected: ParticipationStatus,
        new: ParticipationStatus,
    ) -> Optional[Participation]:
        """Compare-and-set the status of a participation.

        Args:
            participation_id: The participation to update
            expected: Status the row must currently have
            new: Status to write

        Returns:
            The updated participation, or None if the row is missing or its
            status was not ``expected``
        """
        pass
