"""Trip repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from carpool.domain.model.trip import Trip
from carpool.domain.value import TripId


class TripRepository(ABC):
    """Repository for Trip aggregate.

    Defines the contract for trip persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, trip_id: TripId) -> Optional[Trip]:
        """Find a trip by ID.

        Args:
            trip_id: The trip's unique identifier

        Returns:
            The trip if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active(self) -> List[Trip]:
        """Find all active trips ordered by departure time (soonest first)."""
        pass

    @abstractmethod
    async def save(self, trip: Trip) -> Trip:
        """Insert a new trip.

        Args:
            trip: The trip to save

        Returns:
            The saved trip
        """
        pass

    @abstractmethod
    async def update(self, trip: Trip) -> Optional[Trip]:
        """Overwrite the mutable fields of an existing trip.

        Args:
            trip: Trip carrying the new field values

        Returns:
            The updated trip, or None if it no longer exists
        """
        pass

    @abstractmethod
    async def delete_cascade(self, trip_id: TripId) -> bool:
        """Delete a trip together with its participations and messages.

        Runs as a single unit of work: there is no observable state where
        the trip is gone but its participations remain.

        Args:
            trip_id: The trip to delete

        Returns:
            True if the trip existed and was deleted
        """
        pass
