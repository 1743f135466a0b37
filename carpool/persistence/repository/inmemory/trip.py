"""In-memory trip repository for testing."""

from typing import Optional

from carpool.domain.model.trip import Trip
from carpool.domain.repository.trip import TripRepository
from carpool.domain.value import TripId, TripStatus

from .store import InMemoryStore


class InMemoryTripRepository(TripRepository):
    """In-memory implementation of TripRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(self, trip_id: TripId) -> Optional[Trip]:
        """Find a trip by ID."""
        return self._store.trips.get(trip_id)

    async def find_active(self) -> list[Trip]:
        """Find active trips, soonest departure first."""
        active = [t for t in self._store.trips.values() if t.status == TripStatus.ACTIVE]
        return sorted(active, key=lambda t: (t.departure_time, str(t.id)))

    async def save(self, trip: Trip) -> Trip:
        """Insert a trip."""
        self._store.trips[trip.id] = trip
        return trip

    async def update(self, trip: Trip) -> Optional[Trip]:
        """Overwrite a trip's mutable fields."""
        existing = self._store.trips.get(trip.id)
        if existing is None:
            return None
        updated = trip.model_copy(
            update={
                "creator_id": existing.creator_id,
                "created_at": existing.created_at,
            }
        )
        self._store.trips[trip.id] = updated
        return updated

    async def delete_cascade(self, trip_id: TripId) -> bool:
        """Delete a trip with its participations and messages."""
        if self._store.trips.pop(trip_id, None) is None:
            return False
        self._store.participations = {
            pid: p
            for pid, p in self._store.participations.items()
            if p.trip_id != trip_id
        }
        self._store.messages = {
            mid: m for mid, m in self._store.messages.items() if m.trip_id != trip_id
        }
        return True
