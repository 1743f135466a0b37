"""In-memory participation repository for testing."""

from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from carpool.domain.model.common import utcnow
from carpool.domain.model.participation import Participation
from carpool.domain.repository.participation import ParticipationRepository
from carpool.domain.value import (
    ParticipationId,
    ParticipationStatus,
    TripId,
    UserId,
)

from .store import InMemoryStore


class InMemoryParticipationRepository(ParticipationRepository):
    """In-memory implementation of ParticipationRepository for testing.

    ``save`` checks and inserts without awaiting in between, so it is atomic
    on the event loop just like the unique constraint in PostgreSQL.
    """

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    def _find(self, trip_id: TripId, user_id: UserId) -> Optional[Participation]:
        for participation in self._store.participations.values():
            if participation.trip_id == trip_id and participation.user_id == user_id:
                return participation
        return None

    async def find_by_id(
        self, participation_id: ParticipationId
    ) -> Optional[Participation]:
        """Find a participation by ID."""
        return self._store.participations.get(participation_id)

    async def find_by_trip_and_user(
        self, trip_id: TripId, user_id: UserId
    ) -> Optional[Participation]:
        """Find the participation of a user in a trip."""
        return self._find(trip_id, user_id)

    async def find_by_trip(
        self, trip_id: TripId, status: Optional[ParticipationStatus] = None
    ) -> list[Participation]:
        """Find participations of a trip ordered by creation time."""
        matches = [
            p
            for p in self._store.participations.values()
            if p.trip_id == trip_id and (status is None or p.status == status)
        ]
        return sorted(matches, key=lambda p: (p.created_at, str(p.id)))

    async def find_by_trips(self, trip_ids: Sequence[TripId]) -> list[Participation]:
        """Find participations of several trips."""
        wanted = set(trip_ids)
        matches = [
            p for p in self._store.participations.values() if p.trip_id in wanted
        ]
        return sorted(matches, key=lambda p: (str(p.trip_id), p.created_at, str(p.id)))

    async def find_by_user_and_trips(
        self, user_id: UserId, trip_ids: Sequence[TripId]
    ) -> list[Participation]:
        """Find a user's participations in several trips."""
        wanted = set(trip_ids)
        return [
            p
            for p in self._store.participations.values()
            if p.user_id == user_id and p.trip_id in wanted
        ]

    async def save(self, participation: Participation) -> Participation:
        """Insert a participation.

        Raises:
            IntegrityError: If the (trip, user) pair is taken
        """
        if self._find(participation.trip_id, participation.user_id):
            raise IntegrityError(
                "Duplicate participation", None, Exception("uq_participation_trip_user")
            )
        self._store.participations[participation.id] = participation
        return participation

    async def update_status(
        self,
        participation_id: ParticipationId,
        expected: ParticipationStatus,
        new: ParticipationStatus,
    ) -> Optional[Participation]:
        """Compare-and-set the status."""
        current = self._store.participations.get(participation_id)
        if current is None or current.status != expected:
            return None
        updated = current.model_copy(update={"status": new, "updated_at": utcnow()})
        self._store.participations[participation_id] = updated
        return updated
