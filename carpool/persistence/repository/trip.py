"""PostgreSQL implementation of Trip repository."""

from typing import List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from carpool.domain.model import Trip
from carpool.domain.repository import TripRepository
from carpool.domain.value import TripId, TripStatus
from carpool.persistence.mappers import row_to_trip, trip_to_dict
from carpool.persistence.tables import (
    messages_table,
    participations_table,
    trips_table,
)


class PostgresTripRepository(TripRepository):
    """PostgreSQL implementation of TripRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, trip_id: TripId) -> Optional[Trip]:
        """Find a trip by ID."""
        stmt = select(trips_table).where(trips_table.c.id == trip_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_trip(dict(row)) if row else None

    async def find_active(self) -> List[Trip]:
        """Find active trips, soonest departure first."""
        stmt = (
            select(trips_table)
            .where(trips_table.c.status == TripStatus.ACTIVE.value)
            .order_by(trips_table.c.departure_time, trips_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_trip(dict(row)) for row in result.mappings().all()]

    async def save(self, trip: Trip) -> Trip:
        """Insert a new trip."""
        stmt = insert(trips_table).values(**trip_to_dict(trip))
        await self.session.execute(stmt)
        await self.session.flush()
        return trip

    async def update(self, trip: Trip) -> Optional[Trip]:
        """Overwrite the mutable fields of a trip.

        Returns:
            Updated trip, or None if the row is gone
        """
        trip_dict = trip_to_dict(trip)
        # Identity and ownership never change
        for key in ("id", "creator_id", "created_at"):
            trip_dict.pop(key)

        stmt = (
            update(trips_table)
            .where(trips_table.c.id == trip.id)
            .values(**trip_dict)
            .returning(trips_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_trip(dict(row)) if row else None

    async def delete_cascade(self, trip_id: TripId) -> bool:
        """Delete a trip with its participations and messages.

        All three statements run in the request's transaction.
        """
        await self.session.execute(
            delete(messages_table).where(messages_table.c.trip_id == trip_id)
        )
        await self.session.execute(
            delete(participations_table).where(
                participations_table.c.trip_id == trip_id
            )
        )
        result = await self.session.execute(
            delete(trips_table).where(trips_table.c.id == trip_id)
        )
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
