"""PostgreSQL implementation of Participation repository."""

from typing import List, Optional, Sequence

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from carpool.domain.model import Participation
from carpool.domain.model.common import utcnow
from carpool.domain.repository import ParticipationRepository
from carpool.domain.value import (
    ParticipationId,
    ParticipationStatus,
    TripId,
    UserId,
)
from carpool.persistence.mappers import participation_to_dict, row_to_participation
from carpool.persistence.tables import participations_table


class PostgresParticipationRepository(ParticipationRepository):
    """PostgreSQL implementation of ParticipationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, participation_id: ParticipationId
    ) -> Optional[Participation]:
        """Find a participation by ID."""
        stmt = select(participations_table).where(
            participations_table.c.id == participation_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_participation(dict(row)) if row else None

    async def find_by_trip_and_user(
        self, trip_id: TripId, user_id: UserId
    ) -> Optional[Participation]:
        """Find the participation of a user in a trip."""
        stmt = select(participations_table).where(
            and_(
                participations_table.c.trip_id == trip_id,
                participations_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_participation(dict(row)) if row else None

    async def find_by_trip(
        self, trip_id: TripId, status: Optional[ParticipationStatus] = None
    ) -> List[Participation]:
        """Find participations of a trip ordered by creation time."""
        stmt = select(participations_table).where(
            participations_table.c.trip_id == trip_id
        )
        if status is not None:
            stmt = stmt.where(participations_table.c.status == status.value)
        stmt = stmt.order_by(
            participations_table.c.created_at, participations_table.c.id
        )
        result = await self.session.execute(stmt)
        return [row_to_participation(dict(row)) for row in result.mappings().all()]

    async def find_by_trips(self, trip_ids: Sequence[TripId]) -> List[Participation]:
        """Find participations of several trips with one IN query."""
        if not trip_ids:
            return []

        stmt = (
            select(participations_table)
            .where(participations_table.c.trip_id.in_(trip_ids))
            .order_by(
                participations_table.c.trip_id,
                participations_table.c.created_at,
                participations_table.c.id,
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_participation(dict(row)) for row in result.mappings().all()]

    async def find_by_user_and_trips(
        self, user_id: UserId, trip_ids: Sequence[TripId]
    ) -> List[Participation]:
        """Find a user's participations in several trips (batch query)."""
        if not trip_ids:
            return []

        stmt = select(participations_table).where(
            and_(
                participations_table.c.user_id == user_id,
                participations_table.c.trip_id.in_(trip_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_participation(dict(row)) for row in result.mappings().all()]

    async def save(self, participation: Participation) -> Participation:
        """Insert a participation.

        Raises:
            IntegrityError: If uq_participation_trip_user is violated
        """
        stmt = insert(participations_table).values(
            **participation_to_dict(participation)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return participation

    async def update_status(
        self,
        participation_id: ParticipationId,
        expected: ParticipationStatus,
        new: ParticipationStatus,
    ) -> Optional[Participation]:
        """Compare-and-set the status in one UPDATE ... WHERE status = expected."""
        stmt = (
            update(participations_table)
            .where(
                and_(
                    participations_table.c.id == participation_id,
                    participations_table.c.status == expected.value,
                )
            )
            .values(status=new.value, updated_at=utcnow())
            .returning(participations_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_participation(dict(row)) if row else None
