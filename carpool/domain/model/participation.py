"""Participation entity.

One user's relationship to one trip. Created pending when a user asks to
join; the trip creator moves it to approved or rejected exactly once.
"""

from datetime import datetime

from pydantic import Field

from carpool.domain.model.common import DomainModel, utcnow
from carpool.domain.value import (
    ParticipationId,
    ParticipationStatus,
    TripId,
    UserId,
)


class Participation(DomainModel):
    """Participation entity.

    Business rules:
    - At most one participation per (trip, user) pair (database unique constraint)
    - A rejected user cannot ask again: the pair stays taken
    - No automatic transitions; only the trip creator decides
    - Deleted only together with its trip
    """

    id: ParticipationId
    trip_id: TripId
    user_id: UserId
    status: ParticipationStatus = ParticipationStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_approved(self) -> bool:
        return self.status == ParticipationStatus.APPROVED
