"""Trip aggregate root.

A trip is a ride offered by its creator. Other users ask to join it and
the creator decides who rides along.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from carpool.domain.model.common import DomainModel, utcnow
from carpool.domain.value import TripId, TripStatus, UserId

MIN_SEATS = 1
MAX_SEATS = 8
MAX_DESCRIPTION_LENGTH = 500


class Trip(DomainModel):
    """Trip aggregate root.

    Business rules:
    - creator_id never changes
    - Only the creator may update or delete the trip
    - departure_time is in the future when set (not re-checked later)
    - available_seats is between 1 and 8
    - status moves from active to completed or cancelled, and then stays
    """

    id: TripId
    creator_id: UserId
    departure_location: str = Field(min_length=1)
    destination: str = Field(min_length=1)
    departure_time: datetime
    available_seats: int = Field(ge=MIN_SEATS, le=MAX_SEATS)
    description: Optional[str] = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    status: TripStatus = TripStatus.ACTIVE
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def is_creator(self, user_id: UserId) -> bool:
        return self.creator_id == user_id

    @property
    def route_label(self) -> str:
        """Human readable route, used in notification texts."""
        return f"{self.departure_location} to {self.destination}"
