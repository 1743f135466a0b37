"""Create trip use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from carpool.application.usecase.common import TripInfo, to_trip_info
from carpool.domain.service import TripService, UserService
from carpool.domain.value import UserId


class CreateTripRequest(BaseModel):
    """Create trip request."""

    creator_id: str  # User ID from authenticated user
    departure_location: str
    destination: str
    departure_time: datetime
    available_seats: int
    description: str | None = None


class CreateTripResponse(BaseModel):
    """Create trip response."""

    trip: TripInfo


class CreateTripUseCase:
    """Use case for offering a new trip."""

    def __init__(self, trip_service: TripService, user_service: UserService) -> None:
        """Initialize create trip use case.

        Args:
            trip_service: Trip domain service
            user_service: User domain service
        """
        self.trip_service = trip_service
        self.user_service = user_service

    async def execute(self, request: CreateTripRequest) -> CreateTripResponse:
        """Execute create trip flow.

        Raises:
            ValidationError: If a trip field is invalid
        """
        creator_id = UserId(UUID(request.creator_id))
        trip = await self.trip_service.create_trip(
            creator_id=creator_id,
            departure_location=request.departure_location,
            destination=request.destination,
            departure_time=request.departure_time,
            available_seats=request.available_seats,
            description=request.description,
        )
        creator = await self.user_service.get_public_profile(creator_id)
        return CreateTripResponse(trip=to_trip_info(trip, creator))
