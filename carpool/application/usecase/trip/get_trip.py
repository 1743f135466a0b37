"""Get trip use case."""

from uuid import UUID

from pydantic import BaseModel

from carpool.application.usecase.common import TripInfo, to_trip_info
from carpool.domain.service import TripService, UserService
from carpool.domain.value import TripId


class GetTripRequest(BaseModel):
    """Get trip request."""

    trip_id: str  # UUID string


class GetTripResponse(BaseModel):
    """Get trip response."""

    trip: TripInfo


class GetTripUseCase:
    """Use case for viewing a single trip."""

    def __init__(self, trip_service: TripService, user_service: UserService) -> None:
        self.trip_service = trip_service
        self.user_service = user_service

    async def execute(self, request: GetTripRequest) -> GetTripResponse:
        """Execute get trip flow.

        Raises:
            NotFoundError: If the trip does not exist
        """
        trip = await self.trip_service.get_trip(TripId(UUID(request.trip_id)))
        creator = await self.user_service.get_public_profile(trip.creator_id)
        return GetTripResponse(trip=to_trip_info(trip, creator))
