"""Delete trip use case."""

from uuid import UUID

from pydantic import BaseModel

from carpool.domain.service import TripService
from carpool.domain.value import TripId, UserId


class DeleteTripRequest(BaseModel):
    """Delete trip request."""

    trip_id: str  # UUID string
    user_id: str  # Current user ID (must be creator)


class DeleteTripResponse(BaseModel):
    """Delete trip response."""

    trip_id: str
    deleted: bool


class DeleteTripUseCase:
    """Use case for deleting a trip with its participations and messages."""

    def __init__(self, trip_service: TripService) -> None:
        self.trip_service = trip_service

    async def execute(self, request: DeleteTripRequest) -> DeleteTripResponse:
        """Execute delete trip flow.

        Raises:
            NotFoundError: If the trip does not exist
            NotAuthorizedError: If the caller is not the creator
        """
        await self.trip_service.delete_trip(
            TripId(UUID(request.trip_id)), UserId(UUID(request.user_id))
        )
        return DeleteTripResponse(trip_id=request.trip_id, deleted=True)
