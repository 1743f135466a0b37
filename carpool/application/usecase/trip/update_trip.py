"""Update trip use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from carpool.application.usecase.common import TripInfo, to_trip_info
from carpool.domain.service import TripChanges, TripService, UserService
from carpool.domain.value import TripId, TripStatus, UserId


class UpdateTripRequest(BaseModel):
    """Update trip request. Fields left unset are not changed."""

    trip_id: str  # UUID string
    user_id: str  # Current user ID (must be creator)
    departure_location: str | None = None
    destination: str | None = None
    departure_time: datetime | None = None
    available_seats: int | None = None
    description: str | None = None
    status: TripStatus | None = None


class UpdateTripResponse(BaseModel):
    """Update trip response."""

    trip: TripInfo
    warnings: list[str] = Field(default_factory=list)


class UpdateTripUseCase:
    """Use case for a creator editing, completing or cancelling a trip."""

    def __init__(self, trip_service: TripService, user_service: UserService) -> None:
        """Initialize update trip use case.

        Args:
            trip_service: Trip domain service
            user_service: User domain service
        """
        self.trip_service = trip_service
        self.user_service = user_service

    async def execute(self, request: UpdateTripRequest) -> UpdateTripResponse:
        """Execute update trip flow.

        Raises:
            NotFoundError: If the trip does not exist
            NotAuthorizedError: If the caller is not the creator
            ValidationError: If a new value is invalid
            InvalidTripTransitionError: If the status change is not allowed
        """
        patch = request.model_dump(
            exclude={"trip_id", "user_id"}, exclude_unset=True
        )
        result = await self.trip_service.update_trip(
            TripId(UUID(request.trip_id)),
            UserId(UUID(request.user_id)),
            TripChanges(**patch),
        )
        creator = await self.user_service.get_public_profile(result.value.creator_id)
        return UpdateTripResponse(
            trip=to_trip_info(result.value, creator), warnings=result.warnings
        )
