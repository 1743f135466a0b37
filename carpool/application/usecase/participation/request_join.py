"""Request join use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from carpool.application.usecase.common import (
    ParticipationInfo,
    to_participation_info,
)
from carpool.domain.service import ParticipationService, UserService
from carpool.domain.value import TripId, UserId


class RequestJoinRequest(BaseModel):
    """Request join request."""

    trip_id: str  # UUID string
    user_id: str  # Requesting user ID


class RequestJoinResponse(BaseModel):
    """Request join response."""

    participation: ParticipationInfo
    warnings: list[str] = Field(default_factory=list)


class RequestJoinUseCase:
    """Use case for asking to join a trip."""

    def __init__(
        self, participation_service: ParticipationService, user_service: UserService
    ) -> None:
        """Initialize request join use case.

        Args:
            participation_service: Participation domain service
            user_service: User domain service
        """
        self.participation_service = participation_service
        self.user_service = user_service

    async def execute(self, request: RequestJoinRequest) -> RequestJoinResponse:
        """Execute request join flow.

        Steps:
        1. Insert a pending participation (uniqueness enforced by the store)
        2. Notify the trip creator (failures come back as warnings)

        Raises:
            NotFoundError: If the trip does not exist
            SelfJoinDeniedError: If the caller created the trip
            DuplicateParticipationError: If the caller already asked
        """
        user_id = UserId(UUID(request.user_id))
        result = await self.participation_service.request_join(
            TripId(UUID(request.trip_id)), user_id
        )
        profile = await self.user_service.get_public_profile(user_id)
        return RequestJoinResponse(
            participation=to_participation_info(result.value, profile),
            warnings=result.warnings,
        )
