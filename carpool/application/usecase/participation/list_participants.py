"""List participants use case."""

from uuid import UUID

from pydantic import BaseModel

from carpool.application.usecase.common import (
    ParticipationInfo,
    to_participation_info,
)
from carpool.domain.service import ParticipationService, UserService
from carpool.domain.value import TripId, UserId


class ListParticipantsRequest(BaseModel):
    """List participants request."""

    trip_id: str  # UUID string
    user_id: str  # Current user ID (must be trip creator)


class ListParticipantsResponse(BaseModel):
    """List participants response."""

    participants: list[ParticipationInfo]


class ListParticipantsUseCase:
    """Use case for a trip creator reviewing all join requests."""

    def __init__(
        self, participation_service: ParticipationService, user_service: UserService
    ) -> None:
        self.participation_service = participation_service
        self.user_service = user_service

    async def execute(self, request: ListParticipantsRequest) -> ListParticipantsResponse:
        """Execute list participants flow.

        Raises:
            NotFoundError: If the trip does not exist
            NotAuthorizedError: If the caller is not the trip creator
        """
        participations = await self.participation_service.list_participants(
            TripId(UUID(request.trip_id)), UserId(UUID(request.user_id))
        )
        profiles = await self.user_service.get_public_profiles(
            [p.user_id for p in participations]
        )
        return ListParticipantsResponse(
            participants=[
                to_participation_info(p, profiles[p.user_id]) for p in participations
            ]
        )
