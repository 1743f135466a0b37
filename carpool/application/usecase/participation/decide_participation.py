"""Decide participation use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from carpool.application.usecase.common import (
    ParticipationInfo,
    to_participation_info,
)
from carpool.domain.error import ValidationError
from carpool.domain.service import ParticipationService, UserService
from carpool.domain.value import Decision, ParticipationId, TripId, UserId


class DecideParticipationRequest(BaseModel):
    """Decide participation request."""

    trip_id: str  # UUID string
    participation_id: str  # UUID string
    decision: str  # "approved" or "rejected"
    user_id: str  # Current user ID (must be trip creator)


class DecideParticipationResponse(BaseModel):
    """Decide participation response."""

    participation: ParticipationInfo
    warnings: list[str] = Field(default_factory=list)


class DecideParticipationUseCase:
    """Use case for a trip creator approving or rejecting a join request."""

    def __init__(
        self, participation_service: ParticipationService, user_service: UserService
    ) -> None:
        """Initialize decide participation use case.

        Args:
            participation_service: Participation domain service
            user_service: User domain service
        """
        self.participation_service = participation_service
        self.user_service = user_service

    async def execute(
        self, request: DecideParticipationRequest
    ) -> DecideParticipationResponse:
        """Execute decide participation flow.

        Raises:
            ValidationError: If the decision is not approved or rejected
            NotFoundError: If the trip or participation does not exist
            NotAuthorizedError: If the caller is not the trip creator
            MismatchedTripError: If the participation belongs to another trip
            ParticipationAlreadyDecidedError: If a different decision was taken
        """
        try:
            decision = Decision(request.decision)
        except ValueError:
            raise ValidationError(
                "Invalid status. Must be either 'approved' or 'rejected'"
            )

        result = await self.participation_service.decide(
            trip_id=TripId(UUID(request.trip_id)),
            participation_id=ParticipationId(UUID(request.participation_id)),
            decision=decision,
            decider_id=UserId(UUID(request.user_id)),
        )
        profile = await self.user_service.get_public_profile(result.value.user_id)
        return DecideParticipationResponse(
            participation=to_participation_info(result.value, profile),
            warnings=result.warnings,
        )
