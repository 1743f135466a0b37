"""List trips use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from carpool.application.usecase.common import (
    ParticipationInfo,
    TripInfo,
    to_participation_info,
    to_trip_info,
)
from carpool.domain.service import ParticipationService, TripService, UserService
from carpool.domain.value import ParticipationStatus, UserId


class OwnParticipationInfo(BaseModel):
    """The caller's own participation in a listed trip."""

    participation_id: str
    status: ParticipationStatus
    created_at: datetime


class TripListItem(BaseModel):
    """Trip list item in response."""

    trip: TripInfo
    my_participation: OwnParticipationInfo | None
    participants: list[ParticipationInfo] | None  # Only on the caller's own trips


class ListTripsRequest(BaseModel):
    """List trips request."""

    user_id: str  # Current user ID


class ListTripsResponse(BaseModel):
    """List trips response."""

    trips: list[TripListItem]


class ListTripsUseCase:
    """Use case for browsing active trips."""

    def __init__(
        self,
        trip_service: TripService,
        participation_service: ParticipationService,
        user_service: UserService,
    ) -> None:
        """Initialize list trips use case.

        Args:
            trip_service: Trip domain service
            participation_service: Participation domain service
            user_service: User domain service
        """
        self.trip_service = trip_service
        self.participation_service = participation_service
        self.user_service = user_service

    async def execute(self, request: ListTripsRequest) -> ListTripsResponse:
        """Execute list trips flow.

        Active trips are ordered by departure time. Each trip carries the
        caller's participation, and trips the caller created also carry
        the full participant list.
        """
        with logfire.span("list_trips.execute", user_id=request.user_id):
            user_id = UserId(UUID(request.user_id))
            trips = await self.trip_service.list_active_trips()
            trip_ids = [trip.id for trip in trips]

            # Batch queries to avoid N+1
            own = await self.participation_service.find_own_participations(
                user_id, trip_ids
            )
            created_ids = [trip.id for trip in trips if trip.is_creator(user_id)]
            participants = await self.participation_service.find_for_trips(
                created_ids
            )

            profile_ids = [trip.creator_id for trip in trips]
            for participations in participants.values():
                profile_ids.extend(p.user_id for p in participations)
            profiles = await self.user_service.get_public_profiles(profile_ids)

            items = []
            for trip in trips:
                mine = own.get(trip.id)
                items.append(
                    TripListItem(
                        trip=to_trip_info(trip, profiles[trip.creator_id]),
                        my_participation=(
                            OwnParticipationInfo(
                                participation_id=str(mine.id),
                                status=mine.status,
                                created_at=mine.created_at,
                            )
                            if mine
                            else None
                        ),
                        participants=(
                            [
                                to_participation_info(p, profiles[p.user_id])
                                for p in participants[trip.id]
                            ]
                            if trip.id in participants
                            else None
                        ),
                    )
                )

            logfire.info("Trips listed", count=len(items))
            return ListTripsResponse(trips=items)
