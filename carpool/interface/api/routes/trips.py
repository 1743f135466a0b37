"""Trip and participation routes."""

from datetime import datetime
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from carpool.application.usecase.auth import AuthenticateUseCase
from carpool.application.usecase.participation import (
    DecideParticipationRequest,
    DecideParticipationResponse,
    DecideParticipationUseCase,
    ListParticipantsRequest,
    ListParticipantsResponse,
    ListParticipantsUseCase,
    RequestJoinRequest,
    RequestJoinResponse,
    RequestJoinUseCase,
)
from carpool.application.usecase.trip import (
    CreateTripRequest,
    CreateTripResponse,
    CreateTripUseCase,
    DeleteTripRequest,
    DeleteTripResponse,
    DeleteTripUseCase,
    GetTripRequest,
    GetTripResponse,
    GetTripUseCase,
    ListTripsRequest,
    ListTripsResponse,
    ListTripsUseCase,
    UpdateTripRequest,
    UpdateTripResponse,
    UpdateTripUseCase,
)
from carpool.domain.value import TripStatus
from carpool.interface.api.auth import current_user

router = APIRouter(prefix="/trips", tags=["trips"], route_class=DishkaRoute)


class CreateTripAPIRequest(BaseModel):
    """API request for offering a trip."""

    departure_location: str = Field(min_length=1, max_length=255)
    destination: str = Field(min_length=1, max_length=255)
    departure_time: datetime
    available_seats: int
    description: str | None = None


class UpdateTripAPIRequest(BaseModel):
    """API request for changing a trip. Omitted fields stay as they are."""

    departure_location: str | None = Field(default=None, min_length=1, max_length=255)
    destination: str | None = Field(default=None, min_length=1, max_length=255)
    departure_time: datetime | None = None
    available_seats: int | None = None
    description: str | None = None
    status: TripStatus | None = None


class DecideAPIRequest(BaseModel):
    """API request for deciding on a join request."""

    status: str  # "approved" or "rejected"


@router.post("", response_model=CreateTripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    request: CreateTripAPIRequest,
    create_trip_use_case: FromDishka[CreateTripUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CreateTripResponse:
    """Offer a new trip.

    Requires authentication.
    """
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await create_trip_use_case.execute(
        CreateTripRequest(creator_id=user.user_id, **request.model_dump())
    )


@router.get("", response_model=ListTripsResponse)
async def list_trips(
    list_trips_use_case: FromDishka[ListTripsUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListTripsResponse:
    """List active trips, soonest departure first.

    Each trip carries the caller's participation; the caller's own trips
    also carry their participants.
    """
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await list_trips_use_case.execute(ListTripsRequest(user_id=user.user_id))


@router.get("/{trip_id}", response_model=GetTripResponse)
async def get_trip(
    trip_id: UUID,
    get_trip_use_case: FromDishka[GetTripUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetTripResponse:
    """Get a single trip."""
    await current_user(authenticate_use_case, auth_token, authorization)
    return await get_trip_use_case.execute(GetTripRequest(trip_id=str(trip_id)))


@router.patch("/{trip_id}", response_model=UpdateTripResponse)
async def update_trip(
    trip_id: UUID,
    request: UpdateTripAPIRequest,
    update_trip_use_case: FromDishka[UpdateTripUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> UpdateTripResponse:
    """Change trip details or status.

    Only the creator may update a trip. Approved participants are notified.
    """
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await update_trip_use_case.execute(
        UpdateTripRequest(
            trip_id=str(trip_id),
            user_id=user.user_id,
            **request.model_dump(exclude_unset=True),
        )
    )


@router.delete("/{trip_id}", response_model=DeleteTripResponse)
async def delete_trip(
    trip_id: UUID,
    delete_trip_use_case: FromDishka[DeleteTripUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> DeleteTripResponse:
    """Delete a trip together with its participations and messages."""
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await delete_trip_use_case.execute(
        DeleteTripRequest(trip_id=str(trip_id), user_id=user.user_id)
    )


@router.post(
    "/{trip_id}/join",
    response_model=RequestJoinResponse,
    status_code=status.HTTP_201_CREATED,
)
async def request_join(
    trip_id: UUID,
    request_join_use_case: FromDishka[RequestJoinUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RequestJoinResponse:
    """Ask to join a trip. The creator is notified."""
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await request_join_use_case.execute(
        RequestJoinRequest(trip_id=str(trip_id), user_id=user.user_id)
    )


@router.put(
    "/{trip_id}/participants/{participation_id}",
    response_model=DecideParticipationResponse,
)
async def decide_participation(
    trip_id: UUID,
    participation_id: UUID,
    request: DecideAPIRequest,
    decide_participation_use_case: FromDishka[DecideParticipationUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> DecideParticipationResponse:
    """Approve or reject a join request. Only the trip creator may decide."""
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await decide_participation_use_case.execute(
        DecideParticipationRequest(
            trip_id=str(trip_id),
            participation_id=str(participation_id),
            decision=request.status,
            user_id=user.user_id,
        )
    )


@router.get("/{trip_id}/participants", response_model=ListParticipantsResponse)
async def list_participants(
    trip_id: UUID,
    list_participants_use_case: FromDishka[ListParticipantsUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListParticipantsResponse:
    """List every join request of a trip. Only the trip creator may list."""
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await list_participants_use_case.execute(
        ListParticipantsRequest(trip_id=str(trip_id), user_id=user.user_id)
    )
